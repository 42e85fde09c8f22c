from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from .models import Display, Resolution, group_resolutions
from .views import Listing, display_listing, rate_listing, resolution_listing
from .xrandr.controller import ApplyRequest, ApplyResult

log = logging.getLogger(__name__)

NOT_CONNECTED_MESSAGE = "Display not connected!"
APPLYING_MESSAGE = "Applying changes..."
SUCCESS_MESSAGE = "✓ Display settings applied successfully!"


class WizardState(Enum):
    SELECTING_DISPLAY = "selecting_display"
    SELECTING_RESOLUTION = "selecting_resolution"
    SELECTING_REFRESH_RATE = "selecting_refresh_rate"
    APPLYING = "applying"
    DONE = "done"


TERMINAL_STATES = (WizardState.APPLYING, WizardState.DONE)


class SelectionError(Exception):
    pass


@dataclass(frozen=True)
class Step:
    exit: bool = False
    apply: ApplyRequest | None = None


STAY = Step()
EXIT = Step(exit=True)


class Wizard:
    """Display -> resolution -> refresh rate -> apply.

    Each input method returns a ``Step`` for the event loop: whether to exit
    and whether to launch the apply action. Resolution and refresh-rate views
    are derived from the displays and the selected indices on every call.
    """

    def __init__(self, displays: list[Display] | tuple[Display, ...]):
        self.displays: tuple[Display, ...] = tuple(displays)
        self.state = WizardState.SELECTING_DISPLAY
        self.selected_display = 0
        self.selected_resolution = 0
        self.message = ""
        self._applied = False

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def display(self) -> Display:
        return self.displays[self.selected_display]

    @property
    def resolutions(self) -> list[Resolution]:
        return group_resolutions(self.display)

    def listing(self) -> Listing:
        if self.state == WizardState.SELECTING_RESOLUTION:
            return resolution_listing(self.display, self.resolutions, self.selected_resolution)
        if self.state == WizardState.SELECTING_REFRESH_RATE:
            return rate_listing(self.resolutions[self.selected_resolution])
        return display_listing(self.displays, self.selected_display)

    def confirm(self, index: int | None) -> Step:
        if self.finished:
            return EXIT
        index = index or 0
        if self.state == WizardState.SELECTING_DISPLAY:
            if not self.displays:
                return EXIT
            if index >= len(self.displays):
                return STAY
            try:
                self._select_display(index)
            except SelectionError as exc:
                self.message = str(exc)
            return STAY
        if self.state == WizardState.SELECTING_RESOLUTION:
            if index >= len(self.resolutions):
                return STAY
            self.selected_resolution = index
            self.state = WizardState.SELECTING_REFRESH_RATE
            return STAY
        resolution = self.resolutions[self.selected_resolution]
        if index >= len(resolution.modes) or self._applied:
            return STAY
        self._applied = True
        self.state = WizardState.APPLYING
        self.message = APPLYING_MESSAGE
        return Step(apply=ApplyRequest(self.display.name, resolution.modes[index]))

    def _select_display(self, index: int) -> None:
        display = self.displays[index]
        if not display.connected:
            raise SelectionError(NOT_CONNECTED_MESSAGE)
        if index != self.selected_display:
            self.selected_resolution = 0
        self.selected_display = index
        self.message = ""
        self.state = WizardState.SELECTING_RESOLUTION
        log.debug("selected display %s", display.name)

    def back(self) -> Step:
        if self.finished:
            return EXIT
        if self.state == WizardState.SELECTING_RESOLUTION:
            self.state = WizardState.SELECTING_DISPLAY
            self.message = ""
        elif self.state == WizardState.SELECTING_REFRESH_RATE:
            self.state = WizardState.SELECTING_RESOLUTION
        return STAY

    def quit(self) -> Step:
        return EXIT

    def dismiss(self) -> Step:
        return EXIT if self.finished else STAY

    def apply_completed(self, result: ApplyResult) -> Step:
        if self.state != WizardState.APPLYING:
            return STAY
        self.state = WizardState.DONE
        self.message = SUCCESS_MESSAGE if result.ok else f"Error: {result.error}"
        return STAY
