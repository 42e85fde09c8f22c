from __future__ import annotations

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Label, ListItem, ListView, Static

from .models import Display
from .wizard import Step, Wizard, WizardState
from .xrandr.controller import ApplyResult, ModeApplier
from .xrandr.xrandr import Xrandr


class ApplyFinished(Message):
    def __init__(self, result: ApplyResult) -> None:
        self.result = result
        super().__init__()


class RandrApp(App):
    CSS = """
    #title {
        color: #ff5faf;
        text-style: bold;
        margin: 1 2 0 2;
    }
    #choices {
        height: 1fr;
    }
    #choices > ListItem {
        padding: 0 2;
    }
    #choices > ListItem.-highlight {
        color: #d75fd7;
    }
    .description, #hint, #message {
        color: #626262;
        margin: 0 2;
    }
    #body {
        margin: 1 4;
    }
    """

    BINDINGS = [
        Binding("enter", "confirm", "Select", priority=True),
        Binding("escape", "back", "Back"),
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        displays: list[Display] | None = None,
        error: str | None = None,
        xrandr: Xrandr | None = None,
    ):
        super().__init__()
        self.wizard = Wizard(displays or [])
        self.error = error
        self.applier = ModeApplier(lambda result: self.post_message(ApplyFinished(result)), xrandr)

    def compose(self) -> ComposeResult:
        yield Static(id="title", markup=False)
        yield ListView(id="choices")
        yield Static(id="body", markup=False)
        yield Static(id="hint", markup=False)
        yield Static(id="message", markup=False)

    async def on_mount(self) -> None:
        await self.refresh_view()

    async def refresh_view(self) -> None:
        title = self.query_one("#title", Static)
        choices = self.query_one("#choices", ListView)
        body = self.query_one("#body", Static)
        hint = self.query_one("#hint", Static)
        message = self.query_one("#message", Static)
        state = self.wizard.state

        if self.error is not None or self.wizard.finished:
            choices.display = False
            self.set_focus(None)
            hint.update("")
            message.update("")
            if self.error is not None:
                title.update("")
                body.update(f"Error: {self.error}\n\nPress any key to exit.")
            elif state == WizardState.APPLYING:
                title.update("Applying Changes...")
                body.update("Please wait...")
            else:
                title.update("Done!")
                body.update(self.wizard.message)
                hint.update("Press any key to exit")
            return

        listing = self.wizard.listing()
        title.update(listing.title)
        body.update("")
        hint.update(listing.hint)
        message.update(self.wizard.message if state == WizardState.SELECTING_DISPLAY else "")
        await choices.clear()
        await choices.extend(
            ListItem(Label(e.label, markup=False), Label(e.description, classes="description", markup=False))
            if e.description
            else ListItem(Label(e.label, markup=False))
            for e in listing.entries
        )
        choices.index = listing.index if listing.entries else None
        choices.focus()

    async def follow(self, step: Step) -> None:
        if step.exit:
            self.exit(return_code=0)
            return
        if step.apply is not None:
            self.applier.launch(step.apply)
        await self.refresh_view()

    def _exit_after_error(self) -> None:
        self.exit(return_code=1)

    async def action_confirm(self) -> None:
        if self.error is not None:
            self._exit_after_error()
            return
        await self.follow(self.wizard.confirm(self.query_one("#choices", ListView).index))

    async def action_back(self) -> None:
        if self.error is not None:
            self._exit_after_error()
            return
        await self.follow(self.wizard.back())

    async def action_quit(self) -> None:
        if self.error is not None:
            self._exit_after_error()
            return
        await self.follow(self.wizard.quit())

    async def on_key(self, event: events.Key) -> None:
        if self.error is not None:
            event.stop()
            self._exit_after_error()
        elif self.wizard.finished:
            event.stop()
            await self.follow(self.wizard.dismiss())

    async def on_apply_finished(self, message: ApplyFinished) -> None:
        await self.follow(self.wizard.apply_completed(message.result))
