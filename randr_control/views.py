"""Semantic content of the wizard's list views.

Nothing here knows about styling or widgets: each stage is described as a
title, a sequence of ``Entry`` rows and the row to highlight.
"""
from __future__ import annotations
from dataclasses import dataclass, field

from .models import Display, Mode, Resolution

BACK_HINT = "Press 'esc' to go back"


@dataclass(frozen=True)
class Entry:
    label: str
    description: str = ""


@dataclass(frozen=True)
class Listing:
    title: str
    entries: tuple[Entry, ...] = field(default_factory=tuple)
    index: int = 0
    hint: str = ""


def _marker(current: bool) -> str:
    return "*" if current else " "


def display_status(display: Display) -> str:
    if not display.connected:
        return "disconnected"
    if display.current is None:
        return "connected"
    mode = display.current
    return f"connected - {mode.size} @ {mode.rate:.1f}Hz"


def resolution_label(resolution: Resolution) -> str:
    return f"{_marker(resolution.current)} {resolution.width}x{resolution.height}"


def rate_label(mode: Mode) -> str:
    return f"{_marker(mode.current)} {mode.rate:.1f} Hz"


def display_listing(displays: tuple[Display, ...], index: int = 0) -> Listing:
    entries = tuple(Entry(d.name, display_status(d)) for d in displays)
    return Listing("Select Display", entries, index)


def resolution_listing(display: Display, resolutions: list[Resolution], index: int = 0) -> Listing:
    entries = []
    for resolution in resolutions:
        rates = ", ".join(f"{m.rate:.1f}" for m in resolution.modes)
        entries.append(Entry(resolution_label(resolution), f"Available rates: {rates} Hz"))
    return Listing(f"Select Resolution for {display.name}", tuple(entries), index, BACK_HINT)


def rate_listing(resolution: Resolution) -> Listing:
    entries = tuple(Entry(rate_label(m)) for m in resolution.modes)
    return Listing(f"Select Refresh Rate for {resolution.width}x{resolution.height}", entries, 0, BACK_HINT)
