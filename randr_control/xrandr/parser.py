from __future__ import annotations
import re
from dataclasses import dataclass, replace

from ..models import Display, Mode


@dataclass(frozen=True)
class HeaderLine:
    name: str
    connected: bool


@dataclass(frozen=True)
class ModeLine:
    width: int
    height: int
    rates: str


_HEADER_RE = re.compile(r"^([A-Za-z0-9\-]+)\s+(connected|disconnected)\b")
_MODE_RE = re.compile(r"^\s+(\d+)x(\d+)\s+(.+)")
_RATE_RE = re.compile(r"([0-9.]+)(\*?)(\+?)")


def classify_line(line: str) -> HeaderLine | ModeLine | None:
    match = _HEADER_RE.match(line)
    if match:
        return HeaderLine(name=match.group(1), connected=match.group(2) == "connected")
    match = _MODE_RE.match(line)
    if match:
        return ModeLine(width=int(match.group(1)), height=int(match.group(2)), rates=match.group(3))
    return None


def parse_rates(text: str) -> list[tuple[float, bool]]:
    rates: list[tuple[float, bool]] = []
    for value, current, _preferred in _RATE_RE.findall(text):
        try:
            rate = float(value)
        except ValueError:
            continue
        rates.append((rate, current == "*"))
    return rates


class _DisplayBuilder:
    def __init__(self, name: str, connected: bool):
        self.name = name
        self.connected = connected
        self.modes: list[Mode] = []
        self.current: Mode | None = None

    def add(self, mode: Mode) -> None:
        if mode.current:
            # Only the last current mode of a display keeps the flag.
            self.modes = [replace(m, current=False) if m.current else m for m in self.modes]
            self.current = mode
        self.modes.append(mode)

    def build(self) -> Display:
        return Display(name=self.name, connected=self.connected, current=self.current, modes=tuple(self.modes))


def parse_query(output: str) -> list[Display]:
    displays: list[Display] = []
    current: _DisplayBuilder | None = None
    for line in output.splitlines():
        parsed = classify_line(line)
        if isinstance(parsed, HeaderLine):
            if current:
                displays.append(current.build())
            current = _DisplayBuilder(parsed.name, parsed.connected)
        elif isinstance(parsed, ModeLine) and current is not None and current.connected:
            for rate, is_current in parse_rates(parsed.rates):
                current.add(Mode(width=parsed.width, height=parsed.height, rate=rate, current=is_current))
    if current:
        displays.append(current.build())
    return displays
