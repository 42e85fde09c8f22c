from __future__ import annotations
from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class Mode:
    width: int
    height: int
    rate: float
    current: bool = False

    @property
    def size(self) -> str:
        return f"{self.width}x{self.height}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Display:
    name: str
    connected: bool
    current: Mode | None = None
    modes: tuple[Mode, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "connected": self.connected,
            "current": self.current.to_dict() if self.connected and self.current else None,
            "modes": [m.to_dict() for m in self.modes],
        }


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int
    modes: tuple[Mode, ...]

    @property
    def pixels(self) -> int:
        return self.width * self.height

    @property
    def current(self) -> bool:
        return any(m.current for m in self.modes)


def group_resolutions(display: Display) -> list[Resolution]:
    """Group a display's modes by size, largest first, rates descending."""
    groups: dict[tuple[int, int], list[Mode]] = {}
    for mode in display.modes:
        groups.setdefault((mode.width, mode.height), []).append(mode)
    resolutions = [
        Resolution(width, height, tuple(sorted(modes, key=lambda m: m.rate, reverse=True)))
        for (width, height), modes in groups.items()
    ]
    resolutions.sort(key=lambda r: r.pixels, reverse=True)
    return resolutions
