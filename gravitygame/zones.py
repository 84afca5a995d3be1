"""Levels made of rectangular platforms, loaded from JSON level files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .defs import Rect
from .seajson import JArray, SeaJSONError, get_array, load_json, remove_whitespace

_log = logging.getLogger(__name__)


def _read_platforms(level: str) -> list[Rect]:
    platforms = get_array(level, "platforms")
    if platforms is None:
        return []
    rects = []
    for index in range(platforms.item_count):
        point = get_array(platforms.item(index), "point")
        if point is None:
            raise SeaJSONError(f"Platform {index} has no valid point array")
        compact: JArray = point.without_whitespace()
        rects.append(Rect(*(compact.int_item(n) for n in range(4))))
    return rects


def load_level(filename) -> list[Rect]:
    """Read the platforms of a compact (whitespace-free) level file."""
    _log.info('loading level "%s" ...', filename)
    rects = _read_platforms(load_json(filename))
    _log.info('loaded "%s".', filename)
    return rects


@dataclass
class Zone:
    """Platforms in world coordinates and their on-screen counterparts."""

    platforms: list[Rect] = field(default_factory=list)
    display: list[Rect] | None = None

    def __post_init__(self) -> None:
        if self.display is None:
            self.display = [rect.copy() for rect in self.platforms]
        if len(self.display) != len(self.platforms):
            raise ValueError("platforms and display must have the same length")

    @classmethod
    def from_file(cls, filename) -> Zone:
        """Load a level file, tolerating whitespace in its layout."""
        _log.info('loading level "%s" ...', filename)
        rects = _read_platforms(remove_whitespace(load_json(filename)))
        _log.info('loaded "%s".', filename)
        return cls(rects)

    def __len__(self) -> int:
        return len(self.platforms)

    def add(self, rect: Rect) -> None:
        """Place a new platform, shown where it lies in the world."""
        self.platforms.append(rect.copy())
        self.display.append(rect.copy())

    def remove(self, index: int) -> None:
        """Delete the platform at ``index``.

        The display rectangles of the platforms after it are reset to their
        world positions; scrolling moves them back on the next update.
        """
        del self.platforms[index]
        del self.display[index]
        start = index if index >= 0 else index + len(self.platforms) + 1
        for position in range(start, len(self.platforms)):
            self.display[position] = self.platforms[position].copy()