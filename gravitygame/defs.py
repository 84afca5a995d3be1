"""Shared dimensions, physics constants and small geometry types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntFlag

# Window dimensions
SCREEN_WIDTH = 854
SCREEN_HEIGHT = 480

# Player dimensions and jump tuning
PLAYER_WIDTH = 20
PLAYER_HEIGHT = 20
PLAYER_JUMP_VELOCITY = 20.0
PLAYER_JUMP_MAX_HEIGHT = 150.0
PLAYER_JUMP_VELOCITY_PLUS_GRAVITY = 25.0

GRAVITY = 5
GRAVITY_MAX = 25

FORCE_CONTROLLER = False


@dataclass
class Rect:
    """An integer rectangle: top-left corner plus width and height."""

    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0

    def copy(self) -> Rect:
        """Return an independent copy of this rectangle."""
        return replace(self)


@dataclass
class PlayerPos:
    """The player's position in world coordinates."""

    x: int = 0
    y: int = 0


class CollisionType(IntFlag):
    """Sides of a platform an object is touching."""

    NOT_FOUND = 0
    UP = 1
    DOWN = 2
    LEFT = 4
    RIGHT = 8
    ANY = UP | DOWN | LEFT | RIGHT