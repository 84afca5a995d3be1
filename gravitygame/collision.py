"""Collision queries between a player-sized rectangle and a zone's platforms."""

from __future__ import annotations

from .defs import PLAYER_HEIGHT, PLAYER_WIDTH, CollisionType, Rect
from .zones import Zone

STARTING_PLATFORM_HEIGHT = 200
HACKY_WORKAROUND_FOR_COLLISION_BUG = True
COYOTE_MAX = 5
CAMERA_MIN_X = -200
LOCK_PLAYER_TO_CAMERA_MIN_X = True

_SLACK = 2 if HACKY_WORKAROUND_FOR_COLLISION_BUG else 0


def _half(value: int) -> int:
    """Halve an integer, truncating toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


def _overlaps_x(display: Rect, world_width: int, obj: Rect) -> bool:
    return obj.x + PLAYER_WIDTH > display.x and obj.x < display.x + world_width


def _contact(display: Rect, world_width: int, obj: Rect) -> CollisionType:
    kind = CollisionType.NOT_FOUND
    bottom = display.y + display.h
    if obj.y <= bottom and obj.y + PLAYER_HEIGHT >= display.y:
        if _overlaps_x(display, world_width, obj):
            if obj.y + _half(obj.h) < display.y + _half(display.h):
                kind |= CollisionType.UP
            else:
                kind |= CollisionType.DOWN
        if obj.y != bottom and obj.y + PLAYER_HEIGHT != display.y:
            right_edge = display.x + display.w
            if obj.x + PLAYER_WIDTH >= display.x and obj.x < display.x:
                kind |= CollisionType.LEFT
            if obj.x + PLAYER_WIDTH > right_edge and obj.x <= right_edge:
                kind |= CollisionType.RIGHT
    return kind


def _pairs(zone: Zone):
    return enumerate(zip(zone.display, zone.platforms))


def check_platform_collision(zone: Zone, obj: Rect) -> bool:
    """Return True if ``obj`` overlaps or touches any platform."""
    return any(
        obj.y + PLAYER_HEIGHT >= display.y
        and _overlaps_x(display, world.w, obj)
        and obj.y <= display.y + display.h
        for display, world in zip(zone.display, zone.platforms)
    )


def colliding_platform(zone: Zone, kind: CollisionType, obj: Rect) -> int | None:
    """Return the index of the first platform touched on any side in ``kind``."""
    for index, (display, world) in _pairs(zone):
        if _contact(display, world.w, obj) & kind:
            return index
    return None


def get_collision_type(zone: Zone, obj: Rect) -> CollisionType:
    """Return every side ``obj`` touches across all platforms."""
    kind = CollisionType.NOT_FOUND
    for display, world in zip(zone.display, zone.platforms):
        kind |= _contact(display, world.w, obj)
    return kind


def get_collision_type_for_platform(zone: Zone, index: int, obj: Rect) -> CollisionType:
    """Return the sides of platform ``index`` that ``obj`` touches."""
    return _contact(zone.display[index], zone.platforms[index].w, obj)


def _highest(zone: Zone, obj: Rect, accept) -> int | None:
    best: int | None = None
    for index, (display, world) in _pairs(zone):
        if _overlaps_x(display, world.w, obj) and accept(display):
            if best is None or display.y < zone.display[best].y:
                best = index
    return best


def _lowest(zone: Zone, obj: Rect, accept) -> int | None:
    best: int | None = None
    for index, (display, world) in _pairs(zone):
        if _overlaps_x(display, world.w, obj) and accept(display):
            if best is None or display.y > zone.display[best].y:
                best = index
    return best


def below_platform(zone: Zone, obj: Rect) -> int | None:
    """Return the topmost platform under ``obj``, counting ones it is partly inside."""
    return _highest(zone, obj, lambda d: d.y + d.h > obj.y + _SLACK)


def above_platform(zone: Zone, obj: Rect) -> int | None:
    """Return the lowest platform above the bottom of ``obj``."""
    bottom = obj.y + PLAYER_HEIGHT - _SLACK
    return _lowest(zone, obj, lambda d: d.y < bottom)


def below_platform_nointersect(zone: Zone, obj: Rect) -> int | None:
    """Like :func:`below_platform`, but ignoring platforms ``obj`` is partly inside."""
    return _highest(zone, obj, lambda d: d.y > obj.y + _SLACK)


def above_platform_nointersect(zone: Zone, obj: Rect) -> int | None:
    """Like :func:`above_platform`, but ignoring platforms ``obj`` is partly inside."""
    top = obj.y - _SLACK
    return _lowest(zone, obj, lambda d: d.y < top)


def below_platform_at_index(zone: Zone, index: int, obj: Rect) -> bool:
    """Return True if ``obj`` is vertically below platform ``index``; x is ignored."""
    platform = zone.display[index]
    return platform.y + platform.h > obj.y + _SLACK


def above_platform_at_index(zone: Zone, index: int, obj: Rect) -> bool:
    """Return True if ``obj`` is vertically above platform ``index``; x is ignored."""
    return zone.display[index].y < obj.y + PLAYER_HEIGHT - _SLACK