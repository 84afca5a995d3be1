"""Game state and the rules that move the player through a zone."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from .collision import (
    CAMERA_MIN_X,
    COYOTE_MAX,
    LOCK_PLAYER_TO_CAMERA_MIN_X,
    STARTING_PLATFORM_HEIGHT,
    above_platform_at_index,
    above_platform_nointersect,
    below_platform_at_index,
    below_platform_nointersect,
    colliding_platform,
    get_collision_type,
    get_collision_type_for_platform,
)
from .defs import (
    GRAVITY,
    GRAVITY_MAX,
    PLAYER_HEIGHT,
    PLAYER_JUMP_MAX_HEIGHT,
    PLAYER_JUMP_VELOCITY,
    PLAYER_JUMP_VELOCITY_PLUS_GRAVITY,
    PLAYER_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    CollisionType,
    PlayerPos,
    Rect,
)
from .zones import Zone

_log = logging.getLogger(__name__)

PLAYER_SCREEN_X = SCREEN_WIDTH // 2 - PLAYER_WIDTH // 2
PLAYER_START_Y = SCREEN_HEIGHT - STARTING_PLATFORM_HEIGHT - PLAYER_HEIGHT
PLAYER_START_WORLD_X = -((SCREEN_WIDTH - 640) // 2)
RESTING_GRAVITY = GRAVITY - 3

# Bits of the sprite index.
ANIM_JUMP = 0x1
ANIM_LOOK_LEFT = 0x2
ANIM_GRAVITY_FLIP = 0x4

_MAX_MOVE_PROGRESS = 27
_MAX_MOVE_STEP = 10


class _Audio(Protocol):
    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def jump(self) -> None: ...


@dataclass
class SilentAudio:
    """An audio sink that plays nothing but keeps track of what it was asked."""

    paused: bool = False
    jumps: int = 0

    def pause(self) -> None:
        """Mark all sound as paused."""
        self.paused = True

    def resume(self) -> None:
        """Mark all sound as playing again."""
        self.paused = False

    def jump(self) -> None:
        """Count one request for the jump effect."""
        self.jumps += 1


@dataclass(frozen=True)
class InputState:
    """Which movement controls are held during a frame."""

    left: bool = False
    right: bool = False
    jump: bool = False


def _starting_rect() -> Rect:
    return Rect(PLAYER_SCREEN_X, PLAYER_START_Y, PLAYER_WIDTH, PLAYER_HEIGHT)


def _starting_position() -> PlayerPos:
    return PlayerPos(PLAYER_START_WORLD_X, 0)


@dataclass
class GameState:
    """Everything that changes while the game runs, apart from rendering."""

    zone: Zone = field(default_factory=Zone)
    audio: _Audio = field(default_factory=SilentAudio)
    rect: Rect = field(default_factory=_starting_rect)
    player_position: PlayerPos = field(default_factory=_starting_position)
    running: bool = True
    paused: bool = False
    awaiting_next_rect: bool = False
    pending_rect: Rect = field(default_factory=Rect)
    pending_rect_display: Rect = field(default_factory=Rect)
    coyote: int = 0
    did_hit_max_height: bool = False
    is_jumping: bool = False
    jump_height: int = 0
    move_progress: int = 0
    gravity_flipped: bool = False
    gravity: int = RESTING_GRAVITY
    animation_index: int = 0

    def flip_gravity(self) -> None:
        """Reverse gravity unless the game is paused."""
        if self.paused:
            return
        self.gravity_flipped = not self.gravity_flipped
        self.gravity = RESTING_GRAVITY
        # Stop the player from jumping any higher.
        self.did_hit_max_height = True

    def toggle_pause(self) -> None:
        """Pause or unpause, cancelling a half-placed platform on unpause."""
        if self.paused:
            self.paused = False
            self.audio.resume()
            if self.awaiting_next_rect:
                _log.info("Normal unpause, cancelled next rect.")
                self.awaiting_next_rect = False
        else:
            self.paused = True
            self.audio.pause()

    def left_click(self, x: int, y: int) -> Rect | None:
        """Start or finish placing a platform; return the platform once placed."""
        _log.info("Left click at (%d, %d)", x, y)
        pending = self.pending_rect
        if self.awaiting_next_rect:
            self.awaiting_next_rect = False
            pending.w = x - pending.x + self.player_position.x
            if pending.w < 0:
                pending.x += pending.w
                pending.w = -pending.w
            pending.h = y - pending.y
            if pending.h < 0:
                pending.y += pending.h
                pending.h = -pending.h
            self.zone.add(pending)
            _log.info(
                "Placed platform (%d,%d,%d,%d), and unpaused.",
                pending.x, pending.y, pending.w, pending.h,
            )
            if self.paused:
                self.audio.resume()
                self.paused = False
            return pending.copy()
        _log.info("Paused game. Click the second point of the new platform.")
        self.awaiting_next_rect = True
        pending.x = x + self.player_position.x
        pending.y = y
        if not self.paused:
            self.audio.pause()
            self.paused = True
        self.pending_rect_display = pending.copy()
        return None

    def right_click(self, x: int, y: int) -> bool:
        """Remove the platform under the click; return True if one was removed."""
        _log.info("Right click at (%d, %d)", x, y)
        click = Rect(x - 2, y - 2, 4, 4)
        index = colliding_platform(self.zone, CollisionType.ANY, click)
        if index is None:
            return False
        self.zone.remove(index)
        _log.info("Removed platform.")
        return True

    def preview(self, mouse_x: int, mouse_y: int) -> None:
        """Stretch the on-screen preview of the platform being placed to the mouse."""
        if not self.awaiting_next_rect:
            return
        pending = self.pending_rect
        shown = self.pending_rect_display
        shown.w = mouse_x - pending.x + self.player_position.x
        if shown.w < 0:
            shown.x = pending.x - self.player_position.x + shown.w
            shown.w = -shown.w
        else:
            shown.x = pending.x - self.player_position.x
        shown.h = mouse_y - pending.y
        if shown.h < 0:
            shown.y = pending.y + shown.h
            shown.h = -shown.h
        else:
            shown.y = pending.y

    def _step(self) -> int:
        if self.move_progress >= _MAX_MOVE_PROGRESS:
            return _MAX_MOVE_STEP
        self.move_progress += 1
        return 1 + self.move_progress // 3

    def _move_left(self) -> None:
        self.animation_index |= ANIM_LOOK_LEFT
        if LOCK_PLAYER_TO_CAMERA_MIN_X and self.rect.x + self.rect.w <= 0:
            return
        if get_collision_type(self.zone, self.rect) & CollisionType.RIGHT:
            return
        change = self._step()
        self.player_position.x -= change
        self.rect.x -= change
        bad = colliding_platform(self.zone, CollisionType.RIGHT, self.rect)
        if bad is not None:
            platform = self.zone.display[bad]
            self.player_position.x += platform.x + platform.w - self.rect.x
        self.rect.x += change

    def _move_right(self) -> None:
        self.animation_index &= ~ANIM_LOOK_LEFT & 0xF
        if get_collision_type(self.zone, self.rect) & CollisionType.LEFT:
            return
        change = self._step()
        self.player_position.x += change
        self.rect.x += change
        bad = colliding_platform(self.zone, CollisionType.LEFT, self.rect)
        if bad is not None:
            platform = self.zone.display[bad]
            self.player_position.x -= self.rect.x - (platform.x - PLAYER_WIDTH)
        self.rect.x -= change

    def _try_start_jump(self) -> None:
        kind = get_collision_type(self.zone, self.rect)
        grounded = (
            kind & CollisionType.DOWN if self.gravity_flipped else kind & CollisionType.UP
        )
        if grounded or self.coyote:
            self.coyote = 0
            if not (kind & CollisionType.UP and kind & CollisionType.DOWN):
                self.is_jumping = True
                self.audio.jump()

    def _rise(self) -> None:
        self.animation_index |= ANIM_JUMP
        lift = PLAYER_JUMP_VELOCITY_PLUS_GRAVITY - 0.3 * self.jump_height
        if not self.gravity_flipped:
            ceiling = above_platform_nointersect(self.zone, self.rect)
            self.rect.y = int(self.rect.y - lift)
            if ceiling is not None and below_platform_at_index(self.zone, ceiling, self.rect):
                platform = self.zone.display[ceiling]
                self.rect.y = platform.y + platform.h
                self.is_jumping = False
                self.coyote = 0
        else:
            ceiling = below_platform_nointersect(self.zone, self.rect)
            self.rect.y = int(self.rect.y + lift)
            if ceiling is not None and above_platform_at_index(self.zone, ceiling, self.rect):
                self.rect.y = self.zone.display[ceiling].y - PLAYER_HEIGHT
                self.is_jumping = False
                self.coyote = 0
        self.jump_height = int(
            self.jump_height + (PLAYER_JUMP_VELOCITY - self.jump_height // 4)
        )
        if self.jump_height >= PLAYER_JUMP_MAX_HEIGHT:
            self.did_hit_max_height = True

    def apply_input(self, inputs: InputState) -> None:
        """Move and jump the player according to the held controls."""
        if self.paused:
            return
        if inputs.left:
            self._move_left()
        if inputs.right:
            self._move_right()
        elif not inputs.left:
            self.move_progress = 0

        self.animation_index &= ~ANIM_GRAVITY_FLIP & 0xF
        if self.gravity_flipped:
            self.animation_index |= ANIM_GRAVITY_FLIP
        self.animation_index &= ~ANIM_JUMP & 0xF

        if inputs.jump:
            if not self.did_hit_max_height:
                if not self.is_jumping:
                    self._try_start_jump()
                if self.is_jumping:
                    self._rise()
        elif not self.coyote:
            # Letting go mid-jump fixes the jump's height until the next landing.
            self.did_hit_max_height = True

    def scroll(self) -> None:
        """Move platforms on screen to follow the player, up to the camera limit."""
        self.rect.x = PLAYER_SCREEN_X
        if self.player_position.x > CAMERA_MIN_X:
            for shown, world in zip(self.zone.display, self.zone.platforms):
                shown.x = world.x - self.player_position.x
        else:
            self.rect.x += self.player_position.x - CAMERA_MIN_X

    def update(self) -> None:
        """Advance one frame: scroll, apply gravity and land on platforms."""
        self.scroll()
        kind = CollisionType.DOWN if self.gravity_flipped else CollisionType.UP
        landed = colliding_platform(self.zone, kind, self.rect)
        if landed is None:
            if self.gravity_flipped:
                if self.rect.y > -2 * SCREEN_HEIGHT:
                    self.rect.y -= self.gravity // 3
            elif self.rect.y < 2 * SCREEN_HEIGHT:
                self.rect.y += self.gravity // 3
            landed = colliding_platform(self.zone, kind, self.rect)
            if self.gravity <= GRAVITY_MAX:
                self.gravity += 1

        if landed is not None:
            contact = get_collision_type_for_platform(self.zone, landed, self.rect)
            self.is_jumping = False
            self.did_hit_max_height = False
            self.jump_height = 0
            self.gravity = RESTING_GRAVITY
            self.coyote = COYOTE_MAX
            platform = self.zone.display[landed]
            if contact & CollisionType.UP:
                self.rect.y = platform.y - PLAYER_HEIGHT
            else:
                self.rect.y = platform.y + platform.h
        elif self.coyote and not self.is_jumping:
            self.coyote -= 1