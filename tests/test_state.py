import pytest

from gravitygame.collision import CAMERA_MIN_X, COYOTE_MAX, STARTING_PLATFORM_HEIGHT
from gravitygame.defs import (
    GRAVITY,
    PLAYER_HEIGHT,
    PLAYER_JUMP_VELOCITY,
    PLAYER_JUMP_VELOCITY_PLUS_GRAVITY,
    PLAYER_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    PlayerPos,
    Rect,
)
from gravitygame.state import GameState, InputState, SilentAudio
from gravitygame.zones import Zone


class RecordingAudio:
    def __init__(self):
        self.calls = []

    def pause(self):
        self.calls.append("pause")

    def resume(self):
        self.calls.append("resume")

    def jump(self):
        self.calls.append("jump")


START_X = SCREEN_WIDTH // 2 - PLAYER_WIDTH // 2
START_Y = SCREEN_HEIGHT - STARTING_PLATFORM_HEIGHT - PLAYER_HEIGHT


def make_state(platforms=(), world_x=0):
    audio = RecordingAudio()
    state = GameState(
        zone=Zone([p.copy() for p in platforms]),
        audio=audio,
        player_position=PlayerPos(world_x, 0),
    )
    return state, audio


def floor_under_player():
    return Rect(START_X - 50, START_Y + PLAYER_HEIGHT, 200, 20)


def test_default_state_matches_start_position():
    state = GameState()
    assert state.rect == Rect(START_X, START_Y, PLAYER_WIDTH, PLAYER_HEIGHT)
    assert state.gravity == GRAVITY - 3
    assert state.player_position.x == (640 - SCREEN_WIDTH) // 2
    assert state.running


def test_silent_audio_accepts_calls():
    audio = SilentAudio()
    assert [audio.pause(), audio.resume(), audio.jump()] == [None, None, None]


def test_flip_gravity_toggles_and_stops_jump():
    state, _ = make_state()
    state.gravity = 20
    state.flip_gravity()
    assert state.gravity_flipped
    assert state.did_hit_max_height
    assert state.gravity == GRAVITY - 3
    state.flip_gravity()
    assert not state.gravity_flipped


def test_flip_gravity_ignored_while_paused():
    state, _ = make_state()
    state.paused = True
    state.flip_gravity()
    assert not state.gravity_flipped
    assert not state.did_hit_max_height


def test_toggle_pause_drives_audio_and_cancels_placement():
    state, audio = make_state()
    state.toggle_pause()
    assert state.paused
    state.awaiting_next_rect = True
    state.toggle_pause()
    assert not state.paused
    assert not state.awaiting_next_rect
    assert audio.calls == ["pause", "resume"]


def test_two_left_clicks_place_normalised_platform():
    state, audio = make_state(world_x=0)
    assert state.left_click(100, 50) is None
    assert state.paused and state.awaiting_next_rect
    placed = state.left_click(60, 30)
    assert placed == Rect(60, 30, 100 - 60, 50 - 30)
    assert state.zone.platforms == [placed]
    assert state.zone.display == [placed]
    assert not state.paused and not state.awaiting_next_rect
    assert audio.calls == ["pause", "resume"]


def test_left_click_uses_world_offset():
    state, _ = make_state(world_x=30)
    state.left_click(10, 10)
    placed = state.left_click(50, 40)
    assert placed.x == 10 + 30
    assert placed.w == 50 - 10


def test_right_click_removes_platform_under_cursor():
    platform = Rect(100, 100, 50, 50)
    other = Rect(400, 100, 50, 50)
    state, _ = make_state([platform, other])
    assert state.right_click(125, 125) is True
    assert state.zone.platforms == [other]
    assert len(state.zone) == 1


def test_right_click_on_empty_space_removes_nothing():
    state, _ = make_state([Rect(100, 100, 50, 50)])
    assert state.right_click(700, 400) is False
    assert len(state.zone) == 1


def test_preview_follows_mouse_backwards():
    state, _ = make_state(world_x=0)
    state.left_click(100, 50)
    state.preview(60, 30)
    assert state.pending_rect_display == Rect(60, 30, 100 - 60, 50 - 30)
    state.preview(120, 70)
    assert state.pending_rect_display == Rect(100, 50, 120 - 100, 70 - 50)


def test_preview_does_nothing_when_not_placing():
    state, _ = make_state()
    state.preview(300, 300)
    assert state.pending_rect_display == Rect()


def test_scroll_moves_platforms_against_player():
    platform = Rect(500, 100, 50, 50)
    state, _ = make_state([platform], world_x=40)
    state.rect.x = 0
    state.scroll()
    assert state.zone.display[0].x == platform.x - 40
    assert state.rect.x == START_X


def test_scroll_past_camera_limit_moves_player_instead():
    platform = Rect(500, 100, 50, 50)
    state, _ = make_state([platform], world_x=CAMERA_MIN_X - 30)
    state.scroll()
    assert state.zone.display[0].x == platform.x
    assert state.rect.x == START_X - 30


def test_update_applies_gravity_when_falling():
    state, _ = make_state()
    state.update()
    assert state.rect.y == START_Y
    assert state.gravity == GRAVITY - 3 + 1
    previous = state.rect.y
    for _ in range(40):
        state.update()
        assert state.rect.y >= previous
        previous = state.rect.y
    assert state.rect.y > START_Y


def test_update_lands_on_platform():
    floor = floor_under_player()
    state, _ = make_state([floor])
    state.gravity = 20
    state.is_jumping = True
    state.update()
    assert state.rect.y == floor.y - PLAYER_HEIGHT
    assert state.coyote == COYOTE_MAX
    assert state.gravity == GRAVITY - 3
    assert not state.is_jumping


def test_coyote_counts_down_in_the_air():
    state, _ = make_state()
    state.coyote = 3
    state.update()
    assert state.coyote == 2


def test_jump_from_platform():
    floor = floor_under_player()
    state, audio = make_state([floor])
    state.update()
    state.apply_input(InputState(jump=True))
    assert state.is_jumping
    assert audio.calls == ["jump"]
    assert state.rect.y == int(floor.y - PLAYER_HEIGHT - PLAYER_JUMP_VELOCITY_PLUS_GRAVITY)
    assert state.jump_height == int(PLAYER_JUMP_VELOCITY)
    assert state.animation_index & 1


def test_releasing_jump_without_coyote_ends_jump():
    state, _ = make_state()
    state.apply_input(InputState())
    assert state.did_hit_max_height


def test_releasing_jump_with_coyote_keeps_jump():
    state, _ = make_state()
    state.coyote = COYOTE_MAX
    state.apply_input(InputState())
    assert not state.did_hit_max_height


def test_moving_right_accelerates_and_release_resets():
    state, _ = make_state()
    state.apply_input(InputState(right=True))
    assert state.player_position.x == 1
    assert state.rect.x == START_X
    assert state.move_progress == 1
    state.apply_input(InputState())
    assert state.move_progress == 0


def test_move_step_caps_after_long_press():
    state, _ = make_state()
    state.move_progress = 27
    state.apply_input(InputState(right=True))
    assert state.player_position.x == 10
    assert state.move_progress == 27


def test_left_and_right_set_look_direction():
    state, _ = make_state()
    state.apply_input(InputState(left=True))
    assert state.animation_index & 2
    assert state.player_position.x < 0
    state.apply_input(InputState(right=True))
    assert not state.animation_index & 2


def test_left_blocked_at_screen_edge():
    state, _ = make_state()
    state.rect.x = -PLAYER_WIDTH
    state.apply_input(InputState(left=True))
    assert state.player_position.x == 0


def test_moving_right_into_platform_is_pushed_back():
    wall = Rect(START_X + PLAYER_WIDTH + 1, START_Y - 5, 30, 30)
    state, _ = make_state([wall])
    state.move_progress = 26
    state.apply_input(InputState(right=True))
    assert state.player_position.x == wall.x - PLAYER_WIDTH - START_X
    assert state.rect.x == START_X


def test_gravity_flip_sets_sprite_bit():
    state, _ = make_state()
    state.flip_gravity()
    state.apply_input(InputState())
    assert state.animation_index == 4


def test_paused_input_is_ignored():
    state, _ = make_state()
    state.paused = True
    state.apply_input(InputState(right=True, jump=True))
    assert state.player_position.x == 0
    assert not state.did_hit_max_height


@pytest.mark.parametrize("flipped", [False, True])
def test_falling_respects_screen_bounds(flipped):
    state, _ = make_state()
    state.gravity_flipped = flipped
    for _ in range(500):
        state.update()
    assert -2 * SCREEN_HEIGHT - 10 <= state.rect.y <= 2 * SCREEN_HEIGHT + 10