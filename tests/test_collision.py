import pytest

from gravitygame.collision import (
    above_platform,
    above_platform_at_index,
    above_platform_nointersect,
    below_platform,
    below_platform_at_index,
    below_platform_nointersect,
    check_platform_collision,
    colliding_platform,
    get_collision_type,
    get_collision_type_for_platform,
)
from gravitygame.defs import PLAYER_HEIGHT, PLAYER_WIDTH, CollisionType, Rect
from gravitygame.zones import Zone


def player(x, y):
    return Rect(x, y, PLAYER_WIDTH, PLAYER_HEIGHT)


@pytest.fixture
def single():
    return Zone([Rect(100, 300, 200, 20)])


@pytest.fixture
def stacked():
    return Zone([Rect(0, 400, 500, 20), Rect(0, 300, 500, 20)])


def test_standing_on_top(single):
    obj = player(150, 300 - PLAYER_HEIGHT)
    assert get_collision_type(single, obj) == CollisionType.UP
    assert colliding_platform(single, CollisionType.UP, obj) == 0
    assert colliding_platform(single, CollisionType.DOWN, obj) is None
    assert check_platform_collision(single, obj)


def test_touching_underside(single):
    obj = player(150, 320)
    assert get_collision_type(single, obj) == CollisionType.DOWN
    assert get_collision_type_for_platform(single, 0, obj) == CollisionType.DOWN


def test_touching_left_edge(single):
    obj = player(100 - PLAYER_WIDTH, 305)
    assert get_collision_type(single, obj) == CollisionType.LEFT
    assert colliding_platform(single, CollisionType.LEFT, obj) == 0


def test_touching_right_edge(single):
    obj = player(300, 305)
    assert get_collision_type(single, obj) == CollisionType.RIGHT
    assert colliding_platform(single, CollisionType.ANY, obj) == 0


def test_far_away(single):
    obj = player(600, 50)
    assert get_collision_type(single, obj) == CollisionType.NOT_FOUND
    assert colliding_platform(single, CollisionType.ANY, obj) is None
    assert not check_platform_collision(single, obj)


def test_collision_uses_display_position():
    zone = Zone([Rect(100, 300, 200, 20)])
    zone.display[0].x -= 1000
    on_display = player(150 - 1000, 300 - PLAYER_HEIGHT)
    on_world = player(150, 300 - PLAYER_HEIGHT)
    assert get_collision_type(zone, on_display) == CollisionType.UP
    assert get_collision_type(zone, on_world) == CollisionType.NOT_FOUND


def test_collision_types_combine_across_platforms():
    zone = Zone([Rect(100, 300, 200, 20), Rect(100, 300 - 2 * PLAYER_HEIGHT, 200, 20)])
    obj = player(150, 300 - PLAYER_HEIGHT)
    result = get_collision_type(zone, obj)
    assert CollisionType.UP in result
    assert CollisionType.DOWN in result


def test_below_platform(stacked):
    assert below_platform(stacked, player(50, 250)) == 1
    assert below_platform(stacked, player(50, 350)) == 0
    assert below_platform(stacked, player(600, 250)) is None


def test_below_platform_empty_zone():
    assert below_platform(Zone(), player(0, 0)) is None


def test_above_platform(stacked):
    assert above_platform(stacked, player(50, 350)) == 1
    assert above_platform(stacked, player(50, 250)) is None


def test_below_nointersect_skips_partial_overlap(stacked):
    obj = player(50, 310)
    assert below_platform(stacked, obj) == 1
    assert below_platform_nointersect(stacked, obj) == 0


def test_above_nointersect_skips_partial_overlap(stacked):
    obj = player(50, 390)
    assert above_platform(stacked, obj) == 0
    assert above_platform_nointersect(stacked, obj) == 1


def test_below_at_index_ignores_x(stacked):
    assert below_platform_at_index(stacked, 1, player(9999, 250))
    assert not below_platform_at_index(stacked, 1, player(50, 400))


def test_above_at_index_ignores_x(stacked):
    assert above_platform_at_index(stacked, 0, player(-9999, 390))
    assert not above_platform_at_index(stacked, 0, player(50, 300))