import math
from types import SimpleNamespace

import pytest

from raycub.controls import (
    KEY_MAX,
    Key,
    KeyState,
    QuitRequested,
    apply_controls,
    key_press,
    key_release,
)
from raycub.geometry import Player, Vec2, Vec3


def _player():
    return Player(pos=Vec3(1.5, 1.5, 1.61), look_dir=Vec2(0.6, 0.8),
                  cam_plane=Vec2(-0.8 * 0.66, 0.6 * 0.66), speed=0.05)


def _game():
    return SimpleNamespace(keys=KeyState(), player=_player())


def test_raw_key_codes_match_named_keys():
    game = _game()
    key_press(game, ord("w"))
    key_press(game, 0xFF51)
    assert game.keys.is_down(Key.W) is True
    assert game.keys.is_down(Key.LEFT) is True
    with pytest.raises(QuitRequested):
        key_press(game, 0xFF1B)


def test_keystate_round_trip():
    keys = KeyState()
    keys.press(Key.W)
    assert keys.is_down(Key.W)
    assert not keys.is_down(Key.S)
    keys.release(Key.W)
    assert not keys.is_down(Key.W)


def test_keystate_range():
    keys = KeyState()
    with pytest.raises(ValueError):
        keys.press(KEY_MAX)
    with pytest.raises(ValueError):
        keys.press(-1)
    keys.release(KEY_MAX)
    assert len(keys) == 0


def test_forward_then_back_returns():
    player = _player()
    keys = KeyState()
    keys.press(Key.W)
    apply_controls(keys, player)
    assert player.pos.y > 1.5
    keys.release(Key.W)
    keys.press(Key.S)
    apply_controls(keys, player)
    assert player.pos.x == pytest.approx(1.5)
    assert player.pos.y == pytest.approx(1.5)


def test_forward_follows_look_direction():
    player = _player()
    keys = KeyState()
    keys.press(Key.W)
    apply_controls(keys, player)
    dx, dy = player.pos.x - 1.5, player.pos.y - 1.5
    assert math.hypot(dx, dy) == pytest.approx(player.speed)
    assert dx * player.look_dir.y - dy * player.look_dir.x == pytest.approx(0.0)


def test_strafe_is_perpendicular_and_cancels():
    player = _player()
    keys = KeyState()
    keys.press(Key.A)
    apply_controls(keys, player)
    dx, dy = player.pos.x - 1.5, player.pos.y - 1.5
    assert dx * player.look_dir.x + dy * player.look_dir.y == pytest.approx(0.0)
    assert math.hypot(dx, dy) == pytest.approx(player.speed)
    keys.press(Key.D)
    keys.release(Key.A)
    apply_controls(keys, player)
    assert (player.pos.x, player.pos.y) == pytest.approx((1.5, 1.5))


def test_turn_right_rotates_by_angle():
    player = _player()
    before = math.atan2(player.look_dir.y, player.look_dir.x)
    plane_len = math.hypot(player.cam_plane.x, player.cam_plane.y)
    keys = KeyState()
    keys.press(Key.RIGHT)
    apply_controls(keys, player)
    after = math.atan2(player.look_dir.y, player.look_dir.x)
    assert after - before == pytest.approx(0.035)
    assert math.hypot(player.look_dir.x, player.look_dir.y) == pytest.approx(1.0)
    assert math.hypot(player.cam_plane.x, player.cam_plane.y) == pytest.approx(plane_len)


def test_left_undoes_right_and_right_wins():
    player = _player()
    keys = KeyState()
    keys.press(Key.RIGHT)
    apply_controls(keys, player)
    keys.release(Key.RIGHT)
    keys.press(Key.LEFT)
    apply_controls(keys, player)
    assert (player.look_dir.x, player.look_dir.y) == pytest.approx((0.6, 0.8))

    both = _player()
    only_right = _player()
    held_both = KeyState()
    held_both.press(Key.LEFT)
    held_both.press(Key.RIGHT)
    held_right = KeyState()
    held_right.press(Key.RIGHT)
    apply_controls(held_both, both)
    apply_controls(held_right, only_right)
    assert (both.look_dir.x, both.look_dir.y) == (only_right.look_dir.x,
                                                  only_right.look_dir.y)


def test_escape_quits():
    with pytest.raises(QuitRequested):
        key_press(_game(), Key.ESC)


def test_height_keys():
    game = _game()
    key_press(game, Key.Q)
    assert game.player.pos.z == pytest.approx(1.61 + 0.1)
    key_press(game, Key.E)
    assert game.player.pos.z == pytest.approx(1.61)


def test_pitch_keys_are_not_held():
    game = _game()
    key_press(game, Key.UP)
    key_press(game, Key.UP)
    key_press(game, Key.DOWN)
    assert game.player.pitch == 1
    assert not game.keys.is_down(Key.UP)


def test_press_and_release_movement_key():
    game = _game()
    key_press(game, Key.D)
    assert game.keys.is_down(Key.D)
    key_release(game, Key.D)
    assert not game.keys.is_down(Key.D)


def test_other_keys_change_nothing():
    game = _game()
    key_press(game, Key.SPACE)
    assert len(game.keys) == 0
    assert game.player.pos.z == 1.61
    assert game.player.pitch == 0