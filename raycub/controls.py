"""Keyboard state and how keys move the player."""

from __future__ import annotations

import math
from enum import IntEnum

from raycub.geometry import Player

KEY_MAX = 65536
TURN_ANGLE = 0.035
HEIGHT_STEP = 0.1


class Key(IntEnum):
    """Key symbols the game reacts to."""

    UP = 0xFF52
    DOWN = 0xFF54
    LEFT = 0xFF51
    RIGHT = 0xFF53
    W = 0x0077
    A = 0x0061
    S = 0x0073
    D = 0x0064
    SPACE = 0x0020
    C = 0x0063
    SHIFT = 0xFFE1
    F = 0x0066
    Q = 0x0071
    E = 0x0065
    ESC = 0xFF1B


_HELD_KEYS = frozenset({Key.LEFT, Key.RIGHT, Key.W, Key.A, Key.S, Key.D})


class QuitRequested(Exception):
    """Raised when the player asks to leave the game."""


class KeyState:
    """The set of keys currently held down."""

    def __init__(self) -> None:
        self._down: set[int] = set()

    def press(self, keycode: int) -> None:
        """Mark a key as held."""
        if not 0 <= keycode < KEY_MAX:
            raise ValueError(f"key code out of range: {keycode}")
        self._down.add(keycode)

    def release(self, keycode: int) -> None:
        """Mark a key as released; out-of-range codes are ignored."""
        self._down.discard(keycode)

    def is_down(self, keycode: int) -> bool:
        """Tell whether a key is held."""
        return keycode in self._down

    def __len__(self) -> int:
        return len(self._down)


def _move(keys: KeyState, player: Player) -> None:
    look = player.look_dir
    pos = player.pos
    step = player.speed
    if keys.is_down(Key.W):
        pos.x += look.x * step
        pos.y += look.y * step
    if keys.is_down(Key.A):
        pos.x += look.y * step
        pos.y -= look.x * step
    if keys.is_down(Key.S):
        pos.x -= look.x * step
        pos.y -= look.y * step
    if keys.is_down(Key.D):
        pos.x -= look.y * step
        pos.y += look.x * step


def _turn(keys: KeyState, player: Player) -> None:
    if keys.is_down(Key.RIGHT):
        angle = TURN_ANGLE
    elif keys.is_down(Key.LEFT):
        angle = -TURN_ANGLE
    else:
        return
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    for vec in (player.look_dir, player.cam_plane):
        vec.x, vec.y = vec.x * cos_a - vec.y * sin_a, vec.x * sin_a + vec.y * cos_a


def apply_controls(keys: KeyState, player: Player) -> None:
    """Move and turn the player according to the held keys."""
    _move(keys, player)
    _turn(keys, player)


def key_press(game, keycode: int) -> None:
    """React to a key going down.

    Escape raises QuitRequested; movement and turning keys are held;
    Q and E change height and the arrow keys up and down change pitch.
    """
    if keycode == Key.ESC:
        raise QuitRequested()
    if keycode in _HELD_KEYS:
        game.keys.press(keycode)
    elif keycode == Key.Q:
        game.player.pos.z += HEIGHT_STEP
    elif keycode == Key.E:
        game.player.pos.z -= HEIGHT_STEP
    elif keycode == Key.UP:
        game.player.pitch += 1
    elif keycode == Key.DOWN:
        game.player.pitch -= 1


def key_release(game, keycode: int) -> None:
    """React to a key going up."""
    game.keys.release(keycode)