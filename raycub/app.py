"""The game window: input, frame loop and command line."""

from __future__ import annotations

import argparse
import os
import sys
import time
from array import array

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from raycub.controls import Key, QuitRequested, key_press, key_release  # noqa: E402
from raycub.engine import FpsCounter, engine_step  # noqa: E402
from raycub.image import Image  # noqa: E402
from raycub.world import HEIGHT, WIDTH, GameState, load_textures, new_game  # noqa: E402
from raycub.xpm import XpmError  # noqa: E402

_SPECIAL_KEYS: dict[int, int] = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_LSHIFT: Key.SHIFT,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Read the command line."""
    parser = argparse.ArgumentParser(
        prog="raycub", description="Walk through a multi-storey ray-cast world.")
    parser.add_argument("--textures", default="gfx",
                        help="directory holding the XPM textures (default: gfx)")
    return parser.parse_args(argv)


def keycode_from_pygame(key: int) -> int | None:
    """Turn a pygame key constant into the key symbol the game uses."""
    if key in _SPECIAL_KEYS:
        return int(_SPECIAL_KEYS[key])
    if 0 < key < 0x80:
        return key
    return None


def _to_surface(image: Image) -> pygame.Surface:
    data = array("I", ((p << 8) & 0xFFFFFFFF for p in image.pixels))
    if sys.byteorder == "little":
        data.byteswap()
    return pygame.image.frombuffer(data.tobytes(), (image.width, image.height),
                                   "RGBX")


def run(game: GameState) -> int:
    """Open the window and play until it is closed; return frames drawn."""
    pygame.init()
    try:
        display = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("raycub")
        fps = FpsCounter(int(time.time()))
        rendered = 0
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return rendered
                if event.type == pygame.KEYDOWN:
                    code = keycode_from_pygame(event.key)
                    if code is not None:
                        try:
                            key_press(game, code)
                        except QuitRequested:
                            return rendered
                elif event.type == pygame.KEYUP:
                    code = keycode_from_pygame(event.key)
                    if code is not None:
                        key_release(game, code)
            screen = engine_step(game)
            display.blit(_to_surface(screen), (0, 0))
            pygame.display.flip()
            rendered += 1
            report = fps.tick(int(time.time()))
            if report is not None:
                print(f"FPS = {report}")
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    """Start the game; return the process exit status."""
    args = parse_args(argv)
    try:
        textures = load_textures(args.textures)
    except (OSError, XpmError) as exc:
        print(f"raycub: cannot load textures: {exc}", file=sys.stderr)
        return 1
    run(new_game(textures))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())