"""Drawing a frame: sky, floors and walls of every level."""

from __future__ import annotations

import math
from dataclasses import dataclass

from raycub.controls import apply_controls
from raycub.geometry import Level, Tile, Vec2
from raycub.image import Image
from raycub.ray import (
    DEFAULT_FLOOR_COLOR,
    FIX_PIXEL_GAP,
    Z_FACTOR,
    WallHit,
    cast,
    new_floor_ray,
    new_vertical_ray,
)
from raycub.world import HEIGHT, WIDTH, GameState

_FLOOR_TILES = frozenset({Tile.FLOOR.value, Tile.DOOR.value})


@dataclass
class FpsCounter:
    """Counts frames and reports the count each time the second changes."""

    start: int
    last: int = 0
    frames: int = 0

    def tick(self, now: int) -> int | None:
        """Count one frame at time ``now`` (whole seconds).

        Returns the number of frames counted when a new second has begun,
        otherwise None. The count wraps at 256.
        """
        self.frames = (self.frames + 1) & 0xFF
        elapsed = int(now) - self.start
        if elapsed == self.last:
            return None
        report = self.frames
        self.last = elapsed
        self.frames = 0
        return report


def _cdiv(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _draw_sky(game: GameState, sky: Image) -> None:
    if sky.width == 0 or sky.height == 0:
        raise ValueError("cannot draw an empty sky texture")
    player = game.player
    angle = math.atan2(player.look_dir.y, player.look_dir.x)
    if angle < 0:
        angle += 2 * math.pi
    tex_offset = int(angle / (2 * math.pi) * sky.width * 3)
    columns = [(tex_offset + x * sky.width // WIDTH) % sky.width
               for x in range(WIDTH)]
    lift = player.pos.z * Z_FACTOR
    limit = HEIGHT / 2 + lift
    half = HEIGHT // 2
    screen = game.screen.pixels
    stride = game.screen.width
    y = 0
    while y < limit and y < HEIGHT:
        v = ((y + half + lift) / half) ** 0.7
        tex_y = int(v * sky.height) % sky.height
        row = sky.pixels[tex_y * sky.width:(tex_y + 1) * sky.width]
        screen[y * stride:y * stride + WIDTH] = [row[c] for c in columns]
        y += 1


def render_background(game: GameState) -> None:
    """Paint the plain floor colour below the horizon and the sky above."""
    start = int(HEIGHT / 2 + 1 + game.player.pos.z * Z_FACTOR)
    game.screen.fill_rows(start, HEIGHT, DEFAULT_FLOOR_COLOR)
    _draw_sky(game, game.textures.sky)


def _floor_row(game: GameState, level: Level, pixel_y: int, draw_floor: int,
               dir_left: Vec2, dir_right: Vec2) -> None:
    tex = game.textures.floor
    tex_w, tex_h = tex.width, tex.height
    tex_pixels = tex.pixels
    out = game.floor_img.pixels
    stride = game.floor_img.width
    heights = game.floor_height[pixel_y]
    mark = draw_floor + 1
    rows = level.rows
    min_x, max_x, min_y, max_y = level.min_x, level.max_x, level.min_y, level.max_y
    ray = new_floor_ray(0, pixel_y, dir_left, dir_right, game.player.pos,
                        draw_floor)
    pos_x, pos_y = ray.pos.x, ray.pos.y
    step_x, step_y = ray.step.x, ray.step.y
    base = pixel_y * stride
    for pixel_x in range(WIDTH):
        map_x = int(pos_x)
        map_y = int(pos_y)
        if min_x < map_x < max_x and min_y < map_y < max_y:
            row = rows[map_y] if map_y < len(rows) else ""
            if map_x < len(row) and row[map_x] in _FLOOR_TILES:
                tex_x = int(pos_x * tex_w) % tex_w
                tex_y = int(pos_y * tex_h) % tex_h
                out[base + pixel_x] = tex_pixels[tex_y * tex_w + tex_x]
                heights[pixel_x] = mark
        pos_x += step_x
        pos_y += step_y


def render_floor(game: GameState, player_floor: int) -> None:
    """Draw the floor tiles of every level up to ``player_floor``.

    Pixels go into ``game.floor_img`` and ``game.floor_height`` records,
    per pixel, one more than the level whose floor was drawn there.
    """
    player = game.player
    look, plane = player.look_dir, player.cam_plane
    dir_left = Vec2(look.x - plane.x, look.y - plane.y)
    dir_right = Vec2(look.x + plane.x, look.y + plane.y)
    for draw_floor in range(player_floor + 1):
        level = game.levels[draw_floor]
        for pixel_y in range(HEIGHT // 2 + 1, HEIGHT):
            _floor_row(game, level, pixel_y, draw_floor, dir_left, dir_right)


def _wall_color(y: int, hit: WallHit) -> int:
    d = (y + hit.level_offset) * 256 - HEIGHT * 128 + hit.line_height * 128
    if hit.line_height == 0:
        hit.tex_y = 0
    else:
        hit.tex_y = _cdiv(_cdiv(d * hit.tex.height, hit.line_height), 256)
    return hit.tex.texture_pixel(hit.tex_x, hit.tex_y)


def _draw_hits(game: GameState, x: int, hits: list[WallHit], floor: int) -> None:
    screen = game.screen.pixels
    stride = game.screen.width
    floor_pixels = game.floor_img.pixels
    heights = game.floor_height
    mark = floor + 1
    for hit in hits:
        start = max(hit.draw_start - FIX_PIXEL_GAP, 0)
        if start >= HEIGHT:
            continue
        wall_stop = min(hit.draw_end + FIX_PIXEL_GAP + 1, HEIGHT)
        for y in range(start, wall_stop):
            screen[y * stride + x] = _wall_color(y, hit)
        for y in range(max(start, wall_stop), HEIGHT):
            if heights[y][x] == mark:
                index = y * stride + x
                screen[index] = floor_pixels[index]


def render_walls(game: GameState) -> None:
    """Cast one ray per screen column and draw the walls and doors it meets.

    Levels below the player are drawn first, then those above from the top
    down, and the player's own level last.
    """
    count = game.nbr_levels
    player_level = int(game.player.pos.z)
    if not 0 <= player_level < count:
        raise ValueError(f"the player is not on any level: {player_level}")
    for x in range(WIDTH):
        ray = new_vertical_ray(x, game.player, count)
        hits = cast(game, ray)
        for level in range(player_level):
            _draw_hits(game, x, hits[level], level)
        for level in range(count - 1, player_level, -1):
            _draw_hits(game, x, hits[level], level)
        _draw_hits(game, x, hits[player_level], player_level)


def render_frame(game: GameState) -> None:
    """Draw a whole frame into ``game.screen``."""
    for row in game.floor_height:
        row[:] = bytes(len(row))
    render_background(game)
    render_floor(game, int(game.player.pos.z))
    render_walls(game)


def valid_position(game: GameState, level: Level) -> bool:
    """Tell whether the player's cell lies within the level's bounds."""
    pos = game.player.pos
    return level.contains(int(pos.x), int(pos.y))


def engine_step(game: GameState) -> Image:
    """Apply the held keys, draw the next frame and return the screen."""
    apply_controls(game.keys, game.player)
    index = int(game.player.pos.z)
    if 0 <= index < game.nbr_levels and valid_position(game, game.levels[index]):
        render_frame(game)
    else:
        render_background(game)
    return game.screen