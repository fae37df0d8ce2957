"""Casting rays through the level grids for walls, doors and floors."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

from raycub.geometry import Level, Player, Tile, Vec2, Vec3
from raycub.image import Image
from raycub.world import HEIGHT, WIDTH, GameState

X_AXIS = 0
Y_AXIS = 1
Z_FACTOR = 20
DOOR_DEPTH = 0.4
FIX_PIXEL_GAP = 2
DEFAULT_FLOOR_COLOR = 0xFFF8DC
DEFAULT_ROOF_COLOR = 0x87CEFA
DEFAULT_WALL_COLOR = 0xB0B0B0

_INT_MAX = 2**31 - 1
_INT_MIN = -(2**31)


@dataclass
class WallHit:
    """Where a ray met a wall or door, and how it is drawn on one level."""

    render: bool
    door: bool
    door_axis: int
    distance: float
    line_height: int
    wall_x: float
    tex: Image
    tex_x: int
    tex_y: int = 0
    level_offset: int = 0
    draw_start: int = 0
    draw_end: int = 0


@dataclass
class VerticalRay:
    """A ray for one screen column, stepping cell by cell through the grid."""

    origin: Vec2
    dir: Vec2
    map_x: int
    map_y: int
    delta: Vec2
    step_x: int
    step_y: int
    side: Vec2
    axis: int = X_AXIS
    door_axis: int = X_AXIS
    hit_list: list[list[WallHit]] = field(default_factory=list)


@dataclass
class FloorRay:
    """Where one screen row meets a floor, sampled from left to right."""

    pixel_horizon: int
    pixel_camera_height: float
    distance: float
    step: Vec2
    pos: Vec2


def _div(a: float, b: float) -> float:
    """Divide like floating point hardware: by zero gives infinity or nan."""
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _trunc(value: float) -> int:
    """Truncate towards zero, clamping infinities to the int32 range."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _INT_MAX if value > 0 else _INT_MIN
    return int(value)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating towards zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _tile_at(level: Level, x: int, y: int) -> str | None:
    try:
        return level.tile(x, y)
    except IndexError:
        return None


def new_vertical_ray(x: int, player: Player, nbr_levels: int) -> VerticalRay:
    """Start the ray for screen column ``x`` from the player's position."""
    if nbr_levels < 0:
        raise ValueError("the number of levels must not be negative")
    camera_x = 2.0 * x / WIDTH - 1
    origin = Vec2(player.pos.x, player.pos.y)
    direction = Vec2(player.look_dir.x + player.cam_plane.x * camera_x,
                     player.look_dir.y + player.cam_plane.y * camera_x)
    map_x = int(origin.x)
    map_y = int(origin.y)
    delta = Vec2(abs(_div(1.0, direction.x)), abs(_div(1.0, direction.y)))
    step_x = -1 if direction.x < 0 else 1
    step_y = -1 if direction.y < 0 else 1
    side = Vec2(
        (origin.x - map_x) * delta.x if direction.x < 0
        else (map_x + 1.0 - origin.x) * delta.x,
        (origin.y - map_y) * delta.y if direction.y < 0
        else (map_y + 1.0 - origin.y) * delta.y,
    )
    return VerticalRay(
        origin=origin, dir=direction, map_x=map_x, map_y=map_y, delta=delta,
        step_x=step_x, step_y=step_y, side=side,
        hit_list=[[] for _ in range(nbr_levels)],
    )


def is_door_hit(ray: VerticalRay) -> bool:
    """Tell whether the ray crosses the door panel inside its current cell."""
    if ray.door_axis == X_AXIS:
        offset = DOOR_DEPTH if ray.dir.x > 0 else 1 - DOOR_DEPTH
        ratio = _div(ray.map_x + offset - ray.origin.x, ray.dir.x)
        intersect = ray.origin.y + ray.dir.y * ratio
        cell = ray.map_y
    else:
        offset = DOOR_DEPTH if ray.dir.y > 0 else 1 - DOOR_DEPTH
        ratio = _div(ray.map_y + offset - ray.origin.y, ray.dir.y)
        intersect = ray.origin.x + ray.dir.x * ratio
        cell = ray.map_x
    if not math.isfinite(intersect):
        return False
    return int(intersect) == cell


def _wall_hit(game: GameState, ray: VerticalRay, door: bool) -> WallHit:
    if ray.axis == X_AXIS:
        edge = float(ray.map_x)
        if door:
            edge += DOOR_DEPTH if ray.dir.x > 0 else -DOOR_DEPTH
        distance = _div(edge - ray.origin.x + (1 - ray.step_x) // 2, ray.dir.x)
        wall_x = ray.origin.y + distance * ray.dir.y
    else:
        edge = float(ray.map_y)
        if door:
            edge += DOOR_DEPTH if ray.dir.y > 0 else -DOOR_DEPTH
        distance = _div(edge - ray.origin.y + (1 - ray.step_y) // 2, ray.dir.y)
        wall_x = ray.origin.x + distance * ray.dir.x
    wall_x = wall_x - math.floor(wall_x) if math.isfinite(wall_x) else 0.0

    textures = game.textures
    if door:
        tex = textures.door
    elif ray.axis == X_AXIS:
        tex = textures.west if ray.dir.x < 0 else textures.east
    else:
        tex = textures.north if ray.dir.y < 0 else textures.south

    tex_x = _trunc(wall_x * tex.width)
    if ((ray.axis == X_AXIS and ray.dir.x > 0)
            or (ray.axis == Y_AXIS and ray.dir.y < 0)):
        tex_x = tex.width - tex_x - 1

    return WallHit(
        render=True, door=door, door_axis=ray.door_axis, distance=distance,
        line_height=_trunc(_div(HEIGHT, distance)), wall_x=wall_x,
        tex=tex, tex_x=tex_x,
    )


def _for_level(hit: WallHit, pos_z: float, level: int) -> WallHit:
    offset = _trunc(_div((level - pos_z + 0.5) * HEIGHT, hit.distance))
    half = _cdiv(hit.line_height, 2)
    return replace(
        hit,
        level_offset=offset,
        draw_start=-half + HEIGHT // 2 - offset,
        draw_end=half + HEIGHT // 2 - offset,
    )


def _verify_hit(game: GameState, ray: VerticalRay, inside: list[bool]) -> None:
    hits: list[tuple[int, bool]] = []
    for index, level in enumerate(game.levels):
        tile = _tile_at(level, ray.map_x, ray.map_y)
        if inside[index] and tile == Tile.WALL:
            hits.append((index, False))
            inside[index] = False
        elif inside[index] and tile == Tile.DOOR:
            above = _tile_at(level, ray.map_x, ray.map_y - 1)
            ray.door_axis = X_AXIS if above == Tile.WALL else Y_AXIS
            if is_door_hit(ray):
                hits.append((index, True))
        elif not inside[index] and tile != Tile.WALL:
            inside[index] = True
    if not hits:
        return
    wall = _wall_hit(game, ray, False)
    door = _wall_hit(game, ray, True) if any(d for _, d in hits) else None
    pos_z = game.player.pos.z
    for index, is_door in hits:
        source = door if is_door else wall
        ray.hit_list[index].insert(0, _for_level(source, pos_z, index))


def cast(game: GameState, ray: VerticalRay) -> list[list[WallHit]]:
    """Step the ray across the map, recording hits per level, nearest last.

    Returns the ray's hit lists once the ray leaves the lowest level's bounds.
    """
    levels = game.levels
    if len(ray.hit_list) < len(levels):
        raise ValueError("the ray has fewer hit lists than there are levels")
    bounds = levels[0]
    inside = [_tile_at(level, ray.map_x, ray.map_y) != Tile.WALL
              for level in levels]
    while True:
        if ray.side.x < ray.side.y:
            ray.side.x += ray.delta.x
            ray.map_x += ray.step_x
            ray.axis = X_AXIS
        else:
            ray.side.y += ray.delta.y
            ray.map_y += ray.step_y
            ray.axis = Y_AXIS
        if not bounds.contains(ray.map_x, ray.map_y):
            return ray.hit_list
        _verify_hit(game, ray, inside)


def new_floor_ray(pixel_x: int, pixel_y: int, dir_left: Vec2, dir_right: Vec2,
                  player_pos: Vec3, floor: int) -> FloorRay:
    """Start the ray for screen row ``pixel_y`` on the given floor.

    ``pos`` is the map point seen at column ``pixel_x``; each further column
    adds ``step``.
    """
    horizon = pixel_y - HEIGHT // 2
    if horizon == 0:
        raise ValueError("the horizon row does not meet any floor")
    camera_height = player_pos.z * HEIGHT - floor * HEIGHT
    distance = camera_height / horizon
    step = Vec2(distance * (dir_right.x - dir_left.x) / WIDTH,
                distance * (dir_right.y - dir_left.y) / WIDTH)
    pos = Vec2(player_pos.x + distance * dir_left.x + step.x * pixel_x,
               player_pos.y + distance * dir_left.y + step.y * pixel_x)
    return FloorRay(pixel_horizon=horizon, pixel_camera_height=camera_height,
                    distance=distance, step=step, pos=pos)