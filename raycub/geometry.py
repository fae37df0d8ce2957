"""Points, player state and level grids."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(slots=True)
class Vec2:
    """A point or direction on the map plane."""

    x: float = 0.0
    y: float = 0.0


@dataclass(slots=True)
class Vec3:
    """A point in the world; ``z`` is the height in levels."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class Tile(str, Enum):
    """Characters with a meaning in a level grid."""

    AIR = "0"
    WALL = "1"
    DOOR = "D"
    FLOOR = "F"


@dataclass
class Player:
    """Position, orientation and movement state of the player."""

    pos: Vec3 = field(default_factory=Vec3)
    look_dir: Vec2 = field(default_factory=Vec2)
    pitch: int = 0
    cam_plane: Vec2 = field(default_factory=Vec2)
    walk_dir: Vec2 = field(default_factory=Vec2)
    is_running: bool = False
    is_walking: bool = False
    is_crouch: bool = False
    is_jump: bool = False
    speed: float = 0.05


@dataclass
class Level:
    """One storey of the world: a grid of tile characters and its bounds."""

    rows: tuple[str, ...]
    level_id: int = 0
    min_x: int = 0
    min_y: int = 0
    max_x: int | None = None
    max_y: int | None = None
    offset_x: int = 0
    offset_y: int = 0

    def __post_init__(self) -> None:
        self.rows = tuple(self.rows)
        if self.max_x is None:
            self.max_x = max((len(row) for row in self.rows), default=0)
        if self.max_y is None:
            self.max_y = len(self.rows)

    def tile(self, x: int, y: int) -> str:
        """Return the character at column ``x`` of row ``y``."""
        if y < 0 or y >= len(self.rows) or x < 0 or x >= len(self.rows[y]):
            raise IndexError(f"tile ({x}, {y}) is outside the level grid")
        return self.rows[y][x]

    def contains(self, x: int, y: int) -> bool:
        """Tell whether the cell lies within the level's bounds."""
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y