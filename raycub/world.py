"""The game state and the built-in world it starts in."""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from raycub.controls import KeyState
from raycub.geometry import Level, Player, Vec2, Vec3
from raycub.image import Image, Textures
from raycub.xpm import read_xpm_file

HEIGHT = 720
WIDTH = 1280
PLAYER_FOV = 0.66

TEXTURE_FILES: dict[str, str] = {
    "floor": "floor.xpm",
    "north": "nwall.xpm",
    "south": "swall.xpm",
    "west": "wwall.xpm",
    "east": "ewall.xpm",
    "door": "door.xpm",
    "sky": "sky2.xpm",
}

# A level above a floor must be open air or wall there, and every open
# cell must be enclosed by walls.
_LEVEL_DATA: tuple[tuple[int, tuple[str, ...]], ...] = (
    (0, (
        "P111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "11111FFFFFFFFFF1111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
    )),
    (1, (
        "P111111111111111111111111111111111111111",
        "1F11111111111111111111111111111111111111",
        "1F11111111111111111111111111111111111111",
        "1F11111111111111111111111111111111111111",
        "1F11FFFFFFFFFFFF11111111111FFFFFFFFFFFF1",
        "1FFFF0000000000FDFFFFFFFFFDFFFFFFFFFFFF1",
        "1D11FFFFFFFFFFFF11111111111FFFFFFFFFFFF1",
        "1FFFF11111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
    )),
    (1, (
        "P111111111111111111111111111111111111111",
        "1011111111111111111111111111111111111111",
        "1011111111111111111111111111111111111111",
        "10FFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFF1",
        "10FF000000000000F1FFFFFFFFF0000000000001",
        "1000000000000000010000000000000000000001",
        "1111000000000000F1FFFFFFFFF0000000000001",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
        "1111111111111111111111111111111111111111",
    )),
    (1, (
        "P111111111111111111111111111111111111111",
        "10111111111111FFFFFFFFF11111111111111111",
        "10111111111111FFFFFFFFF11111111111111111",
        "1000000000000000000000000000000000000001",
        "10000000000000000F0000000000000000000001",
        "10000000000000000F0000000000000000000001",
        "1FFF0000000000000F0000000000000000000001",
        "1FFF1111111111111D1FFF111111111111111111",
        "111111111111111FFFFFFF111111111111111111",
        "1111111111111111111111111111111111111111",
    )),
)


@dataclass
class GameState:
    """Everything a frame is computed from and drawn into."""

    textures: Textures
    levels: list[Level]
    player: Player
    screen: Image
    floor_img: Image
    floor_height: list[bytearray]
    keys: KeyState = field(default_factory=KeyState)

    @property
    def nbr_levels(self) -> int:
        """Number of storeys in the world."""
        return len(self.levels)


def default_levels() -> list[Level]:
    """Return the four built-in storeys, lowest first."""
    return [
        Level(rows=rows, level_id=level_id, min_x=0, min_y=0, max_x=40, max_y=10)
        for level_id, rows in _LEVEL_DATA
    ]


def default_player() -> Player:
    """Return the player at the start position, looking along +y."""
    look_dir = Vec2(0.0, 1.0)
    return Player(
        pos=Vec3(1.5, 1.5, 1.61),
        look_dir=look_dir,
        pitch=0,
        cam_plane=Vec2(-look_dir.y * PLAYER_FOV, look_dir.x * PLAYER_FOV),
        walk_dir=Vec2(0.0, 0.0),
        speed=0.05,
    )


def load_textures(directory: str | PathLike[str] = "gfx") -> Textures:
    """Read the seven XPM textures from ``directory``."""
    base = Path(directory)
    images = {name: read_xpm_file(base / filename)
              for name, filename in TEXTURE_FILES.items()}
    return Textures(**images)


def new_game(textures: Textures) -> GameState:
    """Build a fresh game state using the given textures."""
    return GameState(
        textures=textures,
        levels=default_levels(),
        player=default_player(),
        screen=Image(WIDTH, HEIGHT),
        floor_img=Image(WIDTH, HEIGHT),
        floor_height=[bytearray(WIDTH) for _ in range(HEIGHT)],
        keys=KeyState(),
    )