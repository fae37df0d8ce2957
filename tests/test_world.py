import pytest

from raycub.geometry import Tile
from raycub.image import Image, Textures
from raycub.world import (
    HEIGHT,
    PLAYER_FOV,
    TEXTURE_FILES,
    WIDTH,
    default_levels,
    default_player,
    load_textures,
    new_game,
)


def _small_textures():
    images = [Image(2, 2, [i] * 4) for i in range(7)]
    return Textures(*images)


def test_default_levels_shape():
    levels = default_levels()
    assert len(levels) == 4
    assert [level.level_id for level in levels] == [0, 1, 1, 1]
    for level in levels:
        assert level.max_x == 40 and level.max_y == 10
        assert len(level.rows) == 10
        assert all(len(row) == 40 for row in level.rows)


def test_default_levels_tiles():
    levels = default_levels()
    assert levels[0].tile(0, 0) == "P"
    assert levels[1].tile(1, 6) == Tile.DOOR
    assert levels[1].tile(1, 1) == Tile.FLOOR
    assert levels[2].tile(1, 1) == Tile.AIR


def test_default_levels_closed_by_walls():
    for level in default_levels():
        assert set(level.rows[-1]) == {Tile.WALL.value}
        assert set(level.rows[0]) <= {"P", Tile.WALL.value}
        for row in level.rows:
            assert row[0] in {"P", Tile.WALL.value}
            assert row[-1] == Tile.WALL.value


def test_default_player():
    player = default_player()
    assert (player.pos.x, player.pos.y, player.pos.z) == (1.5, 1.5, 1.61)
    assert (player.look_dir.x, player.look_dir.y) == (0.0, 1.0)
    assert player.cam_plane.x == pytest.approx(-PLAYER_FOV)
    assert player.cam_plane.y == pytest.approx(0.0)
    assert player.speed == 0.05
    assert not (player.is_running or player.is_walking
                or player.is_crouch or player.is_jump)


def test_default_player_camera_is_perpendicular():
    player = default_player()
    dot = (player.look_dir.x * player.cam_plane.x
           + player.look_dir.y * player.cam_plane.y)
    assert dot == pytest.approx(0.0)


def test_new_game_buffers():
    game = new_game(_small_textures())
    assert (game.screen.width, game.screen.height) == (WIDTH, HEIGHT)
    assert (game.floor_img.width, game.floor_img.height) == (WIDTH, HEIGHT)
    assert len(game.floor_height) == HEIGHT
    assert all(len(row) == WIDTH and not any(row) for row in game.floor_height)
    assert game.nbr_levels == 4
    assert len(game.keys) == 0


def test_new_game_player_starts_in_open_cell():
    game = new_game(_small_textures())
    pos = game.player.pos
    assert int(pos.z) == 1
    level = game.levels[int(pos.z)]
    assert level.tile(int(pos.x), int(pos.y)) == Tile.FLOOR


def test_load_textures_reads_each_file(tmp_path):
    expected = {}
    for index, (name, filename) in enumerate(TEXTURE_FILES.items()):
        color = 0x100000 + index
        expected[name] = color
        (tmp_path / filename).write_text(
            "/* XPM */\nstatic char *t[] = {\n"
            '"2 1 1 1",\n'
            f'"a c #{color:06x}",\n'
            '"aa"\n};\n'
        )
    textures = load_textures(tmp_path)
    for name, color in expected.items():
        image = getattr(textures, name)
        assert image.width == 2 and image.height == 1
        assert image.get_pixel(1, 0) == color


def test_load_textures_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_textures(tmp_path)