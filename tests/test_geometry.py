import pytest

from raycub.geometry import Level, Player, Tile, Vec2, Vec3

ROWS = (
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
)


def test_bounds_default_to_grid_size():
    level = Level(list(ROWS), level_id=1)
    assert level.max_x == len(ROWS[0])
    assert level.max_y == len(ROWS)
    assert level.min_x == 0 and level.min_y == 0
    assert level.rows == ROWS


def test_tile_reads_row_then_column():
    level = Level(ROWS)
    assert level.tile(0, 0) == "P"
    assert level.tile(1, 1) == Tile.FLOOR
    assert level.tile(16, 5) == Tile.DOOR
    assert level.tile(5, 5) == Tile.AIR
    assert level.tile(2, 1) == Tile.WALL
    assert level.tile(1, 6) == Tile.DOOR


def test_tile_outside_grid_raises():
    level = Level(ROWS)
    with pytest.raises(IndexError):
        level.tile(-1, 0)
    with pytest.raises(IndexError):
        level.tile(0, len(ROWS))
    with pytest.raises(IndexError):
        level.tile(len(ROWS[0]), 0)


def test_contains_is_half_open():
    level = Level(ROWS)
    assert level.contains(0, 0)
    assert level.contains(level.max_x - 1, level.max_y - 1)
    assert not level.contains(level.max_x, 0)
    assert not level.contains(0, level.max_y)
    assert not level.contains(-1, 3)


def test_explicit_bounds_are_kept():
    level = Level(ROWS, min_x=2, min_y=3, max_x=5, max_y=6)
    assert level.contains(2, 3)
    assert not level.contains(1, 3)
    assert not level.contains(5, 4)


def test_tile_round_trips_through_characters():
    for tile in Tile:
        assert Tile(tile.value) is tile
        assert tile == tile.value


def test_players_do_not_share_vectors():
    first = Player()
    second = Player()
    first.pos.x += 1.5
    first.look_dir.y = 1.0
    assert second.pos == Vec3()
    assert second.look_dir == Vec2()
    assert first.pos != second.pos


def test_vectors_compare_by_value():
    assert Vec3(1.5, 1.5, 1.61) == Vec3(1.5, 1.5, 1.61)
    assert Vec2(0, 1) == Vec2(0.0, 1.0)