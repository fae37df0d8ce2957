import pytest

from raycub.controls import Key
from raycub.engine import (
    FpsCounter,
    engine_step,
    render_background,
    render_floor,
    render_frame,
    valid_position,
)
from raycub.image import Image, Textures
from raycub.ray import DEFAULT_FLOOR_COLOR
from raycub.world import HEIGHT, WIDTH, new_game

COLORS = {
    "floor": 0x112233,
    "north": 0x440000,
    "south": 0x004400,
    "west": 0x000044,
    "east": 0x444400,
    "door": 0x440044,
    "sky": 0x008888,
}


def _solid(color, width=4, height=4):
    return Image(width, height, [color] * (width * height))


def _textures():
    images = {name: _solid(color) for name, color in COLORS.items()}
    images["sky"] = _solid(COLORS["sky"], 8, 4)
    return Textures(**images)


@pytest.fixture
def game():
    return new_game(_textures())


@pytest.fixture(scope="module")
def rendered():
    state = new_game(_textures())
    state.floor_height[0][0] = 9
    render_frame(state)
    return state


def test_fps_counter_waits_for_next_second():
    counter = FpsCounter(start=100)
    assert counter.tick(100) is None
    assert counter.tick(100) is None
    assert counter.tick(101) == 3
    assert counter.frames == 0


def test_fps_counter_wraps_like_a_byte():
    counter = FpsCounter(start=0)
    for _ in range(256):
        assert counter.tick(0) is None
    assert counter.frames == 0


def test_valid_position(game):
    assert valid_position(game, game.levels[1]) is True
    game.player.pos.x = -1.5
    assert valid_position(game, game.levels[1]) is False
    game.player.pos.x = 40.5
    assert valid_position(game, game.levels[1]) is False


def test_background_paints_floor_and_sky(game):
    render_background(game)
    assert game.screen.get_pixel(0, HEIGHT - 1) == DEFAULT_FLOOR_COLOR
    assert game.screen.get_pixel(WIDTH - 1, 0) == COLORS["sky"]
    assert set(game.screen.pixels) == {DEFAULT_FLOOR_COLOR, COLORS["sky"]}


def test_background_rejects_empty_sky(game):
    game.textures.sky = Image(0, 0)
    with pytest.raises(ValueError):
        render_background(game)


def test_render_floor_marks_heights(game):
    player_floor = 1
    render_floor(game, player_floor)
    bottom = game.floor_height[HEIGHT - 1][WIDTH // 2]
    assert bottom == player_floor + 1
    assert game.floor_img.get_pixel(WIDTH // 2, HEIGHT - 1) == COLORS["floor"]
    assert max(max(row) for row in game.floor_height) <= player_floor + 1
    assert all(not any(row) for row in game.floor_height[: HEIGHT // 2 + 1])


def test_render_floor_negative_draws_nothing(game):
    render_floor(game, -1)
    assert all(not any(row) for row in game.floor_height)
    assert set(game.floor_img.pixels) == {0}


def test_render_floor_lower_only(game):
    render_floor(game, 0)
    assert max(max(row) for row in game.floor_height) <= 1


def test_frame_resets_floor_heights(rendered):
    assert rendered.floor_height[0][0] == 0


def test_frame_uses_only_known_colors(rendered):
    allowed = set(COLORS.values()) | {0, DEFAULT_FLOOR_COLOR}
    assert set(rendered.screen.pixels) <= allowed


def test_frame_shows_walls(rendered):
    walls = {COLORS[name] for name in ("north", "south", "west", "east", "door")}
    wall_pixels = sum(1 for pixel in rendered.screen.pixels if pixel in walls)
    assert wall_pixels >= 1


def test_engine_step_outside_map_draws_background_only(game):
    game.player.pos.x = -5.5
    game.floor_height[HEIGHT - 1][0] = 7
    game.keys.press(Key.W)
    screen = engine_step(game)
    assert screen is game.screen
    assert game.player.pos.y == pytest.approx(1.5 + game.player.speed)
    assert game.floor_height[HEIGHT - 1][0] == 7
    assert set(screen.pixels) == {DEFAULT_FLOOR_COLOR, COLORS["sky"]}