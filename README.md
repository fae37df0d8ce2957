# raycub

A small first-person raycasting engine. It renders a stack of grid levels
with textured walls, doors set back into their cells, textured floors and a
panoramic sky, and lets you walk through them with the keyboard. Textures are
read from XPM files, including X11 colour names.

## Installing

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Playing

```
raycub
```

The window is 1280 by 720. Textures are loaded from the directory `gfx`
(relative to where you run the command) unless another is given with
`--textures DIR`. The directory must hold `floor.xpm`, `nwall.xpm`,
`swall.xpm`, `wwall.xpm`, `ewall.xpm`, `door.xpm` and `sky2.xpm`; if one of
them cannot be read, `raycub` prints an error and exits with status 1.

Controls:

| Key             | Action                                    |
|-----------------|-------------------------------------------|
| W / S           | move forward / backward                   |
| A / D           | strafe left / right                       |
| Left / Right    | turn                                      |
| Up / Down       | raise / lower the player's pitch value    |
| Q / E           | raise / lower the camera by 0.1 level     |
| Esc             | quit                                      |

Closing the window also quits. The frame rate is printed once a second as
`FPS = n`.

## Using the library

The pieces can be used on their own:

- `raycub.xpm.read_xpm_file(path)` and `raycub.xpm.parse_xpm(lines)` turn XPM
  data into a `raycub.image.Image`, raising `raycub.xpm.XpmError` on malformed
  data; `raycub.colors.lookup_color(name)` resolves X11 colour names
  (case-insensitive, `none` gives -1).
- `raycub.image.Image` is a 32-bit pixel buffer with `put_pixel`, `get_pixel`,
  `texture_pixel` (wrapping coordinates) and `fill_rows`.
- `raycub.world.new_game(textures)` builds a `GameState` with the built-in
  levels (`default_levels()`) and starting player (`default_player()`);
  `load_textures(directory)` reads the seven textures.
- `raycub.controls.key_press`, `key_release` and `apply_controls` drive the
  player from key codes (`raycub.controls.Key`); Escape makes `key_press`
  raise `QuitRequested`.
- `raycub.ray.new_vertical_ray` and `raycub.ray.cast` run the grid traversal
  for one screen column; `raycub.engine.engine_step(game)` applies the held
  keys, renders a full frame into `game.screen` and returns it.

Levels are grids of characters: `0` is open air, `1` a wall, `D` a door and
`F` a floor tile. A level above a floor must be open air or wall there, and
every open or floor cell must be enclosed by walls.

## What it does not do

- The world is the four built-in levels; there is no map file format to load
  other worlds from.
- Movement does not check for walls: the player can walk through them. When
  the player leaves the current level's bounds, only the background is drawn.
- The pitch value changes with Up / Down, but the view does not tilt.
- There is no sound, no shooting and no other game logic beyond walking.