# cubraycaster

A first-person raycaster that walks you through a grid maze described by a
`.cub` scene file. Walls are drawn with XPM textures, one for each compass
side, and a small minimap in the lower left corner shows your position and
the direction you are facing. The window is drawn with pygame.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubraycaster path/to/scene.cub
```

Give exactly one argument: a readable file whose name ends in `.cub`. While
the scene is being checked, the map grid is printed to standard output, with
walls shown as `#` and floor as blanks. If the arguments, the scene or the
textures are wrong, the program prints `Error` and a short reason
(`incorrect input`, `The map is not valid`, `north texture can't loaded`, and
so on) to standard error and exits with status 1.

The window is 500 by 250 pixels.

## Controls

| Key / input                 | Action              |
|-----------------------------|---------------------|
| `W` / `S`                   | move forward / back |
| `A` / `D`                   | strafe left / right |
| `←` / `→`                   | turn left / right   |
| horizontal mouse movement   | turn                |
| `Esc` or closing the window | quit                |

Moving forward and back stops at walls. Strafing only enters open floor
cells.

## Scene files

A scene file gives the texture and colour settings first and the map last:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

- The first character in the file that is not a space or a line break must
  be a letter, so the settings come before the map.
- `NO`, `SO`, `WE` and `EA` each name an existing file ending in `.xpm`, once
  each. Paths are taken relative to the current directory.
- `F` (floor) and `C` (ceiling) take three comma-separated whole numbers from
  0 to 255. Both must be given exactly once, and pure black (`0,0,0`) is not
  accepted for either.
- The map runs from the first to the last line whose first non-blank
  character is `1`. It uses `1` for walls, `0` for open floor and spaces for
  empty area. There is exactly one player cell, `N`, `S`, `E` or `W`, which
  also sets the direction the player starts facing; it becomes floor once the
  player is placed.
- The map must be closed: it needs more than two rows, the first and last
  rows may hold only walls and spaces, and no floor or player cell may sit in
  the first column or touch a space or the edge of the map.

The animated wall sprite frames are read from `textures/sprites/1.xpm`
through `textures/sprites/9.xpm` in the current directory. Every wall cell
whose column and row add up to a multiple of ten shows the animation. If the
frames cannot be loaded, all walls use their plain textures.

### XPM support

`cubraycaster.textures.parse_xpm` reads the C-string form of XPM. Colours
must be hexadecimal (`#rgb`, `#rrggbb` or longer per-channel forms) or one of
the names `None`, `black` and `white`; other colour names are rejected with
`XpmError`.

## Using it as a library

The parsing and rendering steps can be called on their own:

```python
from cubraycaster.parsing import parse_scene, MapError
from cubraycaster.app import build_state, run

scene, player = parse_scene("maps/example.cub")   # raises MapError
state = build_state("maps/example.cub")           # raises StartupError
run(state)
```

- `cubraycaster.model` holds the game state dataclasses (`Scene`, `Player`,
  `Ray`, `DrawParams`, `Keys`, `Animation`, `GameState`), the `Side` enum and
  small helpers such as `rgb_to_int`.
- `cubraycaster.parsing` reads and checks scene files; the individual checks
  (`find_textures`, `find_colors`, `find_grid`, `check_no_output`,
  `check_player_other_char`, `find_player`, ...) can be called directly.
- `cubraycaster.raycast` holds the per-column ray math: `init_ray`,
  `calculate_step`, `run_dda`, `wall_distance`, `project_wall`,
  `texture_params` and `texture_color`.
- `cubraycaster.movement` moves and turns the player with wall collisions.
- `cubraycaster.render` draws a whole frame onto a `Texture` canvas with
  `render_frame`, without needing a window.
- `cubraycaster.textures` provides `Texture`, `load_xpm` and
  `load_sprite_frames`.

## What it does not do

There is no sound, no saving of games and no configuration of window size,
speeds or key bindings; these are fixed in `cubraycaster.model`. The up and
down arrow keys are recognised but do nothing.