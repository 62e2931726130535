# raycube

A small first-person raycasting engine. It reads a `.cub` scene description,
checks that the map is closed, loads XPM wall textures and draws the world
one screen column at a time by walking the map grid (DDA).

## Installing

```
pip install .
```

## Running

```
raycube path/to/level.cub
```

The game opens a 640×480 window with pygame. If the scene file cannot be
parsed, it prints `Error` and the reason to standard error and exits with
status 1. Without exactly one argument it prints the controls and exits
with status 1.

The weapon overlay is read from `textures/gun.xpm` and `textures/gun2.xpm`,
relative to the current directory. If either cannot be loaded, the game
prints an error and exits with status 1.

### Controls

| Key        | Action                                |
|------------|---------------------------------------|
| W / S      | forward / backward                    |
| A / D      | strafe left / right                   |
| ← / →      | rotate left / right                   |
| mouse      | look left / right                     |
| SPACE      | show the second weapon while held     |
| ESC        | quit                                  |

## The `.cub` format

The element lines come first, in any order, and each may appear only once.
Blank lines between them are ignored:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

Each texture path has to name a file that can be opened. Each colour needs
three comma-separated components in the range 0–255.

The map comes after the elements. It uses `1` for walls, `0` for floor,
space for the void, and exactly one of `N`, `S`, `E` or `W` to mark where the
player starts and which way they face. Leading spaces and tabs on each row
are dropped:

```
111111
100101
1000N1
111111
```

The map has to be closed. The first and last rows may hold only walls and
spaces. Each row must start and end with a wall or a space. No floor or
start cell may be next to a space or the edge of the map.

When a wall texture is missing or is not an XPM file, a solid colour is used
in its place: red for west, green for east, blue for north and yellow for
south.

## Using it as a library

```python
from raycube.parser import load_map
from raycube.player import Player
from raycube.raycasting import cast_ray

game_map = load_map("level.cub")
player = Player.from_map(game_map)
hit = cast_ray(player, game_map, player.angle)
print(hit)  # a RayHit, or None if the ray hit nothing
```

- `raycube.parser.load_map` and `parse_cub_file` raise
  `raycube.config.ParseError` with a message when the file is not valid.
- `raycube.xpm.read_xpm_file` and `xpm_to_image` read XPM data into
  `raycube.xpm.Image` objects. Colour names are looked up with
  `raycube.colornames.lookup_color`.
- `raycube.textures.load_textures` loads a map's four wall textures, with
  fallbacks.
- `raycube.render.render_frame` draws a whole frame into a
  `raycube.render.FrameBuffer`, and needs no window.
- `raycube.game.Game` ties these together. `Game.tick` advances and draws
  one frame, and `key_press`, `key_release` and `mouse_move` feed it input.

## What it does not do

Wall and weapon textures must be XPM files; other image formats are not
read. There is no sound, and there are no sprites, doors or enemies. The
weapon overlay is only a picture.

## Tests

```
pip install .[test]
pytest
```