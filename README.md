# cubcaster

cubcaster is a small first-person shooter. A raycaster draws the walls of a
grid map. The map can hold doors and monsters. You carry a shotgun, and a
minimap sits in the top-left corner of the screen. Each level is a `.cub`
file. The walls, sprites and gun are drawn from XPM textures.

## Installing

```
pip install .
```

The window is drawn with pygame.

## Running

```
cubcaster path/to/level.cub
```

The command takes exactly one argument, and that argument must be a file
name ending in `.cub`. If the arguments or the file are wrong, or a texture
cannot be loaded, the command writes `Error` and a one-line reason to
standard error and exits with status 1.

The window is 640×480 and has the title `cub3D`.

## Controls

| Key / input            | Action                      |
|------------------------|-----------------------------|
| `W` / `S`              | move forward / backward     |
| `A` / `D`              | strafe                      |
| `Left` / `Right` arrow | turn                        |
| mouse movement         | turn                        |
| left mouse button      | fire the shotgun            |
| `Escape`               | quit                        |

The player moves onto floor cells only. A door opens by itself when the
player is less than two tiles away from it, and closes again once the player
moves further off. A monster that is still alive slowly moves towards the
player. A shot hurts a monster that is near the centre of the view and in
front of the walls. A hurt monster turns into its dead sprite.

## The `.cub` format

A `.cub` file starts with six element lines, in any order. Blank lines may
come between them.

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE` and `EA` each give the path to a wall texture. A path may
  contain only letters, digits, `.`, `/` and `_`.
- `F` sets the floor colour and `C` sets the ceiling colour. Each is written
  as `R,G,B`, and every component must lie between 0 and 255.
- There must be exactly six element lines.
- Tabs are not allowed anywhere in this header.

The map follows the element lines:

```
111111
1N0M01
10D001
111111
```

| Character          | Meaning                       |
|--------------------|-------------------------------|
| `1`                | wall                          |
| `0`                | floor                         |
| `N`, `S`, `E`, `W` | the player's start and facing |
| `M`                | monster (at most 50)          |
| `D`                | door (at most 10)             |
| space              | outside the map               |

The map must hold exactly one player. Walls must close it in, so that no cell
the player can reach touches a space or the edge of the map. Blank lines are
not allowed inside the map.

## Textures

All texture paths are resolved against the current working directory. This
covers the four wall paths in the `.cub` file and the built-in sprites below,
so run the game from the directory that holds them:

- `textures/Cacodemons.xpm`
- `textures/Cacodemons_shoot.xpm`
- `textures/Cacodemons_dead.xpm`
- `textures/shotgun_frame1.xpm`
- `textures/shotgun_frame2.xpm`
- `textures/shotgun_frame3.xpm`
- `textures/door.xpm`
- `textures/door_open.xpm`

Wall textures are sampled as 64×64. In an XPM texture a colour can be written
as `#RRGGBB` or as an X11 colour name such as `dark slate` or `gray50`. Names
are matched without regard to case. Unknown names come out black. The colour
`None` marks a transparent pixel. Black texels in sprites and in the gun are
not drawn.

A texture path ending in `.xmp` is rejected.

## Using it as a library

```python
from cubcaster.game import load_game

game = load_game("maps/level.cub")
game.on_press(119)          # hold W
game.tick()                 # move, update doors, monsters and gun, draw a frame
frame = game.image.to_bytes()   # 32-bit little-endian 0xRRGGBB pixels
```

The parts can also be used on their own:

- `cubcaster.config`: `read_cub_file` and `parse_config` read a scene file
  into a `Config`. Errors are raised as `ConfigError`.
- `cubcaster.mapcheck`: `validate_map` checks the map and records the
  player, the `Monster` objects and the `Door` objects in the config.
  `flood_fill` checks that an area is closed.
- `cubcaster.xpm`: `read_xpm_file` and `parse_xpm` load an XPM into an
  `Image`. Errors are raised as `XpmError`.
- `cubcaster.image`: `Image` is a 32-bit pixel buffer.
  `convert_color` and `rgb_shifts` convert colours for visuals with fewer
  than 24 bits.
- `cubcaster.colornames`: `lookup_color` turns an X11 colour name into
  `0xRRGGBB`.
- `cubcaster.player`: `Player` holds the camera and its movement, and `Keys`
  holds the state of the keys.
- `cubcaster.raycaster`: `cast_ray`, `render_walls` and `update_doors`.
- `cubcaster.entities`: `Gun`, `draw_monster`, `update_monsters` and
  `check_monster_hit`.
- `cubcaster.minimap`: `draw_minimap`.

## Not included

The game has no sound, no saving, and no menus or settings. The window size
and the key bindings are fixed.