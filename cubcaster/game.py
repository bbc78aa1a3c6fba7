"""Game state, frame rendering, texture loading and the window loop."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from cubcaster.config import (
    Config,
    ConfigError,
    has_cub_extension,
    is_xmp_extension,
    parse_config,
    read_cub_file,
)
from cubcaster.entities import Gun, check_monster_hit, draw_monster, update_monsters
from cubcaster.image import Image
from cubcaster.mapcheck import validate_map
from cubcaster.minimap import draw_minimap
from cubcaster.player import KEY_ESCAPE, KEY_LEFT, KEY_RIGHT, Keys, Player
from cubcaster.raycaster import render_walls, update_doors
from cubcaster.xpm import XpmError, read_xpm_file

WIDTH = 640
HEIGHT = 480
TITLE = "cub3D"
GUN_SCALE = 3
SHOOT_BUTTON = 1

MONSTER_TEXTURES = (
    "textures/Cacodemons.xpm",
    "textures/Cacodemons_shoot.xpm",
    "textures/Cacodemons_dead.xpm",
)
SHOTGUN_TEXTURES = (
    "textures/shotgun_frame1.xpm",
    "textures/shotgun_frame2.xpm",
    "textures/shotgun_frame3.xpm",
)
DOOR_TEXTURES = ("textures/door.xpm", "textures/door_open.xpm")


class Game:
    """A running scene: player, map, monsters, doors, gun and the frame image.

    textures maps ``walls`` (NO, SO, WE, EA), ``monsters`` (two living frames
    and the dead one), ``shotgun`` (three frames) and ``doors`` (closed, open)
    to lists of images.
    """

    def __init__(self, config: Config, textures: dict[str, Sequence[Image]]) -> None:
        self.config = config
        self.textures = textures
        self.grid = list(config.map_lines)
        self.player = Player.from_direction(
            config.player_x + 0.5, config.player_y + 0.5, config.player_dir
        )
        self.keys = Keys()
        self.gun = Gun()
        self.image = Image(WIDTH, HEIGHT)
        self.zbuffer: list[float] = [0.0] * WIDTH
        self.running = True

    @property
    def monsters(self) -> list:
        return self.config.monsters

    @property
    def doors(self) -> list:
        return self.config.doors

    def render(self) -> Image:
        """Draw one frame and advance doors, monsters and the gun animation."""
        colors = (self.config.ceiling_color, self.config.floor_color)
        self.zbuffer = render_walls(
            self.image,
            self.player,
            self.grid,
            self.textures["walls"],
            self.textures["doors"],
            colors,
            self.doors,
        )
        for monster in self.monsters:
            draw_monster(
                self.image, monster, self.player, self.zbuffer, self.textures["monsters"]
            )
        update_doors(self.doors, self.player, self.grid)
        update_monsters(self.monsters, self.player, self.grid)
        self.gun.update()
        self.gun.draw(self.image, self.textures["shotgun"], GUN_SCALE)
        draw_minimap(self.image, self.player, self.grid)
        return self.image

    def tick(self) -> Image:
        """Apply the held keys for one frame, then render it."""
        self.player.apply_input(self.keys, self.grid)
        return self.render()

    def on_press(self, keycode: int) -> None:
        """Handle a key press; Escape stops the game."""
        self.keys.press(keycode)
        if keycode == KEY_ESCAPE:
            self.running = False

    def on_release(self, keycode: int) -> None:
        """Handle a key release."""
        self.keys.release(keycode)

    def on_mouse_move(self, x: int, y: int) -> Image:
        """Turn with horizontal mouse motion and render."""
        self.player.mouse_move(x)
        return self.render()

    def on_mouse_press(self, button: int, x: int, y: int) -> None:
        """Fire the shotgun on a left click."""
        if button == SHOOT_BUTTON:
            self.gun.shoot()
            check_monster_hit(self.monsters, self.player, self.zbuffer, WIDTH)


def load_texture(path: str | Path | None) -> Image:
    """Load one XPM texture, raising ConfigError when that is not possible."""
    if path is None:
        raise ConfigError("Failed to load texture.")
    text = str(path).strip("\r")
    if is_xmp_extension(text):
        raise ConfigError("Texture need to be .xpm")
    try:
        return read_xpm_file(text)
    except XpmError as exc:
        raise ConfigError("Failed to load texture.") from exc


def load_all_textures(config: Config, base_dir: str | Path) -> dict[str, list[Image]]:
    """Load the wall textures named in the config and the built-in sprites."""
    base = Path(base_dir)

    def load(path: str | None) -> Image:
        if path is None:
            raise ConfigError("Failed to load texture.")
        return load_texture(base / path.strip("\r"))

    walls = [load(p) for p in (config.no_path, config.so_path, config.we_path, config.ea_path)]
    return {
        "walls": walls,
        "monsters": [load(p) for p in MONSTER_TEXTURES],
        "shotgun": [load(p) for p in SHOTGUN_TEXTURES],
        "doors": [load(p) for p in DOOR_TEXTURES],
    }


def load_game(path: str | Path) -> Game:
    """Read, validate and set up the scene in a ``.cub`` file.

    Texture paths are resolved against the current directory.
    """
    if not has_cub_extension(str(path)):
        raise ConfigError("Map file has to be .cub format")
    config = parse_config(read_cub_file(path))
    validate_map(config)
    textures = load_all_textures(config, Path.cwd())
    return Game(config, textures)


def _to_rgb(image: Image) -> bytes:
    raw = image.to_bytes()
    rgb = bytearray(len(raw) // 4 * 3)
    rgb[0::3] = raw[2::4]
    rgb[1::3] = raw[1::4]
    rgb[2::3] = raw[0::4]
    return bytes(rgb)


def _run(game: Game) -> None:
    import pygame

    special_keys = {
        pygame.K_LEFT: KEY_LEFT,
        pygame.K_RIGHT: KEY_RIGHT,
        pygame.K_ESCAPE: KEY_ESCAPE,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE)
        game.render()
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    game.on_press(special_keys.get(event.key, event.key))
                elif event.type == pygame.KEYUP:
                    game.on_release(special_keys.get(event.key, event.key))
                elif event.type == pygame.MOUSEMOTION:
                    game.on_mouse_move(*event.pos)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    game.on_mouse_press(event.button, *event.pos)
            if not game.running:
                break
            frame = game.tick()
            surface = pygame.image.frombuffer(
                _to_rgb(frame), (frame.width, frame.height), "RGB"
            )
            screen.blit(surface, (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def _fail(message: str) -> int:
    print(f"Error\n{message}", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the scene file named on the command line."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        return _fail("Usage: ./cub3D map.cub")
    if not has_cub_extension(args[0]):
        return _fail("Map file has to be .cub format")
    try:
        game = load_game(args[0])
    except ConfigError as exc:
        return _fail(str(exc))
    _run(game)
    return 0


if __name__ == "__main__":
    sys.exit(main())