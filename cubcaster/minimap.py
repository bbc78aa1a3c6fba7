"""A small top-down view of the cells around the player."""

from __future__ import annotations

from collections.abc import Sequence

from cubcaster.image import Image
from cubcaster.player import Player

TILE_SIZE = 15
RADIUS = 5
WALL_COLOR = 0x888888
FLOOR_COLOR = 0x000000
DOOR_COLOR = 0xFFD700
OTHER_COLOR = 0x333333
PLAYER_COLOR = 0xFF0000


def tile_color(c: str) -> int:
    """Minimap colour of a map character."""
    if c in ("1", " "):
        return WALL_COLOR
    if c == "0":
        return FLOOR_COLOR
    if c == "D":
        return DOOR_COLOR
    return OTHER_COLOR


def draw_square(image: Image, x: int, y: int, color: int) -> None:
    """Fill minimap cell (x, y) with a colour."""
    left, top = x * TILE_SIZE, y * TILE_SIZE
    for j in range(TILE_SIZE):
        for i in range(TILE_SIZE):
            image.put_pixel(left + i, top + j, color)


def draw_minimap(image: Image, player: Player, grid: Sequence[str]) -> None:
    """Draw the map cells within five of the player, and the player in red."""
    centre = RADIUS + 1
    base_x, base_y = int(player.x), int(player.y)
    for dy in range(-RADIUS, RADIUS + 1):
        map_y = base_y + dy
        if not 0 <= map_y < len(grid):
            continue
        row = grid[map_y]
        for dx in range(-RADIUS, RADIUS + 1):
            map_x = base_x + dx
            if 0 <= map_x < len(row):
                draw_square(image, dx + centre, dy + centre, tile_color(row[map_x]))
    draw_square(image, centre, centre, PLAYER_COLOR)