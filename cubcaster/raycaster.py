"""Grid ray casting and textured wall columns."""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass

from cubcaster.image import Image
from cubcaster.mapcheck import Door
from cubcaster.player import Player

TEXTURE_SIZE = 64
DOOR_OPEN_DISTANCE = 2.0
_FAR = 1e30


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a solid tile and how far away it was."""

    map_x: int
    map_y: int
    side: int
    ray_dir_x: float
    ray_dir_y: float
    distance: float
    wall_x: float
    tile: str


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _tile(grid: Sequence[str], x: int, y: int) -> str | None:
    if y < 0 or x < 0 or y >= len(grid) or x >= len(grid[y]):
        return None
    return grid[y][x]


def _doors_at(doors: Sequence[Door], x: int, y: int) -> list[Door]:
    return [door for door in doors if int(door.x) == x and int(door.y) == y]


def door_is_open(doors: Sequence[Door]) -> bool:
    """Whether any of the given doors is open."""
    return any(door.open for door in doors)


def update_doors(
    doors: Sequence[Door], player: Player, grid: MutableSequence[str]
) -> None:
    """Open doors within reach of the player and close the others on the grid."""
    for door in doors:
        distance = math.hypot(door.x - player.x, door.y - player.y)
        door.open = distance < DOOR_OPEN_DISTANCE
        char = "0" if door.open else "D"
        row = grid[int(door.y)]
        col = int(door.x)
        grid[int(door.y)] = row[:col] + char + row[col + 1 :]


def cast_ray(
    player: Player, grid: Sequence[str], x: int, width: int, doors: Sequence[Door]
) -> RayHit:
    """Cast the ray for screen column x and return the first solid tile it meets."""
    camera_x = 2 * x / width - 1
    ray_x = player.dir_x + player.plane_x * camera_x
    ray_y = player.dir_y + player.plane_y * camera_x
    map_x, map_y = int(player.x), int(player.y)
    delta_x = _FAR if ray_x == 0 else abs(1 / ray_x)
    delta_y = _FAR if ray_y == 0 else abs(1 / ray_y)
    if ray_x < 0:
        step_x, side_x = -1, (player.x - map_x) * delta_x
    else:
        step_x, side_x = 1, (map_x + 1.0 - player.x) * delta_x
    if ray_y < 0:
        step_y, side_y = -1, (player.y - map_y) * delta_y
    else:
        step_y, side_y = 1, (map_y + 1.0 - player.y) * delta_y

    while True:
        if side_x < side_y:
            side_x += delta_x
            map_x += step_x
            side = 0
        else:
            side_y += delta_y
            map_y += step_y
            side = 1
        tile = _tile(grid, map_x, map_y)
        if tile is None:
            tile = "1"
            break
        if tile == "1":
            break
        if tile == "D" and not door_is_open(_doors_at(doors, map_x, map_y)):
            break

    distance = side_x - delta_x if side == 0 else side_y - delta_y
    if side == 0:
        wall_x = player.y + distance * ray_y
    else:
        wall_x = player.x + distance * ray_x
    wall_x -= math.floor(wall_x)
    return RayHit(map_x, map_y, side, ray_x, ray_y, distance, wall_x, tile)


def column_span(distance: float, height: int) -> tuple[int, int, int]:
    """Return (line_height, draw_start, draw_end) of a wall slice on screen."""
    line_height = int(height / distance) if distance > 0 else height
    draw_start = max(0, -(line_height // 2) + height // 2)
    draw_end = min(line_height // 2 + height // 2, height - 1)
    return line_height, draw_start, draw_end


def choose_texture(hit: RayHit) -> int:
    """Index of the wall texture for the face the ray hit."""
    if hit.side == 0:
        return 0 if hit.ray_dir_x > 0 else 1
    return 2 if hit.ray_dir_y > 0 else 3


def texture_x(hit: RayHit) -> int:
    """Texture column for the point where the ray hit the wall."""
    tex_x = int(hit.wall_x * TEXTURE_SIZE)
    if (hit.side == 0 and hit.ray_dir_x > 0) or (hit.side == 1 and hit.ray_dir_y < 0):
        tex_x = TEXTURE_SIZE - tex_x - 1
    return tex_x


def draw_column(
    image: Image,
    hit: RayHit,
    x: int,
    textures: Sequence[Image],
    door_textures: Sequence[Image],
    colors: tuple[int, int],
    doors: Sequence[Door],
) -> None:
    """Draw ceiling, textured wall and floor for one screen column.

    colors is (ceiling_color, floor_color).
    """
    ceiling, floor = colors
    height = image.height
    line_height, start, end = column_span(hit.distance, height)
    for y in range(start):
        image.put_pixel(x, y, ceiling)
    if hit.tile == "D":
        is_open = door_is_open(_doors_at(doors, hit.map_x, hit.map_y))
        texture = door_textures[1 if is_open else 0]
    else:
        texture = textures[choose_texture(hit)]
    tex_x = texture_x(hit)
    for y in range(start, end):
        d = y * 256 - height * 128 + line_height * 128
        tex_y = _trunc_div(_trunc_div(d * TEXTURE_SIZE, line_height), 256)
        if hit.side == 1:
            tex_y = _trunc_div(tex_y, 2)
        image.put_pixel(x, y, texture.get_pixel(tex_x, tex_y))
    for y in range(end, height):
        image.put_pixel(x, y, floor)


def render_walls(
    image: Image,
    player: Player,
    grid: Sequence[str],
    textures: Sequence[Image],
    door_textures: Sequence[Image],
    colors: tuple[int, int],
    doors: Sequence[Door],
) -> list[float]:
    """Clear the image, draw every wall column and return the depth buffer."""
    image.clear(0)
    zbuffer: list[float] = []
    for x in range(image.width):
        hit = cast_ray(player, grid, x, image.width, doors)
        zbuffer.append(hit.distance)
        draw_column(image, hit, x, textures, door_textures, colors, doors)
    return zbuffer