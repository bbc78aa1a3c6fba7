import pytest

from cubcaster.image import Image
from cubcaster.mapcheck import Door
from cubcaster.player import Player
from cubcaster.raycaster import (
    TEXTURE_SIZE,
    RayHit,
    cast_ray,
    choose_texture,
    column_span,
    door_is_open,
    draw_column,
    render_walls,
    texture_x,
    update_doors,
)

ROOM = ["11111", "10001", "10001", "10001", "11111"]
DOOR_ROOM = ["11111", "10D01", "10001", "10001", "11111"]
CEILING = 0x336699
FLOOR = 0x996633


def _solid(color):
    image = Image(TEXTURE_SIZE, TEXTURE_SIZE)
    image.clear(color)
    return image


WALLS = [_solid(0x110000), _solid(0x002200), _solid(0x000033), _solid(0x444444)]
DOOR_TEXTURES = [_solid(0x555500), _solid(0x006666)]


def _hit(side, rdx, rdy, wall_x=0.25, tile="1"):
    return RayHit(1, 1, side, rdx, rdy, 1.0, wall_x, tile)


def test_center_ray_hits_wall_ahead():
    player = Player.from_direction(2.5, 2.5, "N")
    hit = cast_ray(player, ROOM, 20, 40, [])
    assert (hit.map_x, hit.map_y) == (2, 0)
    assert hit.side == 1
    assert hit.distance == pytest.approx(player.y - 1)
    assert hit.tile == "1"


def test_door_tile_blocks_ray():
    player = Player.from_direction(2.5, 3.5, "N")
    hit = cast_ray(player, DOOR_ROOM, 20, 40, [Door(2, 1)])
    assert hit.tile == "D"
    assert (hit.map_x, hit.map_y) == (2, 1)
    assert hit.distance == pytest.approx(player.y - 2)


def test_wall_x_is_fractional():
    player = Player.from_direction(2.3, 2.5, "N")
    for column in range(0, 40, 7):
        hit = cast_ray(player, ROOM, column, 40, [])
        assert 0.0 <= hit.wall_x < 1.0


def test_door_is_open_false_for_remaining_doors():
    assert door_is_open([Door(1, 1, open=True)]) is False


def test_update_doors_opens_and_closes():
    grid = list(DOOR_ROOM)
    door = Door(2, 1)
    player = Player.from_direction(2.5, 2.5, "N")
    update_doors([door], player, grid)
    assert door.open
    assert grid[1] == "10001"
    player.y = 3.9
    update_doors([door], player, grid)
    assert not door.open
    assert grid[1] == DOOR_ROOM[1]


def test_column_span_limits():
    assert column_span(2.0, 100) == (50, 25, 75)
    line_height, start, end = column_span(0.1, 100)
    assert line_height > 100
    assert start == 0
    assert end == 99


def test_choose_texture_by_face():
    assert choose_texture(_hit(0, 1.0, 0.0)) == 0
    assert choose_texture(_hit(0, -1.0, 0.0)) == 1
    assert choose_texture(_hit(1, 0.0, 1.0)) == 2
    assert choose_texture(_hit(1, 0.0, -1.0)) == 3


def test_texture_x_mirrors_faces():
    plain = texture_x(_hit(0, -1.0, 0.0))
    mirrored = texture_x(_hit(0, 1.0, 0.0))
    assert plain + mirrored == TEXTURE_SIZE - 1
    assert texture_x(_hit(1, 0.0, 1.0)) + texture_x(_hit(1, 0.0, -1.0)) == TEXTURE_SIZE - 1


def test_draw_column_ceiling_wall_floor():
    image = Image(40, 30)
    player = Player.from_direction(2.5, 3.5, "N")
    hit = cast_ray(player, ROOM, 20, image.width, [])
    _, start, end = column_span(hit.distance, image.height)
    assert start > 0
    draw_column(image, hit, 20, WALLS, DOOR_TEXTURES, (CEILING, FLOOR), [])
    assert image.get_pixel(20, 0) == CEILING
    assert image.get_pixel(20, image.height - 1) == FLOOR
    wall_color = WALLS[choose_texture(hit)].get_pixel(0, 0)
    assert image.get_pixel(20, (start + end) // 2) == wall_color
    assert image.get_pixel(19, 0) == 0


def test_draw_column_uses_closed_door_texture():
    image = Image(40, 30)
    player = Player.from_direction(2.5, 3.5, "N")
    hit = cast_ray(player, DOOR_ROOM, 20, image.width, [Door(2, 1)])
    _, start, end = column_span(hit.distance, image.height)
    draw_column(image, hit, 20, WALLS, DOOR_TEXTURES, (CEILING, FLOOR), [Door(2, 1)])
    assert image.get_pixel(20, (start + end) // 2) == DOOR_TEXTURES[0].get_pixel(0, 0)


def test_render_walls_returns_depth_per_column():
    image = Image(40, 30)
    image.clear(0xABCDEF)
    player = Player.from_direction(2.5, 2.5, "N")
    zbuffer = render_walls(image, player, ROOM, WALLS, DOOR_TEXTURES, (CEILING, FLOOR), [])
    assert len(zbuffer) == image.width
    assert all(depth > 0 for depth in zbuffer)
    assert zbuffer[20] == pytest.approx(player.y - 1)
    assert image.get_pixel(0, image.height - 1) == FLOOR
    assert image.get_pixel(0, 0) == CEILING