import pytest

from cubcaster.entities import (
    Gun,
    check_monster_hit,
    draw_monster,
    update_monsters,
)
from cubcaster.image import Image
from cubcaster.mapcheck import Monster
from cubcaster.player import Player

GRID = [
    "1111111111",
    "1000000001",
    "1000000001",
    "1000000001",
    "1000000001",
    "1111111111",
]

WIDTH = 64
HEIGHT = 48


def facing_west(x=2.5, y=2.5):
    return Player.from_direction(x, y, "W")


def solid(color, size=64):
    image = Image(size, size)
    image.clear(color)
    return image


def pixels(image):
    return [image.get_pixel(x, y) for y in range(image.height) for x in range(image.width)]


@pytest.fixture
def textures():
    return [solid(0x112233), solid(0x445566), solid(0x778899)]


def test_shoot_starts_animation():
    gun = Gun()
    gun.shoot()
    assert (gun.frame, gun.timer) == (1, 30)


def test_gun_animation_sequence():
    gun = Gun()
    gun.shoot()
    for _ in range(29):
        gun.update()
    assert gun.frame == 1
    gun.update()
    assert (gun.frame, gun.timer) == (2, 3)
    for _ in range(3):
        gun.update()
    assert gun.frame == 0


def test_idle_gun_stays_idle():
    gun = Gun()
    gun.update()
    assert (gun.frame, gun.timer) == (0, 0)


def test_gun_draw_scales_texels():
    frame = Image(2, 2)
    frame.put_pixel(0, 0, 0xABCDEF)
    image = Image(20, 20)
    gun = Gun(frame=1)
    gun.draw(image, [frame, frame, frame], 3)
    data = [image.get_pixel(x, y) for y in range(20) for x in range(20)]
    assert data.count(0xABCDEF) == 9
    assert set(data) == {0, 0xABCDEF}


def test_gun_rest_frame_drawn_lower():
    frame = Image(2, 2)
    frame.clear(0x010101)
    raised = Image(40, 100)
    lowered = Image(40, 100)
    Gun(frame=1).draw(raised, [frame, frame, frame], 1)
    Gun(frame=0).draw(lowered, [frame, frame, frame], 1)

    def top_row(img):
        return min(
            y for y in range(img.height) for x in range(img.width)
            if img.get_pixel(x, y)
        )

    assert top_row(lowered) - top_row(raised) == 50


def test_monster_in_front_is_drawn(textures):
    image = Image(WIDTH, HEIGHT)
    monster = Monster(5.5, 2.5)
    draw_monster(image, monster, facing_west(), [100.0] * WIDTH, textures)
    assert image.get_pixel(WIDTH // 2, HEIGHT // 2) == 0x112233


def test_monster_hidden_behind_wall(textures):
    image = Image(WIDTH, HEIGHT)
    monster = Monster(5.5, 2.5)
    draw_monster(image, monster, facing_west(), [1.0] * WIDTH, textures)
    assert image.get_pixel(WIDTH // 2, HEIGHT // 2) == 0
    assert set(pixels(image)) == {0}


def test_monster_behind_player_not_drawn(textures):
    image = Image(WIDTH, HEIGHT)
    monster = Monster(0.5, 2.5)
    draw_monster(image, monster, facing_west(), [100.0] * WIDTH, textures)
    assert image.get_pixel(WIDTH // 2, HEIGHT // 2) == 0
    assert set(pixels(image)) == {0}


def test_dead_monster_uses_dead_texture(textures):
    image = Image(WIDTH, HEIGHT)
    monster = Monster(5.5, 2.5, hp=0)
    draw_monster(image, monster, facing_west(), [100.0] * WIDTH, textures)
    assert image.get_pixel(WIDTH // 2, HEIGHT // 2) == 0x778899


def test_hit_monster_in_centre():
    monster = Monster(5.5, 2.5)
    check_monster_hit([monster], facing_west(), [100.0] * WIDTH, WIDTH)
    assert monster.hp == 0


def test_no_hit_through_wall():
    monster = Monster(5.5, 2.5)
    check_monster_hit([monster], facing_west(), [1.0] * WIDTH, WIDTH)
    assert monster.hp == 1


def test_no_hit_off_centre():
    monster = Monster(5.5, 0.5)
    check_monster_hit([monster], facing_west(), [100.0] * WIDTH, WIDTH)
    assert monster.hp == 1


def test_dead_monster_stops_checking():
    dead = Monster(6.5, 2.5, hp=0)
    alive = Monster(5.5, 2.5)
    check_monster_hit([dead, alive], facing_west(), [100.0] * WIDTH, WIDTH)
    assert alive.hp == 1


def test_monster_moves_towards_player():
    player = facing_west(1.5, 2.5)
    monster = Monster(7.5, 2.5)
    before = abs(monster.x - player.x)
    update_monsters([monster], player, GRID)
    assert abs(monster.x - player.x) < before
    assert monster.y == 2.5


def test_close_monster_does_not_move():
    player = facing_west(2.5, 2.5)
    monster = Monster(3.0, 2.5)
    update_monsters([monster], player, GRID)
    assert (monster.x, monster.y) == (3.0, 2.5)
    assert monster.frame_timer == 1


def test_monster_animation_switches_frame():
    player = facing_west(2.5, 2.5)
    monster = Monster(3.0, 2.5)
    for _ in range(101):
        update_monsters([monster], player, GRID)
    assert (monster.frame, monster.frame_timer) == (1, 0)


def test_dead_monster_is_frozen():
    player = facing_west(1.5, 2.5)
    monster = Monster(7.5, 2.5, hp=0)
    update_monsters([monster], player, GRID)
    assert (monster.x, monster.frame_timer) == (7.5, 0)


def test_wall_blocks_monster():
    grid = ["111", "101", "111"]
    player = facing_west(1.5, 1.5)
    monster = Monster(1.5, 1.99)
    player.y = 5.0
    update_monsters([monster], player, grid)
    assert monster.y == 1.99