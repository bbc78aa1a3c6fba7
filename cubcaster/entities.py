"""Monsters and the shotgun: animation, movement, drawing and hit tests."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from cubcaster.image import Image
from cubcaster.mapcheck import Monster
from cubcaster.player import Player

TEXTURE_SIZE = 64
MONSTER_SPEED = 0.01
MONSTER_FRAME_DELAY = 100
HIT_TOLERANCE = 10
SHOT_FIRST_FRAME_TICKS = 30
SHOT_NEXT_FRAME_TICKS = 3
GUN_REST_OFFSET = 50


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _is_floor(grid: Sequence[str], x: float, y: float) -> bool:
    row, col = int(y), int(x)
    if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
        return False
    return grid[row][col] == "0"


def _camera_space(monster: Monster, player: Player) -> tuple[float, float]:
    inv_det = 1.0 / (player.plane_x * player.dir_y - player.dir_x * player.plane_y)
    rel_x = monster.x - player.x
    rel_y = monster.y - player.y
    transform_x = inv_det * (player.dir_y * rel_x - player.dir_x * rel_y)
    transform_y = inv_det * (-player.plane_y * rel_x + player.plane_x * rel_y)
    return transform_x, transform_y


@dataclass
class Gun:
    """The shotgun's animation state: the frame shown and ticks left on it."""

    frame: int = 0
    timer: int = 0

    def shoot(self) -> None:
        """Start the firing animation."""
        self.frame = 1
        self.timer = SHOT_FIRST_FRAME_TICKS

    def update(self) -> None:
        """Advance the firing animation by one tick."""
        if self.frame <= 0:
            return
        self.timer -= 1
        if self.timer <= 0:
            self.frame += 1
            if self.frame > 2:
                self.frame = 0
            else:
                self.timer = SHOT_NEXT_FRAME_TICKS

    def draw(self, image: Image, frames: Sequence[Image], scale: int) -> None:
        """Draw the current frame, scaled, centred at the bottom of the image.

        Black (0) texels are left out. The resting frame sits lower.
        """
        texture = frames[self.frame]
        screen_w = texture.width * scale
        screen_h = texture.height * scale
        y_start = image.height - screen_h
        if self.frame == 0:
            y_start += GUN_REST_OFFSET
        x_start = _trunc_div(image.width - screen_w, 2)
        for y in range(screen_h):
            for x in range(screen_w):
                color = texture.get_pixel(x // scale, y // scale)
                if color != 0:
                    image.put_pixel(x + x_start, y + y_start, color)


def draw_monster(
    image: Image,
    monster: Monster,
    player: Player,
    zbuffer: Sequence[float],
    textures: Sequence[Image],
) -> None:
    """Draw a monster sprite, hidden where walls in zbuffer are closer.

    textures holds the two living frames followed by the dead frame.
    """
    transform_x, transform_y = _camera_space(monster, player)
    if transform_y <= 0:
        return
    width, height = image.width, image.height
    screen_x = int((width // 2) * (1 + transform_x / transform_y))
    sprite_h = abs(int(height / transform_y))
    if sprite_h == 0:
        return
    texture = textures[2] if monster.hp <= 0 else textures[monster.frame]
    left = -(sprite_h // 2) + screen_x
    top = -(sprite_h // 2) + height // 2
    bottom = sprite_h // 2 + height // 2
    for stripe in range(left, sprite_h // 2 + screen_x):
        if not (0 <= stripe < width and stripe < len(zbuffer)):
            continue
        if transform_y >= zbuffer[stripe]:
            continue
        tex_x = (stripe - left) * TEXTURE_SIZE // sprite_h
        for y in range(top, bottom):
            d = y * 256 - height * 128 + sprite_h * 128
            tex_y = _trunc_div(_trunc_div(d * TEXTURE_SIZE, sprite_h), 256)
            color = texture.get_pixel(tex_x, tex_y)
            if color != 0:
                image.put_pixel(stripe, y, color)


def check_monster_hit(
    monsters: Sequence[Monster],
    player: Player,
    zbuffer: Sequence[float],
    width: int,
) -> None:
    """Damage monsters near the centre of the view and in front of the walls.

    Checking stops at the first dead monster or monster behind the player.
    """
    half = width // 2
    for monster in monsters:
        if monster.hp <= 0:
            return
        transform_x, transform_y = _camera_space(monster, player)
        if transform_y <= 0:
            return
        tx, ty = int(transform_x), int(transform_y)
        if ty <= 0:
            continue
        screen_x = half * (1 + _trunc_div(tx, ty))
        if half - HIT_TOLERANCE < screen_x < half + HIT_TOLERANCE:
            if 0 <= screen_x < len(zbuffer) and ty < zbuffer[screen_x]:
                monster.hp -= 1


def update_monsters(
    monsters: Sequence[Monster], player: Player, grid: Sequence[str]
) -> None:
    """Animate living monsters and move them towards the player over floor."""
    for monster in monsters:
        if monster.hp <= 0:
            continue
        dx = player.x - monster.x
        dy = player.y - monster.y
        distance = math.hypot(dx, dy)
        monster.frame_timer += 1
        if monster.frame_timer > MONSTER_FRAME_DELAY:
            monster.frame = (monster.frame + 1) % 2
            monster.frame_timer = 0
        if distance > 1:
            vx = dx / distance * MONSTER_SPEED
            vy = dy / distance * MONSTER_SPEED
            if _is_floor(grid, monster.x + vx, monster.y):
                monster.x += vx
            if _is_floor(grid, monster.x, monster.y + vy):
                monster.y += vy