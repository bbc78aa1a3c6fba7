"""Player position, view direction and keyboard/mouse driven movement."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

MOVE_SPEED = 0.03
ROT_SPEED = 0.01
MOUSE_ROT_SPEED = 0.03

KEY_W = 119
KEY_A = 97
KEY_S = 115
KEY_D = 100
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_ESCAPE = 65307

_KEY_FIELDS = {
    KEY_W: "w",
    KEY_A: "a",
    KEY_S: "s",
    KEY_D: "d",
    KEY_LEFT: "left",
    KEY_RIGHT: "right",
}

_DIRECTIONS: dict[str, tuple[float, float, float, float]] = {
    "N": (0.0, -1.0, -0.66, 0.0),
    "S": (0.0, 1.0, 0.66, 0.0),
    "E": (-1.0, 0.0, 0.0, 0.66),
    "W": (1.0, 0.0, 0.0, -0.66),
}


@dataclass
class Keys:
    """Which movement and turning keys are currently held down."""

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    left: bool = False
    right: bool = False

    def press(self, keycode: int) -> None:
        """Mark a key as held; unknown key codes are ignored."""
        name = _KEY_FIELDS.get(keycode)
        if name is not None:
            setattr(self, name, True)

    def release(self, keycode: int) -> None:
        """Mark a key as released; unknown key codes are ignored."""
        name = _KEY_FIELDS.get(keycode)
        if name is not None:
            setattr(self, name, False)


def direction_vectors(direction: str) -> tuple[float, float, float, float]:
    """Return (dir_x, dir_y, plane_x, plane_y) for a start direction N/S/E/W."""
    try:
        return _DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"unknown start direction {direction!r}") from None


def _is_floor(grid: Sequence[str], x: float, y: float) -> bool:
    row, col = int(y), int(x)
    if row < 0 or col < 0 or row >= len(grid) or col >= len(grid[row]):
        return False
    return grid[row][col] == "0"


@dataclass
class Player:
    """The camera: a position, a view direction and a camera plane."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float
    last_mouse_x: int = 0

    @classmethod
    def from_direction(cls, x: float, y: float, direction: str) -> Player:
        """Create a player at (x, y) looking towards N, S, E or W."""
        dir_x, dir_y, plane_x, plane_y = direction_vectors(direction)
        return cls(x, y, dir_x, dir_y, plane_x, plane_y)

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by angle radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def _step(self, grid: Sequence[str], dx: float, dy: float) -> None:
        if _is_floor(grid, self.x + dx, self.y):
            self.x += dx
        if _is_floor(grid, self.x, self.y + dy):
            self.y += dy

    def apply_input(self, keys: Keys, grid: Sequence[str]) -> None:
        """Move and turn for one frame according to the held keys.

        Each axis moves only when the cell it leads into is floor (``0``).
        """
        if keys.w:
            self._step(grid, self.dir_x * MOVE_SPEED, self.dir_y * MOVE_SPEED)
        if keys.s:
            self._step(grid, -self.dir_x * MOVE_SPEED, -self.dir_y * MOVE_SPEED)
        if keys.d:
            self._step(grid, self.plane_x * MOVE_SPEED, self.plane_y * MOVE_SPEED)
        if keys.a:
            self._step(grid, -self.plane_x * MOVE_SPEED, -self.plane_y * MOVE_SPEED)
        if keys.left:
            self.rotate(ROT_SPEED)
        if keys.right:
            self.rotate(-ROT_SPEED)

    def mouse_move(self, x: int) -> None:
        """Turn by a fixed step in the direction the mouse moved horizontally."""
        delta = x - self.last_mouse_x
        if delta < 0:
            self.rotate(MOUSE_ROT_SPEED)
        elif delta > 0:
            self.rotate(-MOUSE_ROT_SPEED)
        self.last_mouse_x = x