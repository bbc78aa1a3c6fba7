"""Validation of the map grid: characters, player, monsters, doors, closure."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from cubcaster.config import Config, ConfigError

_PLAYER_CHARS = frozenset("NSEW")
_MAP_CHARS = frozenset("01 MD\r") | _PLAYER_CHARS
_OPEN_CHARS = frozenset(" \0\t")
MAX_MONSTERS = 50
MAX_DOORS = 10


@dataclass
class Door:
    """A door tile on the map."""

    x: int
    y: int
    frame: int = 0
    open: bool = False


@dataclass
class Monster:
    """A monster placed on the map."""

    x: float
    y: float
    frame: int = 0
    hp: int = 1
    frame_timer: int = 0


def is_player(c: str) -> bool:
    """True for the player start characters N, S, E and W."""
    return c in _PLAYER_CHARS


def check_char(c: str) -> None:
    """Raise ConfigError for a character that may not appear in a map."""
    if c not in _MAP_CHARS:
        raise ConfigError("Invalid character in map.")


def _cell(grid: list[list[str]], y: int, x: int) -> str:
    if y < 0 or x < 0 or y >= len(grid) or x >= len(grid[y]):
        return " "
    return grid[y][x]


def flood_fill(grid: Sequence[str], y: int, x: int) -> list[str]:
    """Fill the area reachable from (x, y), checking that it is closed.

    Returns a copy of the grid with every reached floor cell set to ``x``.
    """
    cells = [list(row) for row in grid]
    stack = [(y, x)]
    while stack:
        cy, cx = stack.pop()
        c = _cell(cells, cy, cx)
        if c in _OPEN_CHARS:
            raise ConfigError("Map not closed: open area detected")
        if c in ("1", "x"):
            continue
        if c != "0" and not is_player(c) and c != "D":
            raise ConfigError("Invalid character inside map during flood fill")
        cells[cy][cx] = "x"
        stack.extend(((cy, cx - 1), (cy, cx + 1), (cy - 1, cx), (cy + 1, cx)))
    return ["".join(row) for row in cells]


def validate_map(config: Config) -> None:
    """Check the map and record the player, monsters and doors in the config."""
    rows = [list(line) for line in config.map_lines]
    monsters: list[Monster] = []
    doors: list[Door] = []
    player_found = False
    config.monsters = monsters
    config.doors = doors
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            check_char(c)
            if is_player(c):
                if player_found:
                    raise ConfigError("Multiple players found.")
                config.player_x = x
                config.player_y = y
                config.player_dir = c
                player_found = True
                row[x] = "0"
            if row[x] == "M":
                monsters.append(Monster(float(x), float(y)))
                if len(monsters) > MAX_MONSTERS:
                    raise ConfigError("Limit is set to 50 monsters")
                row[x] = "0"
            if row[x] == "D":
                doors.append(Door(x, y))
                if len(doors) > MAX_DOORS:
                    raise ConfigError("Limit is set to 10 doors")
    config.map_lines = ["".join(row) for row in rows]
    if not player_found:
        raise ConfigError("No player found in the map.")
    flood_fill(config.map_lines, config.player_y, config.player_x)