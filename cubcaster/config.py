"""Reading and parsing ``.cub`` scene description files."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_TEXTURE_KEYS = ("NO ", "SO ", "WE ", "EA ")
_COLOR_KEYS = ("F ", "C ")
_BLANK_CHARS = frozenset(" \t\n\r")
_ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)
_TEXTURE_CHARS = _ASCII_ALNUM | frozenset("./ _\r")
_RGB_CHARS = frozenset(string.digits + "FC ,\r")
_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_REQUIRED_ELEMENTS = 6


class ConfigError(ValueError):
    """Raised when a scene file or its map is invalid."""


@dataclass
class Config:
    """Everything read from a scene file."""

    no_path: str | None = None
    so_path: str | None = None
    we_path: str | None = None
    ea_path: str | None = None
    floor_color: int = 0
    ceiling_color: int = 0
    map_lines: list[str] = field(default_factory=list)
    map_height: int = 0
    map_width: int = 0
    player_x: int = 0
    player_y: int = 0
    player_dir: str = ""
    monsters: list[Any] = field(default_factory=list)
    doors: list[Any] = field(default_factory=list)


def has_cub_extension(filename: str) -> bool:
    """True when the file name ends in ``.cub``."""
    return len(filename) >= 4 and filename.endswith(".cub")


def is_xmp_extension(filename: str) -> bool:
    """True when the file name ends in ``.xmp``, a rejected texture suffix."""
    return len(filename) >= 4 and filename.endswith(".xmp")


def has_tab(text: str) -> bool:
    """True when the text holds a tab character."""
    return "\t" in text


def is_blank(line: str) -> bool:
    """True when the line holds only spaces, tabs, newlines or carriage returns."""
    return all(char in _BLANK_CHARS for char in line)


def is_element_line(line: str) -> bool:
    """True when the line starts with a texture or colour identifier."""
    return line.startswith(_TEXTURE_KEYS + _COLOR_KEYS)


def read_cub_file(path: str | Path) -> list[str]:
    """Return the lines of a scene file, each without its trailing newline."""
    try:
        with open(path, encoding="latin-1", newline="") as handle:
            content = handle.read()
    except OSError as exc:
        raise ConfigError("Failed to read .cub file") from exc
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _split(text: str, separator: str) -> list[str]:
    return [part for part in text.split(separator) if part]


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_texture(line: str, config: Config) -> None:
    """Store the texture path of a ``NO``/``SO``/``WE``/``EA`` line."""
    if any(char not in _TEXTURE_CHARS for char in line):
        raise ConfigError("Invalid character in texture line.")
    tokens = _split(line, " ")
    if len(tokens) != 2:
        raise ConfigError("Invalid texture format. Should be: xxxx.xpm")
    key, path = tokens
    attribute = {
        "NO": "no_path",
        "SO": "so_path",
        "WE": "we_path",
        "EA": "ea_path",
    }.get(key[:2])
    if attribute is None:
        raise ConfigError("Can only be : NO, SO, WE and EA")
    setattr(config, attribute, path)


def parse_rgb_component(text: str) -> int:
    """Parse one colour component and check it lies in 0..255."""
    value = _atoi(text)
    if not 0 <= value <= 255:
        raise ConfigError("RGB color out of range, should be between 0 and 255")
    return value


def combine_rgb(r: int, g: int, b: int) -> int:
    """Pack three components into 0xRRGGBB."""
    return (r << 16) | (g << 8) | b


def check_rgb_chars(line: str) -> None:
    """Reject tabs and any character not allowed in a colour line."""
    for char in line:
        if char == "\t":
            raise ConfigError("Tab is not valid in RGB range.")
        if char not in _RGB_CHARS:
            raise ConfigError("Invalid caracter in floor/ceiling lines.")


def parse_color_line(line: str, config: Config) -> None:
    """Store the floor or ceiling colour of an ``F``/``C`` line."""
    check_rgb_chars(line)
    tokens = _split(line, " ")
    if len(tokens) != 2:
        raise ConfigError("Invalide color format, should be: X n,n,n")
    components = _split(tokens[1], ",")
    if len(components) != 3:
        raise ConfigError("Invalide RGB format, should be: n,n,n")
    color = combine_rgb(*(parse_rgb_component(part) for part in components))
    if tokens[0] == "F":
        config.floor_color = color
    elif tokens[0] == "C":
        config.ceiling_color = color
    else:
        raise ConfigError("Unknown color. Can only be: F or C")


def process_element(line: str, config: Config) -> bool:
    """Parse an element line; return whether it was one."""
    if line.startswith(_TEXTURE_KEYS):
        parse_texture(line, config)
    elif line.startswith(_COLOR_KEYS):
        parse_color_line(line, config)
    else:
        return False
    return True


def copy_map_lines(lines: list[str], config: Config) -> None:
    """Store the map part of the file and its dimensions in the config."""
    empty_found = False
    for line in lines:
        if is_blank(line):
            empty_found = True
        elif empty_found:
            raise ConfigError("empty line found inside the map.")
    config.map_height = len(lines)
    config.map_width = max((len(line) for line in lines), default=0)
    config.map_lines = list(lines)


def parse_config(lines: list[str]) -> Config:
    """Parse the six elements and the map from the lines of a scene file."""
    config = Config()
    elements = 0
    map_start = len(lines)
    for index, line in enumerate(lines):
        if has_tab(line):
            raise ConfigError("Tab is not valid in config.")
        if is_blank(line):
            continue
        if is_element_line(line):
            elements += process_element(line, config)
            continue
        map_start = index
        break
    if elements != _REQUIRED_ELEMENTS:
        raise ConfigError("Missing or duplicate elements.")
    copy_map_lines(lines[map_start:], config)
    return config