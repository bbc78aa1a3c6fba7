"""Reading XPM pixmaps into images."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from cubcaster.colornames import lookup_color
from cubcaster.image import Image

TRANSPARENT = 0xFF000000

_HEX_PREFIX = re.compile(r"[0-9a-fA-F]*")
_INT_PREFIX = re.compile(r"[ \t\n\r\f\v]*([+-]?\d+)")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(ValueError):
    """Raised when XPM data cannot be read or understood."""


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def find(text: str, pattern: str) -> int:
    """Return the position of the first occurrence of pattern, or -1."""
    return text.find(pattern)


def find_unquoted(text: str, pattern: str) -> int:
    """Like find, but skip occurrences inside double-quoted strings."""
    quoted = False
    last_start = len(text) - len(pattern)
    for pos, char in enumerate(text):
        if pos > last_start:
            break
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text: str, start: int, end: int) -> str:
    end = min(end, len(text))
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside strings with spaces, keeping length."""
    while (begin := find_unquoted(text, "/*")) != -1:
        close = text.find("*/", begin + 2)
        end = len(text) if close == -1 else close + 2
        text = _blank(text, begin, end)
    while (begin := find_unquoted(text, "//")) != -1:
        newline = text.find("\n", begin + 2)
        end = len(text) if newline == -1 else newline + 1
        text = _blank(text, begin, end)
    return text


def extract_strings(text: str) -> list[str]:
    """Return the contents of every double-quoted string, in order."""
    return _QUOTED.findall(text)


def parse_color(name: str, suffix: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB, -1 for None, 0 if unknown."""
    if name.startswith("#"):
        digits = _HEX_PREFIX.match(name, 1).group(0)
        return int(digits, 16) if digits else 0
    if suffix:
        name = f"{name} {suffix}"[:63]
    return lookup_color(name)


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse_header(line: str) -> tuple[int, int, int, int]:
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"bad XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if not all(values):
        raise XpmError(f"bad XPM header: {line!r}")
    return values  # type: ignore[return-value]


def _parse_colors(lines: Sequence[str], cpp: int) -> dict[str, int]:
    colors: dict[str, int] = {}
    for line in lines:
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line without 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line without a colour: {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        value = parse_color(words[index], suffix)
        key = line[:cpp]
        if cpp <= 2:
            colors[key] = value
        else:
            colors.setdefault(key, value)
    return colors


def parse_xpm(lines: Sequence[str]) -> Image:
    """Build an image from the strings of an XPM file.

    Transparent pixels (colour ``None``) are stored as 0xFF000000.
    """
    if not lines:
        raise XpmError("empty XPM data")
    width, height, ncolors, cpp = _parse_header(lines[0])
    if width < 0 or height < 0 or ncolors < 0 or cpp < 0:
        raise XpmError(f"bad XPM header: {lines[0]!r}")
    color_lines = lines[1 : 1 + ncolors]
    if len(color_lines) < ncolors:
        raise XpmError("XPM data ends inside the colour table")
    colors = _parse_colors(color_lines, cpp)
    rows = lines[1 + ncolors : 1 + ncolors + height]
    if len(rows) < height:
        raise XpmError("XPM data ends inside the pixels")
    image = Image(width, height)
    for y, row in enumerate(rows):
        if len(row) < width * cpp:
            raise XpmError(f"XPM row {y} is too short")
        for x in range(width):
            color = colors.get(row[x * cpp : (x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def read_xpm_file(path: str | Path) -> Image:
    """Read and parse an XPM file."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc.strerror}") from exc
    return parse_xpm(extract_strings(strip_comments(text)))