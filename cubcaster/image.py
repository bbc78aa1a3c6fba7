"""In-memory 32-bit pixel images and colour-depth conversion."""

from __future__ import annotations

import struct
from collections.abc import Sequence

_PIXEL_MASK = 0xFFFFFFFF


class Image:
    """A ZPixmap-style image with 32 bits per pixel, little-endian.

    Every pixel starts out as 0 (black).
    """

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self._pixels = [0] * (width * height)

    @property
    def line_length(self) -> int:
        """Number of bytes in one row of pixels."""
        return self.width * (self.bits_per_pixel // 8)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> int:
        """Return the unsigned 32-bit pixel at (x, y); 0 outside the image."""
        if not self._inside(x, y):
            return 0
        return self._pixels[y * self.width + x]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a pixel; coordinates outside the image are ignored."""
        if self._inside(x, y):
            self._pixels[y * self.width + x] = color & _PIXEL_MASK

    def clear(self, color: int = 0) -> None:
        """Fill the whole image with one colour."""
        value = color & _PIXEL_MASK
        self._pixels = [value] * (self.width * self.height)

    def to_bytes(self) -> bytes:
        """Return the raw pixel data, row after row, 4 bytes per pixel."""
        return struct.pack(f"<{len(self._pixels)}I", *self._pixels)


def _mask_shift_and_bits(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError(f"colour mask must be positive, got {mask:#x}")
    shift = 0
    while not mask & 1:
        mask >>= 1
        shift += 1
    bits = 0
    while mask & 1:
        mask >>= 1
        bits += 1
    return shift, bits


def rgb_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (shift, bits) for red, green and blue, as one flat 6-tuple."""
    result: list[int] = []
    for mask in (red_mask, green_mask, blue_mask):
        result.extend(_mask_shift_and_bits(mask))
    return tuple(result)


def convert_color(color: int, depth: int, shifts: Sequence[int]) -> int:
    """Convert 0xRRGGBB into a pixel value for a visual of the given depth."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    r_shift, r_bits, g_shift, g_bits, b_shift, b_bits = shifts
    return (
        ((red >> (16 - r_bits)) << r_shift)
        + ((green >> (16 - g_bits)) << g_shift)
        + ((blue >> (16 - b_bits)) << b_shift)
    )