"""
Greyscale coverage to 1-bit glyph rows

A CoverageBitmap is placed in the glyph cell at (x_offset, ascent + y_offset),
thresholded, and OR-ed into the slot MSB first. Anything falling outside the
cell is clipped; bits outside the glyph's ink box keep the slot's previous
(zeroed) value.

Author: fontbake Team
License: MIT
"""

from dataclasses import dataclass

from .pixelfont import PixelFont


@dataclass
class CoverageBitmap:
    """
    Greyscale samples for one glyph.

    width/height are the buffer dimensions, i.e. the target cell size times
    supersample. x_offset/y_offset are in target pixels and locate the
    buffer's top-left corner relative to the baseline origin (y grows down).
    """
    pixels: bytes
    width: int
    height: int
    x_offset: int
    y_offset: int
    supersample: int = 1

    @property
    def target_width(self) -> int:
        return self.width // self.supersample

    @property
    def target_height(self) -> int:
        return self.height // self.supersample

    def sample(self, x: int, y: int) -> int:
        """Coverage of target pixel (x, y), averaged over its sub-pixels"""
        s = self.supersample
        if s == 1:
            return self.pixels[y * self.width + x]

        total = 0
        for sy in range(y * s, y * s + s):
            row = sy * self.width
            for sx in range(x * s, x * s + s):
                total += self.pixels[row + sx]
        return total // (s * s)


class BitCursor:
    """Write position inside a byte buffer: byte index plus bit shift (7 = MSB)"""

    def __init__(self, buffer: bytearray, index: int = 0, shift: int = 7):
        self.buffer = buffer
        self.index = index
        self.shift = shift

    def seek(self, index: int, bit: int = 0):
        """Move to bit number `bit` (0 = MSB) of byte `index`"""
        self.index = index + bit // 8
        self.shift = 7 - bit % 8

    def put(self, bit: int):
        self.buffer[self.index] |= (bit & 1) << self.shift
        self.shift -= 1
        if self.shift < 0:
            self.shift = 7
            self.index += 1


def pack_glyph(font: PixelFont, codepoint: int, coverage: CoverageBitmap,
               ascent: int, threshold: int):
    """Threshold coverage into the codepoint's slot of font.table"""
    base = font.glyph_offset(codepoint)
    bytes_per_line = font.bytes_per_line

    y_start = ascent + coverage.y_offset
    y_end = y_start + coverage.target_height
    x_start = coverage.x_offset
    x_end = x_start + coverage.target_width

    x_first = max(0, x_start)
    x_last = min(x_end, font.char_px_width)

    cursor = BitCursor(font.table)
    for y in range(max(0, y_start), min(y_end, font.char_px_height)):
        cursor.seek(base + y * bytes_per_line, x_first)
        for x in range(x_first, x_last):
            cursor.put(coverage.sample(x - x_start, y - y_start) >= threshold)

