"""
Packed monospace 1-bit font table

Layout (binary compatible with Waveshare's sFONT):
  - glyphs ordered by ascending codepoint starting at cp_start
  - each glyph: bytes_per_glyph contiguous bytes
  - each row: bytes_per_line bytes, bits packed MSB first, left to right
  - padding bits past char_px_width at the end of a row are never read

Author: fontbake Team
License: MIT
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .config import PLACEHOLDER_PATTERN
from .errors import BakeError, BakeErrorCode

logger = logging.getLogger('fontbake.table')


def bytes_per_line_for(width: int) -> int:
    return (width + 7) // 8


@dataclass
class PixelFont:
    table: Optional[bytearray]
    char_px_width: int
    char_px_height: int
    bytes_per_line: int
    bytes_per_glyph: int
    cp_start: int
    cp_end: int

    @property
    def glyph_count(self) -> int:
        return self.cp_end - self.cp_start + 1

    def glyph_offset(self, codepoint: int) -> int:
        """Byte offset of a codepoint's slot inside the table"""
        if not self.cp_start <= codepoint <= self.cp_end:
            raise KeyError(f"U+{codepoint:04X} outside U+{self.cp_start:04X}..U+{self.cp_end:04X}")
        return (codepoint - self.cp_start) * self.bytes_per_glyph

    def glyph(self, codepoint: int) -> bytes:
        offset = self.glyph_offset(codepoint)
        return bytes(self.table[offset:offset + self.bytes_per_glyph])

    def pixel(self, codepoint: int, x: int, y: int) -> bool:
        offset = self.glyph_offset(codepoint) + y * self.bytes_per_line + x // 8
        return bool(self.table[offset] & (0x80 >> (x % 8)))

    def rows(self, codepoint: int) -> List[List[int]]:
        """Unpack one glyph into char_px_height rows of 0/1 pixels"""
        return [
            [int(self.pixel(codepoint, x, y)) for x in range(self.char_px_width)]
            for y in range(self.char_px_height)
        ]

    @property
    def released(self) -> bool:
        return self.table is None

    def release(self):
        """Drop the table. Safe on a font whose table was never allocated."""
        self.table = None


def placeholder_glyph(bytes_per_line: int, height: int,
                      pattern: int = PLACEHOLDER_PATTERN) -> bytes:
    """
    Fill pattern for one glyph slot.

    1 byte per row:  rows alternate hi/lo byte of the pattern (checkerboard)
    2 bytes per row: rows alternate the pattern and its byte-swapped form
    3+ bytes per row: the 16-bit pattern repeated across the slot (stripes)
    """
    hi = (pattern >> 8) & 0xFF
    lo = pattern & 0xFF
    size = bytes_per_line * height

    if bytes_per_line == 2:
        period = bytes((hi, lo, lo, hi))
    else:
        period = bytes((hi, lo))
    return (period * (size // len(period) + 1))[:size]


def allocate_font(width: int, height: int, cp_start: int, cp_end: int,
                  fill: Optional[bytes] = None,
                  pattern: Optional[int] = None) -> PixelFont:
    """
    Allocate a table for [cp_start, cp_end] with width x height cells.

    fill, when given, is one glyph slot's worth of bytes copied into every
    slot; pattern, when given, fills every slot with placeholder_glyph();
    otherwise the table is zeroed.
    """
    if cp_start > cp_end:
        raise BakeError(BakeErrorCode.INVALID_RANGE,
                        f"start U+{cp_start:04X} > end U+{cp_end:04X}")

    bytes_per_line = bytes_per_line_for(width)
    bytes_per_glyph = bytes_per_line * height
    glyph_count = cp_end - cp_start + 1
    if fill is not None and len(fill) != bytes_per_glyph:
        raise ValueError(f"fill is {len(fill)} bytes, glyph slot is {bytes_per_glyph}")

    try:
        if pattern is not None:
            fill = placeholder_glyph(bytes_per_line, height, pattern)
        if fill is None:
            table = bytearray(bytes_per_glyph * glyph_count)
        else:
            table = bytearray(fill) * glyph_count
    except (MemoryError, OverflowError):
        raise BakeError(BakeErrorCode.ALLOCATION_FAILED,
                        f"{bytes_per_glyph * glyph_count} bytes") from None

    logger.debug(f"width:           {width}")
    logger.debug(f"height:          {height}")
    logger.debug(f"bytes per line:  {bytes_per_line}")
    logger.debug(f"bytes per glyph: {bytes_per_glyph}")

    return PixelFont(
        table=table,
        char_px_width=width,
        char_px_height=height,
        bytes_per_line=bytes_per_line,
        bytes_per_glyph=bytes_per_glyph,
        cp_start=cp_start,
        cp_end=cp_end,
    )


def release(font: Optional[PixelFont]):
    if font is not None:
        font.release()
