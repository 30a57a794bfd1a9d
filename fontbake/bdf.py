"""
BDF to packed pixel font

Builds a PixelFont straight from the text of a BDF file. Only the global
FONTBOUNDINGBOX is consulted for the cell size; every glyph is expected to
use that box (monospace fonts such as Terminus or unifont).

BDF layout consumed here:
    FONTBOUNDINGBOX <w> <h> <x> <y>
    ...
    STARTCHAR <name>
    ENCODING <codepoint>
    ...
    BITMAP
    <hex row> x h
    ENDCHAR

Glyphs outside the requested range are not parsed; their BITMAP rows are
stepped over by the next search for ENCODING.

Author: fontbake Team
License: MIT
"""

import logging

from .config import BDF_BITMAP, BDF_ENCODING, BDF_FONTBOUNDINGBOX, PLACEHOLDER_PATTERN
from .errors import BakeError, BakeErrorCode
from .fileio import read_font_file
from .pixelfont import PixelFont, allocate_font
from .scanner import Scanner

logger = logging.getLogger('fontbake.bdf')


def read_bounding_box(scanner: Scanner) -> tuple:
    """Find FONTBOUNDINGBOX and return (width, height, x_origin, y_origin)"""
    if not scanner.seek_line_prefix(BDF_FONTBOUNDINGBOX):
        raise BakeError(BakeErrorCode.FONTBOUNDINGBOX_MISSING)

    values = []
    for _ in range(4):
        value = scanner.read_int()
        if value is None:
            break
        values.append(value)

    if len(values) < 4:
        raise BakeError(BakeErrorCode.FONTBOUNDINGBOX_MALFORMED,
                        f"line {scanner.line}: {scanner.rest_of_line()!r}")

    width, height = values[0], values[1]
    if width <= 0 or height <= 0:
        raise BakeError(BakeErrorCode.FONTBOUNDINGBOX_MALFORMED,
                        f"line {scanner.line}: {width}x{height} cell")
    return tuple(values)


def read_glyph_rows(scanner: Scanner, font: PixelFont, codepoint: int):
    """Parse the hex rows after BITMAP into the codepoint's slot"""
    if not scanner.seek_line_prefix(BDF_BITMAP):
        raise BakeError(BakeErrorCode.CHARACTER_BYTES_TRUNCATED,
                        f"U+{codepoint:04X}: no BITMAP", font)
    scanner.eat_whitespace()

    bytes_per_line = font.bytes_per_line
    # 2 hex digits per byte plus one newline per row
    needed = font.char_px_height * (2 * bytes_per_line + 1)
    if scanner.remaining < needed:
        raise BakeError(BakeErrorCode.CHARACTER_BYTES_TRUNCATED,
                        f"U+{codepoint:04X}: {scanner.remaining} bytes left, need {needed}", font)

    offset = font.glyph_offset(codepoint)
    for y in range(font.char_px_height):
        row = offset + y * bytes_per_line
        for x in range(bytes_per_line):
            value = scanner.read_hex_byte()
            if value is None:
                raise BakeError(BakeErrorCode.CHARACTER_BYTES_MALFORMED,
                                f"U+{codepoint:04X} line {scanner.line}: "
                                f"{scanner.rest_of_line()!r}", font)
            font.table[row + x] = value
        scanner.eat_whitespace()


def bake_bdf_bytes(data: bytes, cp_start: int, cp_end: int,
                   pattern: int = PLACEHOLDER_PATTERN) -> PixelFont:
    """
    Bake the codepoints [cp_start, cp_end] of a BDF font held in memory.

    Slots for codepoints the file does not define keep the placeholder
    pattern. Failures after the table exists carry it on BakeError.font.
    """
    if cp_start > cp_end:
        raise BakeError(BakeErrorCode.INVALID_RANGE,
                        f"start U+{cp_start:04X} > end U+{cp_end:04X}")

    scanner = Scanner(data)
    width, height, _, _ = read_bounding_box(scanner)

    font = allocate_font(width, height, cp_start, cp_end, pattern=pattern)

    baked = 0
    skipped = 0
    while scanner.seek_line_prefix(BDF_ENCODING):
        codepoint = scanner.read_int()
        if codepoint is None:
            raise BakeError(BakeErrorCode.CODEPOINT_MALFORMED,
                            f"line {scanner.line}: {scanner.rest_of_line()!r}", font)

        if not cp_start <= codepoint <= cp_end:
            skipped += 1
            continue

        read_glyph_rows(scanner, font, codepoint)
        baked += 1

    logger.debug(f"baked {baked} glyphs, skipped {skipped} outside U+{cp_start:04X}..U+{cp_end:04X}")
    return font


def bake_from_text_format(path, cp_start: int, cp_end: int) -> PixelFont:
    """Read a BDF file and bake [cp_start, cp_end] into a PixelFont"""
    data = read_font_file(path)
    font = bake_bdf_bytes(data, cp_start, cp_end)
    logger.info(f"{path}: {font.glyph_count} glyphs, {font.char_px_width}x{font.char_px_height} px")
    return font
