"""
TTF/OTF to packed pixel font

Every codepoint is rendered into a cell of fixed size: the height is what
the caller asks for, the width is the advance of a capital W at that
scale. Coverage is thresholded to 1 bit per pixel, optionally after
supersampling.

Author: fontbake Team
License: MIT
"""

import logging
import math

from PIL import Image

from .config import DEFAULT_SUPERSAMPLE, DEFAULT_THRESHOLD, WIDTH_REFERENCE_CHAR
from .errors import BakeError, BakeErrorCode
from .fileio import read_font_file
from .outline import OutlineFont
from .packer import pack_glyph
from .pixelfont import PixelFont, allocate_font

logger = logging.getLogger('fontbake.ttf')


def bake_outline_bytes(data: bytes, target_height_px: int, cp_start: int, cp_end: int,
                       threshold: int = DEFAULT_THRESHOLD,
                       supersample: int = DEFAULT_SUPERSAMPLE) -> PixelFont:
    """
    Bake [cp_start, cp_end] of an outline font held in memory.

    Args:
        data: TTF/OTF (or collection) bytes
        target_height_px: cell height; ascent - descent is scaled to it
        threshold: coverage 0-255 at or above which a pixel is set
        supersample: render at this many sub-pixels per pixel and average
    """
    if target_height_px < 1:
        raise ValueError(f"height must be positive, got {target_height_px}")
    if not 0 <= threshold <= 255:
        raise ValueError(f"threshold must be 0-255, got {threshold}")
    if supersample < 1:
        raise ValueError(f"supersample must be >= 1, got {supersample}")
    if cp_start > cp_end:
        raise BakeError(BakeErrorCode.INVALID_RANGE,
                        f"start U+{cp_start:04X} > end U+{cp_end:04X}")

    outline = OutlineFont.from_bytes(data)

    scale = outline.scale_for_pixel_height(target_height_px)
    width = math.ceil(outline.advance_width(ord(WIDTH_REFERENCE_CHAR), scale))
    if width < 1:
        raise BakeError(BakeErrorCode.FONT_FILE_INVALID,
                        f"'{WIDTH_REFERENCE_CHAR}' has no advance width")

    ascent, _ = outline.vmetrics(scale)
    ascent = int(ascent + .5)
    logger.debug(f"scale {scale:.6f}, ascent {ascent}")

    font = allocate_font(width, target_height_px, cp_start, cp_end)

    try:
        canvas = Image.new('L', (width * supersample, target_height_px * supersample), 0)
    except MemoryError:
        raise BakeError(BakeErrorCode.ALLOCATION_FAILED, "glyph canvas", font) from None

    missing = 0
    try:
        for cp in range(cp_start, cp_end + 1):
            if not outline.has_glyph(cp):
                missing += 1
            coverage = outline.render(cp, scale, width, target_height_px, supersample, canvas)
            pack_glyph(font, cp, coverage, ascent, threshold)
    finally:
        canvas.close()

    if missing:
        logger.debug(f"{missing} codepoints not in font, left blank")
    return font


def bake_from_outline_font(path, target_height_px: int, cp_start: int, cp_end: int,
                           threshold: int = DEFAULT_THRESHOLD,
                           supersample: int = DEFAULT_SUPERSAMPLE) -> PixelFont:
    """Read a TTF/OTF file and bake [cp_start, cp_end] into a PixelFont"""
    data = read_font_file(path)
    font = bake_outline_bytes(data, target_height_px, cp_start, cp_end, threshold, supersample)
    logger.info(f"{path}: {font.glyph_count} glyphs, {font.char_px_width}x{font.char_px_height} px")
    return font
