"""
fontbake: BDF and TTF/OTF fonts to packed monospace 1-bit glyph tables

    font = bake_from_text_format('ter-u16n.bdf', 0x20, 0x7E)
    try:
        display.draw_text(font.table, font.char_px_width, font.char_px_height)
    finally:
        release(font)

Author: fontbake Team
License: MIT
"""

__version__ = '1.0.0'

from .bdf import bake_bdf_bytes, bake_from_text_format
from .errors import BakeError, BakeErrorCode
from .pixelfont import PixelFont, allocate_font, placeholder_glyph, release
from .ttf import bake_from_outline_font, bake_outline_bytes

__all__ = [
    'BakeError',
    'BakeErrorCode',
    'PixelFont',
    'allocate_font',
    'bake_bdf_bytes',
    'bake_from_outline_font',
    'bake_from_text_format',
    'bake_outline_bytes',
    'placeholder_glyph',
    'release',
]
