"""
Outline font access for the TTF/OTF baker

fontTools supplies the font-wide metrics (units per em, hhea ascent/descent,
advance widths, cmap); Pillow's FreeType binding renders greyscale coverage.

Author: fontbake Team
License: MIT
"""

import logging
import math
from io import BytesIO
from typing import Dict, Optional

from fontTools.ttLib import TTFont
from PIL import Image, ImageDraw, ImageFont

from .errors import BakeError, BakeErrorCode
from .packer import CoverageBitmap

logger = logging.getLogger('fontbake.outline')


class OutlineFont:
    """A parsed outline font plus a cache of Pillow faces by pixel size"""

    def __init__(self, data: bytes, ttfont: TTFont):
        self.data = data
        self.units_per_em = ttfont['head'].unitsPerEm
        self.ascent = ttfont['hhea'].ascent
        self.descent = ttfont['hhea'].descent
        self.cmap: Dict[int, str] = ttfont.getBestCmap() or {}
        self.metrics = {name: adv for name, (adv, _) in ttfont['hmtx'].metrics.items()}
        self.notdef = ttfont.getGlyphOrder()[0]
        self._faces: Dict[float, ImageFont.FreeTypeFont] = {}

    @classmethod
    def from_bytes(cls, data: bytes) -> 'OutlineFont':
        """Parse a font (first face of a collection); FONT_FILE_INVALID if unusable"""
        data = bytes(data)
        try:
            ttfont = TTFont(BytesIO(data), fontNumber=0)
            font = cls(data, ttfont)
            ttfont.close()
            # FreeType must accept it as well
            font.face(font.units_per_em)
        except Exception as e:
            raise BakeError(BakeErrorCode.FONT_FILE_INVALID, str(e) or type(e).__name__) from e

        if font.ascent - font.descent <= 0:
            raise BakeError(BakeErrorCode.FONT_FILE_INVALID,
                            f"hhea ascent {font.ascent} / descent {font.descent}")
        return font

    def face(self, pixels_per_em: float) -> ImageFont.FreeTypeFont:
        face = self._faces.get(pixels_per_em)
        if face is None:
            face = ImageFont.truetype(BytesIO(self.data), size=pixels_per_em, index=0)
            self._faces[pixels_per_em] = face
        return face

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def scale_for_pixel_height(self, pixel_height: float) -> float:
        """Scale so that ascent - descent spans pixel_height pixels"""
        return pixel_height / (self.ascent - self.descent)

    def has_glyph(self, codepoint: int) -> bool:
        return codepoint in self.cmap

    def advance_width(self, codepoint: int, scale: float) -> float:
        """Scaled advance; unmapped codepoints measure the .notdef glyph"""
        name = self.cmap.get(codepoint, self.notdef)
        return self.metrics.get(name, 0) * scale

    def vmetrics(self, scale: float) -> tuple:
        """(ascent, descent) in scaled, unrounded pixels; descent is negative"""
        return self.ascent * scale, self.descent * scale

    # ------------------------------------------------------------------
    # Coverage
    # ------------------------------------------------------------------

    def render(self, codepoint: int, scale: float, cell_width: int, cell_height: int,
               supersample: int = 1, canvas: Optional[Image.Image] = None) -> CoverageBitmap:
        """
        Render one codepoint into a (cell_width x cell_height) * supersample
        greyscale buffer.

        The buffer's top-left corner sits (x_offset, y_offset) target pixels
        from the baseline origin, where (x_offset, y_offset) is the top-left
        of the glyph's box. canvas, if it has the right size, is cleared and
        reused instead of allocating a new image.
        """
        s = supersample
        size = (cell_width * s, cell_height * s)
        if canvas is None or canvas.size != size:
            canvas = Image.new('L', size, 0)
        else:
            canvas.paste(0, (0, 0) + size)

        if not self.has_glyph(codepoint):
            return CoverageBitmap(canvas.tobytes(), size[0], size[1], 0, 0, s)

        face = self.face(scale * s * self.units_per_em)
        char = chr(codepoint)
        x0, y0, _, _ = face.getbbox(char, anchor='ls')
        x_offset = math.floor(x0 / s)
        y_offset = math.floor(y0 / s)

        draw = ImageDraw.Draw(canvas)
        draw.text((-x_offset * s, -y_offset * s), char, font=face, fill=255, anchor='ls')

        return CoverageBitmap(canvas.tobytes(), size[0], size[1], x_offset, y_offset, s)
