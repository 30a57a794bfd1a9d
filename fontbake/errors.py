"""
Bake failures: one closed set of codes shared by both acquisition paths.

Author: fontbake Team
License: MIT
"""

from enum import Enum


class BakeErrorCode(Enum):
    FILE_NOT_FOUND = 'file not found'
    INVALID_RANGE = 'invalid codepoint range'
    FONTBOUNDINGBOX_MISSING = 'FONTBOUNDINGBOX missing'
    FONTBOUNDINGBOX_MALFORMED = 'FONTBOUNDINGBOX malformed'
    CODEPOINT_MALFORMED = 'codepoint malformed'
    CHARACTER_BYTES_TRUNCATED = 'character bytes truncated'
    CHARACTER_BYTES_MALFORMED = 'character bytes malformed'
    ALLOCATION_FAILED = 'allocation failed'
    FONT_FILE_INVALID = 'font file invalid'
    OUT_OF_INPUT = 'out of input'


class BakeError(Exception):
    """
    A bake did not complete.

    Attributes:
        code: the BakeErrorCode naming what failed
        font: the partially populated PixelFont when the failure happened
              after the table was allocated, else None. The caller owns it
              and should release it.
    """

    def __init__(self, code: BakeErrorCode, message: str = '', font=None):
        self.code = code
        self.font = font
        super().__init__(f"{code.value}: {message}" if message else code.value)
