"""
Serialising and previewing a PixelFont

The table itself is already the on-device format; these helpers only wrap
it for files (raw dump, C source) or print it for a quick look.

Author: fontbake Team
License: MIT
"""

import re

from .pixelfont import PixelFont


def to_bytes(font: PixelFont) -> bytes:
    return bytes(font.table)


def c_identifier(name: str) -> str:
    ident = re.sub(r'\W', '_', name)
    if not ident or ident[0].isdigit():
        ident = '_' + ident
    return ident


def to_c_source(font: PixelFont, name: str = 'Font') -> str:
    """
    C source for the table plus a Waveshare style sFONT initialiser.

    One line per glyph row, annotated with the row's pixels.
    """
    name = c_identifier(name)
    lines = [
        f"// {font.char_px_width}x{font.char_px_height} px, "
        f"{font.bytes_per_glyph} bytes per glyph, "
        f"U+{font.cp_start:04X}..U+{font.cp_end:04X}",
        '',
        '#include <stdint.h>',
        '',
        f"const uint8_t {name}_Table[] = {{",
    ]

    for cp in range(font.cp_start, font.cp_end + 1):
        char = chr(cp) if chr(cp).isprintable() else ' '
        lines.append(f"    // @{font.glyph_offset(cp)} U+{cp:04X} '{char}'")
        for y in range(font.char_px_height):
            offset = font.glyph_offset(cp) + y * font.bytes_per_line
            row = font.table[offset:offset + font.bytes_per_line]
            values = ', '.join(f"0x{b:02X}" for b in row)
            pixels = ''.join('#' if font.pixel(cp, x, y) else ' ' for x in range(font.char_px_width))
            lines.append(f"    {values}, // {pixels}")

    lines += [
        '};',
        '',
        f"sFONT {name} = {{",
        f"    {name}_Table,",
        f"    {font.char_px_width}, /* Width */",
        f"    {font.char_px_height}, /* Height */",
        '};',
        '',
    ]
    return '\n'.join(lines)


def render_glyph_ascii(font: PixelFont, codepoint: int) -> str:
    """Framed block-character rendering of one glyph"""
    width = font.char_px_width
    out = ["+" + "-" * width + "+"]
    for row in font.rows(codepoint):
        out.append("|" + ''.join("█" if bit else " " for bit in row) + "|")
    out.append("+" + "-" * width + "+")
    return '\n'.join(out)
