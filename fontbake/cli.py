"""
fontbake command line

Bake a BDF or TTF/OTF font into a packed monospace 1-bit table for
e-paper and other dumb displays.

Usage:
    fontbake bdf ter-u16n.bdf -o font16.bin
    fontbake ttf DejaVuSansMono.ttf -o font16.c --format c --height 16
    fontbake ttf DejaVuSansMono.ttf --height 24 --supersample 4 --preview A

Author: fontbake Team
License: MIT
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .bdf import bake_from_text_format
from .config import (DEFAULT_CP_END, DEFAULT_CP_START, DEFAULT_HEIGHT, DEFAULT_SUPERSAMPLE,
                     DEFAULT_THRESHOLD)
from .errors import BakeError
from .export import render_glyph_ascii, to_bytes, to_c_source
from .pixelfont import release
from .ttf import bake_from_outline_font

logger = logging.getLogger('fontbake')

# ============================================================================
#                           Logging
# ============================================================================

class ColoredFormatter(logging.Formatter):
    """Log formatter with one ANSI colour per level"""

    COLORS = {
        'DEBUG': '\033[36m',     # cyan
        'INFO': '\033[32m',      # green
        'WARNING': '\033[33m',   # yellow
        'ERROR': '\033[31m',     # red
        'CRITICAL': '\033[35m',  # magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    handler = logging.StreamHandler()
    handler.setFormatter(ColoredFormatter(
        '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    ))
    logging.basicConfig(level=level, handlers=[handler], force=True)

# ============================================================================
#                           Arguments
# ============================================================================

def codepoint(text: str) -> int:
    """Decimal, 0x-prefixed hex, or U+XXXX"""
    text = text.strip()
    if text[:2].upper() == 'U+':
        return int(text[2:], 16)
    return int(text, 0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fontbake',
        description='Bake BDF or TTF/OTF fonts into packed monospace 1-bit glyph tables'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('font', help='Input font file')
    common.add_argument('-o', '--output', help='Output file (required unless --preview)')
    common.add_argument('--format', choices=('bin', 'c'), default='bin',
                        help='Raw table or C source (default: bin)')
    common.add_argument('--name', help='C symbol name (default: derived from output file)')
    common.add_argument('--start', type=codepoint, default=DEFAULT_CP_START,
                        help=f'First codepoint (default: 0x{DEFAULT_CP_START:X})')
    common.add_argument('--end', type=codepoint, default=DEFAULT_CP_END,
                        help=f'Last codepoint (default: 0x{DEFAULT_CP_END:X})')
    common.add_argument('--preview', metavar='CHAR',
                        help='Print one baked character and exit')
    common.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('bdf', parents=[common], help='Bake a BDF bitmap font')

    ttf = sub.add_parser('ttf', parents=[common], help='Bake a TTF/OTF outline font')
    ttf.add_argument('-H', '--height', type=int, default=DEFAULT_HEIGHT,
                     help=f'Glyph height in pixels (default: {DEFAULT_HEIGHT})')
    ttf.add_argument('-t', '--threshold', type=int, default=DEFAULT_THRESHOLD,
                     help=f'Grey level 0-255 that counts as ink (default: {DEFAULT_THRESHOLD})')
    ttf.add_argument('-s', '--supersample', type=int, default=DEFAULT_SUPERSAMPLE,
                     help=f'Sub-pixels per pixel and axis (default: {DEFAULT_SUPERSAMPLE})')

    return parser

# ============================================================================
#                           Main
# ============================================================================

def bake(args):
    if args.command == 'bdf':
        return bake_from_text_format(args.font, args.start, args.end)
    return bake_from_outline_font(args.font, args.height, args.start, args.end,
                                  args.threshold, args.supersample)


def write_output(font, args):
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    if args.format == 'c':
        name = args.name or f"Font{font.char_px_height}"
        output.write_text(to_c_source(font, name), encoding='utf-8')
    else:
        output.write_bytes(to_bytes(font))

    logger.info(f"Created: {output}")
    logger.info(f"  Glyphs: {font.glyph_count} (U+{font.cp_start:04X}..U+{font.cp_end:04X})")
    logger.info(f"  Size: {font.char_px_width}x{font.char_px_height} pixels, "
                f"{font.bytes_per_glyph} bytes per glyph")
    logger.info(f"  Table: {len(font.table):,} bytes")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.preview:
        if len(args.preview) != 1:
            parser.error('--preview takes a single character')
        args.start = args.end = ord(args.preview)
    elif not args.output:
        parser.error('-o/--output is required')

    font = None
    try:
        font = bake(args)
        if args.preview:
            cp = ord(args.preview)
            print(f"Character: '{args.preview}' (U+{cp:04X})")
            print(f"Size: {font.char_px_width}x{font.char_px_height} pixels")
            print(render_glyph_ascii(font, cp))
        else:
            write_output(font, args)
    except BakeError as e:
        logger.error(f"{args.font}: {e}")
        font = e.font
        return 1
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 1
    finally:
        release(font)

    return 0


if __name__ == '__main__':
    sys.exit(main())
