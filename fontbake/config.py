"""
fontbake configuration constants

Every tunable the bakers rely on lives here so that nothing is hidden in
module globals of the builders themselves. The CLI exposes the user-facing
ones as argparse defaults.

Author: fontbake Team
License: MIT
"""

# ============================================================================
#                           Placeholder fill
# ============================================================================

# 16-bit alternating pattern written into every BDF glyph slot before parsing.
# Glyphs that never appear in the file keep it and show up as a checkerboard.
PLACEHOLDER_PATTERN = 0x55AA

# ============================================================================
#                           Input limits
# ============================================================================

# Font files are read whole; anything past this many bytes is dropped.
MAX_FONT_FILE_SIZE = 1 << 25

# ============================================================================
#                           BDF tokens
# ============================================================================

BDF_FONTBOUNDINGBOX = b'FONTBOUNDINGBOX '
BDF_ENCODING = b'ENCODING '
BDF_BITMAP = b'BITMAP'

# ============================================================================
#                           Outline fonts
# ============================================================================

# The advance width of this glyph sets the monospace cell width.
WIDTH_REFERENCE_CHAR = 'W'

DEFAULT_THRESHOLD = 128
DEFAULT_SUPERSAMPLE = 1
DEFAULT_HEIGHT = 16

# ============================================================================
#                           Codepoint range
# ============================================================================

# Printable ASCII
DEFAULT_CP_START = 0x20
DEFAULT_CP_END = 0x7E
