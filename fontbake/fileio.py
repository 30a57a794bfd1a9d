"""
Whole-file reads for font sources, bounded by MAX_FONT_FILE_SIZE.

Author: fontbake Team
License: MIT
"""

import logging
from pathlib import Path

from .config import MAX_FONT_FILE_SIZE
from .errors import BakeError, BakeErrorCode

logger = logging.getLogger('fontbake.fileio')


def read_font_file(path, limit: int = MAX_FONT_FILE_SIZE) -> bytes:
    """
    Read a font file into memory.

    Files longer than limit are truncated (with a warning); a file that
    cannot be opened raises BakeError(FILE_NOT_FOUND).
    """
    path = Path(path)
    try:
        with open(path, 'rb') as f:
            data = f.read(limit)
            truncated = f.read(1) != b''
    except OSError as e:
        raise BakeError(BakeErrorCode.FILE_NOT_FOUND, f"{path}: {e.strerror or e}") from e

    if truncated:
        logger.warning(f"{path} is larger than {limit:,} bytes, reading only the first {limit:,}")
    logger.debug(f"read {len(data):,} bytes from {path}")
    return data
