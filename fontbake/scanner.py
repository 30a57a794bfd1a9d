"""
Cursor over the raw bytes of a line-oriented text format (BDF)

The scanner never copies the source; it only moves a position forward.
Advancing past the end raises BakeError(OUT_OF_INPUT) instead of reading
beyond the buffer.

Author: fontbake Team
License: MIT
"""

from typing import Optional

from .errors import BakeError, BakeErrorCode

WHITESPACE = b' \t\r\n'
HEX_DIGITS = b'0123456789abcdefABCDEF'
DIGITS = b'0123456789'


class Scanner:
    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    @property
    def line(self) -> int:
        """1-based line number of the cursor, for error messages"""
        return self.data.count(b'\n', 0, self.pos) + 1

    @property
    def exhausted(self) -> bool:
        return self.pos >= len(self.data)

    def peek(self) -> Optional[int]:
        if self.exhausted:
            return None
        return self.data[self.pos]

    def advance(self, n: int = 1):
        if n > self.remaining:
            raise BakeError(BakeErrorCode.OUT_OF_INPUT,
                            f"advance by {n} at offset {self.pos}, {self.remaining} left")
        self.pos += n

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def on_newline(self) -> bool:
        return self.peek() == ord('\n')

    def on_whitespace(self) -> bool:
        c = self.peek()
        return c is not None and c in WHITESPACE

    def startswith(self, token: bytes) -> bool:
        return self.data.startswith(token, self.pos)

    # ------------------------------------------------------------------
    # Skipping
    # ------------------------------------------------------------------

    def eat_whitespace(self):
        while self.on_whitespace():
            self.advance()

    def eat_to_next_line(self):
        end = self.data.find(b'\n', self.pos)
        if end < 0:
            end = len(self.data)
        self.advance(end - self.pos)
        self.eat_whitespace()

    def seek_line_prefix(self, token: bytes) -> bool:
        """
        Skip whole lines until one starts with token, then step past it.

        Returns False if the input ran out first.
        """
        while not self.startswith(token):
            if self.exhausted:
                return False
            self.eat_to_next_line()
        self.advance(len(token))
        return True

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def rest_of_line(self) -> bytes:
        """Bytes from the cursor up to (not including) the next newline"""
        end = self.data.find(b'\n', self.pos)
        if end < 0:
            end = len(self.data)
        return self.data[self.pos:end]

    def read_int(self) -> Optional[int]:
        """
        Parse an optionally signed decimal integer after blanks on the
        current line. Returns None if there are no digits.
        """
        while self.peek() in (ord(' '), ord('\t')):
            self.advance()

        start = self.pos
        if self.peek() in (ord('-'), ord('+')):
            self.advance()
        digits = self.pos
        while self.peek() is not None and self.peek() in DIGITS:
            self.advance()

        if self.pos == digits:
            self.pos = start
            return None
        return int(self.data[start:self.pos])

    def read_hex_byte(self) -> Optional[int]:
        """Parse two hex digits. Returns None if they are not both hex."""
        pair = self.data[self.pos:self.pos + 2]
        if len(pair) != 2 or pair[0] not in HEX_DIGITS or pair[1] not in HEX_DIGITS:
            return None
        self.advance(2)
        return int(pair, 16)
