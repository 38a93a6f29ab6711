# scanner.py
# Character cursor shared by every sub-parser in json_parser.py
#
# =============================================================================
#  CURSOR OVER UNICODE SCALAR VALUES
# =============================================================================
#
# The parser works directly on characters, so the "token stream" is just the
# input string plus an integer offset. Lookahead is one character; backtracking
# is an explicit save/restore of the offset (mark/reset), which is all the
# keyword matcher needs.
# =============================================================================

from typing import Optional

# Unicode White_Space property. str.isspace() is wider: it also accepts the
# information separators U+001C..U+001F.
WHITESPACE = frozenset(
    [chr(c) for c in (0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0x85, 0xA0, 0x1680)]
    + [chr(c) for c in range(0x2000, 0x200B)]
    + [chr(c) for c in (0x2028, 0x2029, 0x202F, 0x205F, 0x3000)]
)


class Cursor:
    """
    Lookahead-1 position tracker over an in-memory string.

    End of input is signalled by None from peek() and advance(). Nothing here
    raises: deciding what end of input means is the caller's job.
    """
    __slots__ = ("_text", "_pos", "_len")

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self._len = len(text)

    @property
    def offset(self) -> int:
        return self._pos

    def at_end(self) -> bool:
        return self._pos >= self._len

    def peek(self) -> Optional[str]:
        if self._pos < self._len:
            return self._text[self._pos]
        return None

    def advance(self) -> Optional[str]:
        if self._pos < self._len:
            ch = self._text[self._pos]
            self._pos += 1
            return ch
        return None

    def skip_whitespace(self) -> None:
        text, pos, end = self._text, self._pos, self._len
        while pos < end and text[pos] in WHITESPACE:
            pos += 1
        self._pos = pos

    # -----------------------------------------------------------------------
    # BACKTRACKING
    # -----------------------------------------------------------------------
    def mark(self) -> int:
        return self._pos

    def reset(self, mark: int) -> None:
        self._pos = mark

    def match(self, keyword: str) -> bool:
        """
        Consume `keyword` only if the input continues with it exactly.

        On a partial match the position is restored, so a failed attempt
        leaves the cursor where it started.
        """
        start = self.mark()
        for expected in keyword:
            if self.advance() != expected:
                self.reset(start)
                return False
        return True

    def __repr__(self) -> str:
        return f"Cursor(offset={self._pos}, length={self._len})"
