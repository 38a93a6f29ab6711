# json_parser.py
# Hand-rolled recursive-descent JSON parser
#
# =============================================================================
#  PARSER IMPLEMENTATION: RECURSIVE DESCENT OVER CHARACTERS
# =============================================================================
#
# No separate lexer: every sub-parser reads characters straight off one shared
# Cursor (scanner.py). JSON is LL(1) at the character level, so one character
# of lookahead picks the sub-parser and the grammar maps one function per rule:
#
#   value  -> object | array | string | number | true | false | null
#   object -> '{' (string ':' value (',' string ':' value)*)? '}'
#   array  -> '[' (value (',' value)*)? ']'
#
# Known, deliberate laxness:
# 1. Numbers: '-'? then any run of [0-9.eE+-], handed to float(). Leading
#    zeros, '1.' and similar are accepted whenever float() accepts them.
# 2. \uXXXX escapes decode one UTF-16 code unit. Surrogate halves are
#    rejected, pairs are not reassembled.
# 3. Raw control characters inside strings are kept verbatim.
#
# Depth guard defaults to 256 nested containers, below what CPython's default
# recursion limit can absorb. max_depth=None removes it.
# =============================================================================

import argparse
import enum
import logging
import math
import os
import sys
from typing import List, Optional

from json_value import JsonObject, Value, debug_repr
from scanner import Cursor

__all__ = [
    "DEPTH_LIMIT_DEFAULT",
    "ErrorKind",
    "JsonObject",
    "ParseError",
    "Parser",
    "Value",
    "debug_repr",
    "parse",
    "parse_file",
]

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# CONSTANTS AND TUNABLES
# ---------------------------------------------------------------------------
DEPTH_LIMIT_DEFAULT = 256                  # nested containers before DEPTH_EXCEEDED
LOG_LEVEL_ENV       = "JSON_PARSER_LOG_LEVEL"
LOG_LEVEL_DEFAULT   = "WARNING"
LOG_FORMAT          = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DIGITS       = "0123456789"
_NUMBER_CHARS = frozenset("0123456789.eE+-")
_HEX_DIGITS   = frozenset("0123456789abcdefABCDEF")
_SURROGATE_LOW  = chr(0xD800)
_SURROGATE_HIGH = chr(0xDFFF)
_SIMPLE_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

# ---------------------------------------------------------------------------
# ERRORS
# ---------------------------------------------------------------------------
class ErrorKind(enum.Enum):
    UNEXPECTED_CHARACTER      = "unexpected character"
    UNEXPECTED_END_OF_INPUT   = "unexpected end of input"
    INVALID_KEY               = "invalid key"
    EXPECTED_COLON            = "expected colon"
    EXPECTED_COMMA_OR_BRACE   = "expected comma or brace"
    EXPECTED_COMMA_OR_BRACKET = "expected comma or bracket"
    UNTERMINATED_STRING       = "unterminated string"
    INVALID_ESCAPE_CHARACTER  = "invalid escape character"
    INVALID_UNICODE_ESCAPE    = "invalid unicode escape"
    INVALID_NUMBER            = "invalid number"
    EXPECTED_BOOLEAN          = "expected boolean"
    EXPECTED_NULL             = "expected null"
    TRAILING_CHARACTERS       = "trailing characters"
    DEPTH_EXCEEDED            = "depth exceeded"


class ParseError(SyntaxError):
    """
    The single failure type raised by parse().

    `kind` names the rule that was violated; `char` is the offending character
    for UNEXPECTED_CHARACTER and None otherwise. str(exc) is the
    human-readable message.
    """
    def __init__(self, kind: ErrorKind, message: str, char: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.char = char


# ---------------------------------------------------------------------------
# PARSER
# ---------------------------------------------------------------------------
class Parser:
    """
    One parse over one input. Owns its Cursor exclusively; not reusable
    across documents and never shared between threads.
    """

    def __init__(self, text: str, *, max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT):
        self.cursor = Cursor(text)
        self.max_depth = max_depth
        self.depth = 0

    # -----------------------------------------------------------------------
    # ENTRY
    # -----------------------------------------------------------------------
    def parse_document(self) -> Value:
        value = self.parse_value()
        self.cursor.skip_whitespace()
        if not self.cursor.at_end():
            raise ParseError(
                ErrorKind.TRAILING_CHARACTERS,
                f"unexpected characters after JSON value: {self.cursor.peek()!r}",
            )
        return value

    # -----------------------------------------------------------------------
    # DISPATCH
    # -----------------------------------------------------------------------
    def parse_value(self) -> Value:
        cur = self.cursor
        cur.skip_whitespace()
        ch = cur.peek()
        if ch is None:
            raise ParseError(ErrorKind.UNEXPECTED_END_OF_INPUT, "unexpected end of input")
        if ch == "{":
            return self.parse_object()
        if ch == "[":
            return self.parse_array()
        if ch == '"':
            return self.parse_string()
        if ch == "-" or ch in _DIGITS:
            return self.parse_number()
        if ch == "t" or ch == "f":
            return self.parse_boolean()
        if ch == "n":
            return self.parse_null()
        raise ParseError(ErrorKind.UNEXPECTED_CHARACTER, f"unexpected character: {ch}", char=ch)

    def _enter(self) -> None:
        self.depth += 1
        if self.max_depth is not None and self.depth > self.max_depth:
            raise ParseError(
                ErrorKind.DEPTH_EXCEEDED,
                f"nesting depth limit exceeded (max_depth={self.max_depth})",
            )

    # -----------------------------------------------------------------------
    # OBJECT
    # -----------------------------------------------------------------------
    def parse_object(self) -> JsonObject:
        """
        Parse '{' ... '}'.

        The empty-object check happens once, straight after '{'. After a comma
        the loop expects a key, so '{"a":1,}' fails with INVALID_KEY.
        """
        cur = self.cursor
        cur.advance()  # '{'
        self._enter()
        obj = JsonObject()

        cur.skip_whitespace()
        if cur.peek() == "}":
            cur.advance()
            self.depth -= 1
            return obj

        while True:
            cur.skip_whitespace()
            if cur.peek() != '"':
                raise ParseError(ErrorKind.INVALID_KEY, "expected string key in object")
            key = self.parse_string()

            cur.skip_whitespace()
            if cur.advance() != ":":
                raise ParseError(ErrorKind.EXPECTED_COLON, "expected ':' in object")

            obj._append(key, self.parse_value())

            cur.skip_whitespace()
            ch = cur.advance()
            if ch == ",":
                continue
            if ch == "}":
                self.depth -= 1
                return obj
            raise ParseError(ErrorKind.EXPECTED_COMMA_OR_BRACE, "expected ',' or '}' in object")

    # -----------------------------------------------------------------------
    # ARRAY
    # -----------------------------------------------------------------------
    def parse_array(self) -> List[Value]:
        cur = self.cursor
        cur.advance()  # '['
        self._enter()
        items: List[Value] = []

        cur.skip_whitespace()
        if cur.peek() == "]":
            cur.advance()
            self.depth -= 1
            return items

        while True:
            items.append(self.parse_value())

            cur.skip_whitespace()
            ch = cur.advance()
            if ch == ",":
                continue
            if ch == "]":
                self.depth -= 1
                return items
            raise ParseError(ErrorKind.EXPECTED_COMMA_OR_BRACKET, "expected ',' or ']' in array")

    # -----------------------------------------------------------------------
    # STRING
    # -----------------------------------------------------------------------
    def parse_string(self) -> str:
        """
        Parse a double-quoted literal and return the unescaped text.

        Handles three classes of errors:
        1) Structure - end of input before the closing quote.
        2) Escape syntax - unknown escape letter, short or non-hex \\u escape.
        3) Unicode correctness - a surrogate half, raw or named by a \\u escape.
        """
        cur = self.cursor
        cur.advance()  # opening '"'
        out: List[str] = []

        while True:
            ch = cur.advance()
            if ch is None:
                raise ParseError(ErrorKind.UNTERMINATED_STRING, "unterminated string")
            if ch == '"':
                return "".join(out)
            if ch != "\\":
                if _SURROGATE_LOW <= ch <= _SURROGATE_HIGH:
                    raise ParseError(ErrorKind.UNEXPECTED_CHARACTER,
                                     f"unpaired surrogate U+{ord(ch):04X} in string", char=ch)
                out.append(ch)
                continue

            esc = cur.advance()
            simple = _SIMPLE_ESCAPES.get(esc) if esc is not None else None
            if simple is not None:
                out.append(simple)
            elif esc == "u":
                out.append(self._unicode_escape())
            else:
                shown = "end of input" if esc is None else f"\\{esc}"
                raise ParseError(ErrorKind.INVALID_ESCAPE_CHARACTER, f"invalid escape {shown}")

    def _unicode_escape(self) -> str:
        cur = self.cursor
        digits = []
        for _ in range(4):
            ch = cur.advance()
            if ch is None:
                break
            digits.append(ch)
        hexpart = "".join(digits)
        if len(hexpart) != 4:
            raise ParseError(ErrorKind.INVALID_UNICODE_ESCAPE, f"short unicode escape \\u{hexpart}")
        if not all(c in _HEX_DIGITS for c in hexpart):
            raise ParseError(ErrorKind.INVALID_UNICODE_ESCAPE, f"invalid hex escape \\u{hexpart}")
        code = int(hexpart, 16)
        if 0xD800 <= code <= 0xDFFF:
            raise ParseError(ErrorKind.INVALID_UNICODE_ESCAPE, f"unpaired surrogate \\u{hexpart}")
        return chr(code)

    # -----------------------------------------------------------------------
    # NUMBER
    # -----------------------------------------------------------------------
    def parse_number(self) -> float:
        cur = self.cursor
        chars = []
        if cur.peek() == "-":
            chars.append(cur.advance())
        while cur.peek() is not None and cur.peek() in _NUMBER_CHARS:
            chars.append(cur.advance())
        literal = "".join(chars)

        try:
            number = float(literal)
        except ValueError:
            raise ParseError(ErrorKind.INVALID_NUMBER, f"invalid number {literal!r}") from None
        if not math.isfinite(number):
            raise ParseError(ErrorKind.INVALID_NUMBER, f"number out of range {literal!r}")
        return number

    # -----------------------------------------------------------------------
    # LITERALS
    # -----------------------------------------------------------------------
    def parse_boolean(self) -> bool:
        cur = self.cursor
        if cur.peek() == "t":
            if cur.match("true"):
                return True
            raise ParseError(ErrorKind.EXPECTED_BOOLEAN, "expected 'true'")
        if cur.peek() == "f":
            if cur.match("false"):
                return False
            raise ParseError(ErrorKind.EXPECTED_BOOLEAN, "expected 'false'")
        raise ParseError(ErrorKind.EXPECTED_BOOLEAN, "expected boolean")

    def parse_null(self) -> None:
        if self.cursor.match("null"):
            return None
        raise ParseError(ErrorKind.EXPECTED_NULL, "expected 'null'")


# ---------------------------------------------------------------------------
# PUBLIC API
# ---------------------------------------------------------------------------
def parse(text: str, *, max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Value:
    """
    Parse one complete JSON document into a Value tree.

    Any scalar may be the root. Leading and trailing whitespace is allowed;
    anything else after the value raises TRAILING_CHARACTERS.
    """
    log.debug("parsing %d characters (max_depth=%s)", len(text), max_depth)
    try:
        return Parser(text, max_depth=max_depth).parse_document()
    except ParseError as exc:
        log.debug("parse failed: %s: %s", exc.kind.name, exc)
        raise


def parse_file(path: str, *, encoding: str = "utf-8",
               max_depth: Optional[int] = DEPTH_LIMIT_DEFAULT) -> Value:
    with open(path, "r", encoding=encoding) as fh:
        text = fh.read()
    return parse(text, max_depth=max_depth)


# ---------------------------------------------------------------------------
# CLI ENTRYPOINT
# ---------------------------------------------------------------------------
def _configure_logging(level_name: Optional[str]) -> None:
    name = (level_name or os.environ.get(LOG_LEVEL_ENV) or LOG_LEVEL_DEFAULT).upper()
    level = getattr(logging, name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def _cli(argv: List[str]) -> int:
    """
    Command-line interface for parser validation runs.

    Exit codes: 0 parsed, 1 ParseError, 2 input could not be read.
    """
    ap = argparse.ArgumentParser(description="Recursive-descent JSON parser")
    ap.add_argument("file", help="JSON file to parse, or - for stdin")
    ap.add_argument("--max-depth", type=int, default=DEPTH_LIMIT_DEFAULT,
                    help="nesting limit, 0 disables the guard (default: %(default)s)")
    ap.add_argument("--quiet", action="store_true", help="print OK instead of the parsed tree")
    ap.add_argument("--log-level", default=None,
                    help=f"DEBUG, INFO, WARNING or ERROR (default: ${LOG_LEVEL_ENV} or {LOG_LEVEL_DEFAULT})")
    args = ap.parse_args(argv)

    _configure_logging(args.log_level)
    max_depth = args.max_depth if args.max_depth > 0 else None

    try:
        if args.file == "-":
            data = sys.stdin.read()
        else:
            with open(args.file, "r", encoding="utf-8") as fh:
                data = fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        value = parse(data, max_depth=max_depth)
    except ParseError as exc:
        print(f"ParseError: {exc}", file=sys.stderr)
        return 1

    print("OK" if args.quiet else debug_repr(value))
    return 0


def main() -> None:
    sys.exit(_cli(sys.argv[1:]))


# ---------------------------------------------------------------------------
# MAIN GUARD
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
