# json_value.py
# Value model produced by json_parser.parse()
#
# =============================================================================
#  VALUE MAPPING
# =============================================================================
#
#   null    -> None          true/false -> bool
#   number  -> float         string     -> str
#   array   -> list          object     -> JsonObject (ordered key/value pairs)
#
# Objects are NOT dicts. Every key occurrence is kept, in input order, so
# '{"a":1,"a":2}' yields two pairs. Callers that want a mapping go through
# JsonObject.to_dict(), which applies last-wins explicitly.
# =============================================================================

from typing import Any, Iterable, Iterator, List, Tuple, Union

Value = Union[None, bool, float, str, List[Any], "JsonObject"]
Pair = Tuple[str, Value]

_MISSING = object()


class JsonObject:
    """
    Ordered, append-only sequence of (key, value) pairs.

    Equality is structural, type-strict and order-sensitive (see
    structurally_equal): an empty object never equals an empty array, and
    true never equals 1.
    """
    __slots__ = ("_pairs",)

    def __init__(self, pairs: Iterable[Pair] = ()):
        self._pairs: List[Pair] = [(k, v) for k, v in pairs]

    def __iter__(self) -> Iterator[Pair]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __getitem__(self, index: int) -> Pair:
        return self._pairs[index]

    def __eq__(self, other):
        if not isinstance(other, JsonObject):
            return NotImplemented
        return structurally_equal(self, other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"JsonObject({self._pairs!r})"

    def _append(self, key: str, value: Value) -> None:
        # Only the parser builds objects; there is no public mutation API.
        self._pairs.append((key, value))

    def keys(self) -> List[str]:
        return [k for k, _ in self._pairs]

    def get(self, key: str, default: Any = None) -> Any:
        """Value of the first pair whose key is `key`."""
        for k, v in self._pairs:
            if k == key:
                return v
        return default

    def get_all(self, key: str) -> List[Value]:
        return [v for k, v in self._pairs if k == key]

    def __contains__(self, key: object) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def to_dict(self) -> dict:
        """
        Convert to plain dicts/lists, recursively.

        Duplicate keys collapse with last-wins; the position of a key in the
        result is that of its first occurrence.
        """
        return {k: _plain(v) for k, v in self._pairs}


def structurally_equal(a: Value, b: Value) -> bool:
    """
    Compare two parsed trees variant by variant.

    Plain == is not enough: Python treats True == 1.0, so a Boolean would
    match a Number.
    """
    if type(a) is not type(b):
        return False
    if isinstance(a, JsonObject):
        if len(a) != len(b):
            return False
        return all(ka == kb and structurally_equal(va, vb)
                   for (ka, va), (kb, vb) in zip(a, b))
    if isinstance(a, list):
        if len(a) != len(b):
            return False
        return all(structurally_equal(x, y) for x, y in zip(a, b))
    return a == b


def _plain(value: Value) -> Any:
    if isinstance(value, JsonObject):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# DEBUG REPRESENTATION
# ---------------------------------------------------------------------------
_DEBUG_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _debug_str(text: str) -> str:
    out = []
    for ch in text:
        esc = _DEBUG_ESCAPES.get(ch)
        if esc is not None:
            out.append(esc)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _debug_number(number: float) -> str:
    # repr() writes 1e+20 and 1e-05; the debug form is 1e20 and 1e-5
    mantissa, sep, exponent = repr(number).partition("e")
    if not sep:
        return mantissa
    return f"{mantissa}e{int(exponent)}"


def debug_repr(value: Value) -> str:
    """
    Render a parsed tree as a tagged, human-readable debug string, e.g.

        Object([("a", Number(1.0)), ("b", Array([Boolean(true), Null]))])

    This is diagnostic output for the CLI, not a JSON serializer.
    """
    if value is None:
        return "Null"
    if value is True:
        return "Boolean(true)"
    if value is False:
        return "Boolean(false)"
    if isinstance(value, float):
        return f"Number({_debug_number(value)})"
    if isinstance(value, str):
        return f"String({_debug_str(value)})"
    if isinstance(value, list):
        return "Array([" + ", ".join(debug_repr(v) for v in value) + "])"
    if isinstance(value, JsonObject):
        pairs = ", ".join(f"({_debug_str(k)}, {debug_repr(v)})" for k, v in value)
        return "Object([" + pairs + "])"
    raise TypeError(f"not a parsed JSON value: {type(value).__name__}")
