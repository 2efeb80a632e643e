"""
clasp value kinds and coercion.

Overview
- Kind: a closed type tag for every value a target can hold.
  • BOOLEAN, INTEGER, UNSIGNED, FLOAT (single precision), DOUBLE, STRING.
  • Kind.of(type) resolves Python types (bool, int, float, str) and Kind members.
- Traits (computed once per kind, read by the token matcher and the help renderer)
  • valueless: presence alone sets the value (booleans); never takes a value.
  • requires_assignment: a value glued to an option needs '=' (all but integers).
  • numeric: help placeholder is NUM instead of VALUE.
  • zero: the kind's zero value, default of plain Value targets.
- coerce(kind, text) -> (value, consumed)
  • Parses the longest valid prefix of text and reports how many characters
    were used; zero consumed means “no value here”.

Grammar (prefix parsing, C-library flavoured)
- INTEGER:  [+-]? (0x HEX+ | 0 OCT* | DEC+)
- UNSIGNED: [+]?  (0x HEX+ | 0 OCT* | DEC+)       (a minus sign is never accepted)
- FLOAT/DOUBLE: [+-]? (DIGITS [. DIGITS] | . DIGITS) [e [+-] DIGITS] | inf | infinity | nan
- STRING:   '=' VALUE (the '=' is consumed) or the entire text
- BOOLEAN:  consumes nothing, always True

Examples
    >>> coerce(Kind.INTEGER, "0x1Fgarbage")
    (31, 4)
    >>> coerce(Kind.STRING, "=abc")
    ('abc', 4)
"""
import math
import re
import struct
from enum import Enum


_INTEGER = re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_UNSIGNED = re.compile(r"\+?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_REAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)


class Kind(Enum):
    """
    closed set of value kinds a target can hold.

    the member value is the short label used in reprs and error messages.
    """
    BOOLEAN  = "bool"
    INTEGER  = "int"
    UNSIGNED = "unsigned"
    FLOAT    = "float"
    DOUBLE   = "double"
    STRING   = "str"

    @classmethod
    def of(cls, type, /):
        """
        Resolve a Python type or a Kind member into a Kind.

        bool is checked before int on purpose (bool subclasses int).

        Raises
        - TypeError: for any other type (unsupported coercion).
        """
        if isinstance(type, cls):
            return type
        if type is bool:
            return cls.BOOLEAN
        if type is int:
            return cls.INTEGER
        if type is float:
            return cls.DOUBLE
        if type is str:
            return cls.STRING
        raise TypeError("unsupported value type %r (expected bool, int, float, str or a Kind)" % (type,))

    @property
    def valueless(self):
        return self is Kind.BOOLEAN

    @property
    def requires_assignment(self):
        return self not in (Kind.INTEGER, Kind.UNSIGNED)

    @property
    def numeric(self):
        return self in (Kind.INTEGER, Kind.UNSIGNED, Kind.FLOAT, Kind.DOUBLE)

    @property
    def zero(self):
        match self:
            case Kind.BOOLEAN:
                return False
            case Kind.INTEGER | Kind.UNSIGNED:
                return 0
            case Kind.FLOAT | Kind.DOUBLE:
                return 0.0
            case Kind.STRING:
                return ""

    def __repr__(self):
        return "Kind.%s" % self.name


def _integer(text, pattern):
    if not (match := pattern.match(text)):
        return 0, 0
    digits = match.group()
    sign = -1 if digits.startswith("-") else 1
    digits = digits.lstrip("+-")
    if digits[:2] in ("0x", "0X"):
        value = int(digits[2:], 16)
    elif digits.startswith("0"):
        value = int(digits, 8)
    else:
        value = int(digits, 10)
    return sign * value, match.end()


def _single(value):
    # Round to IEEE-754 binary32; out-of-range magnitudes saturate to infinity.
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def coerce(kind, text, /):
    """
    Convert a textual token into a typed value.

    Parameters
    - kind: Kind
      Target kind deciding the grammar.
    - text: str
      Remaining characters of the current token (or a whole token).

    Returns
    - tuple[value, int]: the parsed value and the number of characters matched.
      Zero characters matched means “no value found here”; the value is then
      the kind's zero and must not be stored.
    """
    if not isinstance(kind, Kind):
        raise TypeError("coerce() first argument must be a Kind")
    if not isinstance(text, str):
        raise TypeError("coerce() second argument must be a string")

    match kind:
        case Kind.BOOLEAN:
            return True, 0
        case Kind.INTEGER:
            return _integer(text, _INTEGER)
        case Kind.UNSIGNED:
            return _integer(text, _UNSIGNED)
        case Kind.FLOAT | Kind.DOUBLE:
            if not (match := _REAL.match(text)):
                return 0.0, 0
            value = float(match.group())
            return (_single(value) if kind is Kind.FLOAT else value), match.end()
        case Kind.STRING:
            if text.startswith("="):
                return text[1:], len(text)
            return text, len(text)

    raise RuntimeError("unreachable")


__all__ = (
    "Kind",
    "coerce",
)
