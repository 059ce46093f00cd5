"""
Flag kinds: the four primitive types a flag may declare.

Each kind knows
- its zero value, used as the default when none is declared;
- whether an explicit default has the matching runtime type;
- how to convert command-line text into a typed value.

Conversion follows the classic strconv rules rather than Python's own
literal parsing, so "1_000", " 7" or "yes" are rejected where int(), float()
or a truthiness check would accept them.
"""
import math
import re
from decimal import Decimal
from enum import StrEnum


_TRUTHS = frozenset(("1", "t", "T", "TRUE", "true", "True"))
_FALSITIES = frozenset(("0", "f", "F", "FALSE", "false", "False"))

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)", re.IGNORECASE)

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


class FlagKind(StrEnum):
    """
    canonical flag kinds (the value is the name used at registration).
    """
    BOOL = "bool"
    FLOAT64 = "float64"
    INT = "int"
    STRING = "string"

    @classmethod
    def lookup(cls, object, /):
        """
        Resolve a declared type into a kind.

        Accepted
        - "" → BOOL (a flag without a type is a switch)
        - "bool", "float64", "int", "string" (or a FlagKind)
        - the builtins bool, float, int and str

        Raises
        - ValueError: anything else.
        """
        if isinstance(object, type):
            try:
                return _ALIASES[object]
            except KeyError:
                raise ValueError("type %r is not allowed" % object.__name__) from None
        if not isinstance(object, str):
            raise ValueError("type %r is not allowed" % (object,))
        if not object:
            return cls.BOOL
        try:
            return cls(object)
        except ValueError:
            raise ValueError("type %r is not allowed" % object) from None

    @property
    def zero(self):
        return _ZEROS[self]

    def accepts(self, value, /):
        """
        Return True when `value` has this kind's runtime type.

        bool is a subclass of int in Python; it is only accepted by BOOL.
        """
        match self:
            case FlagKind.BOOL:
                return isinstance(value, bool)
            case FlagKind.FLOAT64:
                return isinstance(value, float)
            case FlagKind.INT:
                return isinstance(value, int) and not isinstance(value, bool)
            case FlagKind.STRING:
                return isinstance(value, str)

    def convert(self, text, /):
        """
        Convert command-line text into a value of this kind.

        Raises
        - ValueError: the text is not a valid literal for the kind.
        """
        match self:
            case FlagKind.BOOL:
                if text in _TRUTHS:
                    return True
                if text in _FALSITIES:
                    return False
                raise ValueError("invalid bool literal %r" % text)
            case FlagKind.FLOAT64:
                if not _DECIMAL.fullmatch(text):
                    raise ValueError("invalid float64 literal %r" % text)
                value = float(text)
                if math.isinf(value) and "inf" not in text.lower():
                    raise ValueError("float64 literal %r is out of range" % text)
                return value
            case FlagKind.INT:
                if not _INTEGER.fullmatch(text):
                    raise ValueError("invalid int literal %r" % text)
                value = int(text)
                if not _INT64_MIN <= value <= _INT64_MAX:
                    raise ValueError("int literal %r is out of range" % text)
                return value
            case FlagKind.STRING:
                return text


_ZEROS = {
    FlagKind.BOOL: False,
    FlagKind.FLOAT64: 0.0,
    FlagKind.INT: 0,
    FlagKind.STRING: "",
}

_ALIASES = {
    bool: FlagKind.BOOL,
    float: FlagKind.FLOAT64,
    int: FlagKind.INT,
    str: FlagKind.STRING,
}


def display(value, /):
    """
    Format a flag value for help output.

    Booleans print as true/false. Floats use the shortest digits that round-trip
    and switch to exponent form ("1e+06", "1.5e-05") when the decimal exponent
    is below -4 or at least 6; infinities print as "+Inf" and "-Inf".
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _display_float(value)
    return str(value)


def _display_float(value):
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    # repr() already yields the shortest round-trip digits
    sign, digits, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(map(str, digits))
    point = len(digits) + exponent
    sign = "-" if sign else ""

    if not -4 <= point - 1 < 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return "%s%se%+03d" % (sign, mantissa, point - 1)
    if point <= 0:
        return sign + "0." + "0" * -point + digits
    if point >= len(digits):
        return sign + digits + "0" * (point - len(digits))
    return sign + digits[:point] + "." + digits[point:]


__all__ = (
    "FlagKind",
    "display",
)
