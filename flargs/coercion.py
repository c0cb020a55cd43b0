"""
Flargs value coercion.

coerce(type, raw) turns one raw token into a typed value:

- boolean: exactly "true" or "false"; anything else is InvalidBooleanLiteralError.
- number: a decimal integer literal, leading zeros included ("42", "-7", "08080"),
  or one in Python's int(raw, 0) grammar ("0x1f", "1_000") becomes an int,
  otherwise a finite float literal ("2.5", "1e3") becomes a float; anything else
  is InvalidNumberLiteralError.
- string: returned unchanged.

No implicit cross-type conversion happens and array-ness is the caller's business.
"""
import math

from .arguments import FlagType
from .faults import *
from .utils import *


def _boolean(raw, *, name, index):
    match raw:
        case "true":
            return True
        case "false":
            return False
    raise InvalidBooleanLiteralError(
        "invalid boolean %r for %r%s" % (raw, name, _where(index)),
        title="invalid boolean literal",
        code=FaultCode.INVALID_BOOLEAN_LITERAL,
        hint="use 'true' or 'false' (or leave the value out to mean true)",
        token=raw,
        index=index,
        argument=name,
        docs=getdoc(FaultCode.INVALID_BOOLEAN_LITERAL),
    )


def _number(raw, *, name, index):
    for base in (10, 0):
        try:
            return int(raw, base)
        except ValueError:
            pass
    try:
        value = float(raw)
    except ValueError:
        value = math.nan
    if math.isfinite(value):
        return value
    raise InvalidNumberLiteralError(
        "invalid number %r for %r%s" % (raw, name, _where(index)),
        title="invalid number literal",
        code=FaultCode.INVALID_NUMBER_LITERAL,
        hint="use an integer (e.g., 42, 0x2a) or a finite decimal (e.g., 2.5, 1e3)",
        token=raw,
        index=index,
        argument=name,
        docs=getdoc(FaultCode.INVALID_NUMBER_LITERAL),
    )


def _where(index):
    return "" if index is Unset else " at %s position" % ordinal(index)


def coerce(type, raw, /, *, name=Unset, index=Unset):
    """
    Convert raw into a value of the given FlagType.

    Parameters
    - type: FlagType
    - raw: str
    - name: flag/param name reported by faults.
    - index: 1-based token position reported by faults.

    Raises
    - InvalidBooleanLiteralError / InvalidNumberLiteralError on malformed literals.
    - TypeError on a non-string raw value or an unknown type.
    """
    if not isinstance(raw, str):
        raise TypeError("coerce() second argument must be a string")
    name = coalesce(name, "value")
    match type:
        case FlagType.BOOLEAN:
            return _boolean(raw, name=name, index=index)
        case FlagType.NUMBER:
            return _number(raw, name=name, index=index)
        case FlagType.STRING:
            return raw
    raise TypeError("coerce() first argument must be a flag type")


__all__ = (
    "coerce",
)
