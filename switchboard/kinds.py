"""
Value kinds and coercion.

Overview
- ValueKind: the closed set of scalar kinds a switch value can be declared as:
  signed/unsigned 64, 32 and 16 bit integers, unsigned 8 bit integers and strings.
- ValueType(kind, array=False): a declared value type; arrays apply the scalar rule
  element-wise.
- resolve(declared): normalize a declaration (ValueType, ValueKind, str, int,
  list[str], list[int], tuple[int, ...], ...) into a ValueType. Anything else is an
  UnsupportedTypeError.
- coerce(raw, type) / coerce_all(values, type): convert raw strings into Python
  values. Integers are parsed from decimal text and range-checked for their width;
  failures raise MalformedValueError (the processor reports them).

Quick example
    >>> coerce("42", Int32)
    42
    >>> coerce_all(["1", "2"], UInt8Array)
    [1, 2]
"""
import re
import types
import typing
from enum import Enum
from typing import NamedTuple

from .faults import MalformedValueError, UnsupportedTypeError

_DECIMAL = re.compile(r"[+-]?[0-9]+")


class ValueKind(Enum):
    """
    scalar value kinds with their inclusive integer bounds (None for strings).
    """
    INT64 = ("int64", -2 ** 63, 2 ** 63 - 1)
    UINT64 = ("uint64", 0, 2 ** 64 - 1)
    INT32 = ("int32", -2 ** 31, 2 ** 31 - 1)
    UINT32 = ("uint32", 0, 2 ** 32 - 1)
    INT16 = ("int16", -2 ** 15, 2 ** 15 - 1)
    UINT16 = ("uint16", 0, 2 ** 16 - 1)
    UINT8 = ("uint8", 0, 2 ** 8 - 1)
    STRING = ("string", None, None)

    @property
    def label(self):
        return self.value[0]

    @property
    def bounds(self):
        return self.value[1:]

    @property
    def numeric(self):
        return self is not ValueKind.STRING


class ValueType(NamedTuple):
    kind: ValueKind
    array: bool = False

    @property
    def label(self):
        return self.kind.label + "[]" * self.array

    def __repr__(self):
        return "ValueType(%s)" % self.label


Int64 = ValueType(ValueKind.INT64)
UInt64 = ValueType(ValueKind.UINT64)
Int32 = ValueType(ValueKind.INT32)
UInt32 = ValueType(ValueKind.UINT32)
Int16 = ValueType(ValueKind.INT16)
UInt16 = ValueType(ValueKind.UINT16)
UInt8 = ValueType(ValueKind.UINT8)
String = ValueType(ValueKind.STRING)

Int64Array = ValueType(ValueKind.INT64, array=True)
UInt64Array = ValueType(ValueKind.UINT64, array=True)
Int32Array = ValueType(ValueKind.INT32, array=True)
UInt32Array = ValueType(ValueKind.UINT32, array=True)
Int16Array = ValueType(ValueKind.INT16, array=True)
UInt16Array = ValueType(ValueKind.UINT16, array=True)
UInt8Array = ValueType(ValueKind.UINT8, array=True)
StringArray = ValueType(ValueKind.STRING, array=True)

# plain python types accepted as declarations
_BUILTINS = {
    str: ValueKind.STRING,
    int: ValueKind.INT64,
}


def _unsupported(declared):
    return UnsupportedTypeError(
        "unsupported value type %r" % (declared,),
        input=declared,
        hint="use one of %s, or an array of them" % ", ".join(kind.label for kind in ValueKind),
    )


def resolve(declared, /):
    """
    Normalize a value type declaration into a ValueType.

    Accepted declarations
    - ValueType: returned unchanged.
    - ValueKind: the scalar type of that kind.
    - str / int: STRING / INT64 scalars.
    - list[T], tuple[T, ...], collections.abc.Sequence[T] with T one of the above
      scalars: the array type of T.

    Raises
    - UnsupportedTypeError for everything else (bool, float, nested arrays, ...).
    """
    match declared:
        case ValueType(kind=ValueKind(), array=bool()):
            return declared
        case ValueKind():
            return ValueType(declared)
        case type() if declared in _BUILTINS:
            return ValueType(_BUILTINS[declared])

    origin = typing.get_origin(declared)
    arguments = typing.get_args(declared)

    if origin in (list, tuple) or (origin is not None and origin.__module__ == "collections.abc"):
        if origin is tuple and len(arguments) == 2 and arguments[1] is Ellipsis:
            arguments = arguments[:1]
        if len(arguments) == 1 and not isinstance(arguments[0], types.GenericAlias):
            try:
                element = resolve(arguments[0])
            except UnsupportedTypeError:
                raise _unsupported(declared) from None
            if not element.array:
                return element._replace(array=True)

    raise _unsupported(declared)


def coerce(raw, type, /):
    """
    Convert one raw string into a value of the scalar kind of 'type'.

    Integers
    - Decimal digits with an optional sign; surrounding whitespace, underscores,
      other bases and fractions are rejected.
    - The result must fit the kind's bounds.

    Raises
    - MalformedValueError carrying 'value' (the raw text) and 'kind'.
    """
    if not isinstance(raw, str):
        raise TypeError("coerce() first argument must be a string")
    kind = resolve(type).kind

    if not kind.numeric:
        return raw

    if not _DECIMAL.fullmatch(raw):
        raise MalformedValueError(
            "malformed %s input %r" % (kind.label, raw),
            value=raw,
            kind=kind,
            hint="expected a decimal integer",
        )

    lower, upper = kind.bounds
    # int() refuses very long inputs; anything wider than the widest bound cannot fit
    digits = raw.lstrip("+-").lstrip("0") or "0"
    if len(digits) > len(str(max(-lower, upper))):
        value = None
    else:
        value = -int(digits) if raw.startswith("-") else int(digits)
    if value is None or not lower <= value <= upper:
        raise MalformedValueError(
            "%s input %r is out of range" % (kind.label, raw),
            value=raw,
            kind=kind,
            hint="expected a value between %d and %d" % (lower, upper),
        )
    return value


def coerce_all(values, type, /):
    """
    Convert every raw string in 'values' (element-wise coerce()) into a new list.
    """
    return [coerce(raw, type) for raw in values]


__all__ = (
    "ValueKind",
    "ValueType",
    "resolve",
    "coerce",
    "coerce_all",

    "Int64",
    "UInt64",
    "Int32",
    "UInt32",
    "Int16",
    "UInt16",
    "UInt8",
    "String",

    "Int64Array",
    "UInt64Array",
    "Int32Array",
    "UInt32Array",
    "Int16Array",
    "UInt16Array",
    "UInt8Array",
    "StringArray",
)
