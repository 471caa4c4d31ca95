"""
Type tags and the type checker.

A tag is one of three variants:

    Primitive("integer")     built-in runtime kind, see PRIMITIVE_CHECKS
    ArrayOf(inner)           list whose every element matches `inner`
    Record(User)             value whose exact type is `User`

Rules may spell tags loosely ("integer", ("array", "string"), User);
`to_tag` turns those spellings into variants.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Union

from .types import Err, Ok, Result, RuleError


@dataclass(frozen=True, slots=True)
class Primitive:
    """A built-in tag looked up in PRIMITIVE_CHECKS."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class ArrayOf:
    """A list whose elements all match `inner`.

    `inner` stays a raw tuple when it is a compound form other than an
    array; such an element tag never matches.
    """

    inner: Tag | tuple

    def __str__(self) -> str:
        return f"array of {self.inner}"


@dataclass(frozen=True, slots=True)
class Record:
    """A value whose exact class is `cls` (no subclass matching)."""

    cls: type

    def __str__(self) -> str:
        return self.cls.__name__


Tag = Union[Primitive, ArrayOf, Record]

ANY = Primitive("any")

_ARRAY_NAMES = ("array", "list")


def _is_integer(x: Any) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _is_float(x: Any) -> bool:
    return isinstance(x, float)


def _is_number(x: Any) -> bool:
    return _is_integer(x) or _is_float(x)


def _is_keyword(x: Any) -> bool:
    if not isinstance(x, list):
        return False
    return all(
        isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)
        for item in x
    )


def _is_date(x: Any) -> bool:
    # datetime is a subclass of date
    return isinstance(x, date) and not isinstance(x, datetime)


def _is_naive_datetime(x: Any) -> bool:
    return isinstance(x, datetime) and x.utcoffset() is None


def _is_utc_datetime(x: Any) -> bool:
    return isinstance(x, datetime) and x.utcoffset() == timedelta(0)


PRIMITIVE_CHECKS: Mapping[str, Callable[[Any], bool]] = MappingProxyType(
    {
        "boolean": lambda x: isinstance(x, bool),
        "integer": _is_integer,
        "float": _is_float,
        "number": _is_number,
        "string": lambda x: isinstance(x, str),
        "binary": lambda x: isinstance(x, (str, bytes, bytearray)),
        "tuple": lambda x: isinstance(x, tuple),
        "array": lambda x: isinstance(x, list),
        "list": lambda x: isinstance(x, list),
        "atom": lambda x: isinstance(x, (Enum, bool)),
        "function": callable,
        "map": lambda x: isinstance(x, Mapping),
        "keyword": _is_keyword,
        "decimal": lambda x: isinstance(x, Decimal),
        "date": _is_date,
        "time": lambda x: isinstance(x, time),
        "datetime": lambda x: isinstance(x, datetime),
        "naive_datetime": _is_naive_datetime,
        "utc_datetime": _is_utc_datetime,
        "any": lambda _: True,
    }
)


def is_numeric(x: Any) -> bool:
    """True for ints and floats; bools and decimals are not numbers here."""
    return _is_number(x)


def is_array_form(spec: tuple) -> bool:
    return len(spec) == 2 and spec[0] in _ARRAY_NAMES


def to_tag(spec: Any) -> Tag:
    """
    Coerce a tag spelling to a tag variant.

    Conversion rules:
        Primitive | ArrayOf | Record -> pass through
        str -> Primitive (unknown names are kept and never match)
        ("array", inner) -> ArrayOf with recursive conversion
        class -> Record
    """
    if isinstance(spec, (Primitive, ArrayOf, Record)):
        return spec

    if isinstance(spec, str):
        return Primitive(spec)

    if isinstance(spec, tuple) and is_array_form(spec):
        inner = spec[1]
        if isinstance(inner, tuple) and not is_array_form(inner):
            return ArrayOf(inner)
        return ArrayOf(to_tag(inner))

    if isinstance(spec, type):
        return Record(spec)

    raise RuleError(f"Cannot convert {spec!r} to a type tag")


def check_type(value: Any, tag: Any) -> Result:
    """
    Check `value` against a type tag.

    Returns:
        Ok(value) if the value matches
        Err("is not a <tag>") otherwise

    Lists checked against ArrayOf report only "is invalid" for a bad
    element, without the element's own message.

    Usage:
        check_type(10, "integer")                      # Ok(10)
        check_type(["one", "two"], ("array", "string"))  # Ok([...])
        check_type([1, "two"], ("array", "string"))      # Err("is invalid")
    """
    if isinstance(tag, tuple) and not is_array_form(tag):
        return Err("is not an array")

    tag = to_tag(tag)

    match tag:
        case Primitive(name=name):
            check = PRIMITIVE_CHECKS.get(name)
            if check is not None and check(value):
                return Ok(value)
            return Err(f"is not a {name}")

        case ArrayOf(inner=inner):
            if not isinstance(value, list):
                return Err("is not an array")
            for item in value:
                if check_type(item, inner).is_err():
                    return Err("is invalid")
            return Ok(value)

        case Record(cls=cls):
            if type(value) is cls:
                return Ok(value)
            return Err(f"is not a {cls.__name__}")

    return Err(f"is not a {tag}")
