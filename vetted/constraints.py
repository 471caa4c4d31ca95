"""
Built-in constraint evaluators for vetted.

Each evaluator takes the value and the constraint options and returns
Ok(value) or Err(message). None of them look at None; the engine skips
absent values before dispatching here.
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Collection, Mapping
from decimal import Decimal
from typing import Any, Callable

from .tags import is_numeric
from .types import Checks, Err, Ok, Result, RuleError, to_pairs

logger = logging.getLogger(__name__)

_GTE = (operator.ge, "must be greater than or equal to {}")
_LTE = (operator.le, "must be less than or equal to {}")

COMPARATORS: dict[str, tuple[Callable[[Any, Any], bool], str]] = {
    "equal_to": (operator.eq, "must be equal to {}"),
    "greater_than": (operator.gt, "must be greater than {}"),
    "greater_than_or_equal_to": _GTE,
    "min": _GTE,
    "less_than": (operator.lt, "must be less than {}"),
    "less_than_or_equal_to": _LTE,
    "max": _LTE,
}


def _compare(value: Any, pairs: list[tuple[str, Any]], bound_check=None) -> Result:
    """Run comparator pairs left to right, stopping at the first failure."""
    for comparator, bound in pairs:
        entry = COMPARATORS.get(comparator)
        if entry is None:
            return Err(f"unknown check '{comparator}'")

        if bound_check is not None:
            failure = bound_check(bound)
            if failure is not None:
                return failure

        compare, template = entry
        if not compare(value, bound):
            return Err(template.format(bound))

    return Ok(value)


def check_number(value: Any, checks: Checks) -> Result:
    """
    Validate a number against comparator checks.

    Usage:
        check_number(12, {"min": 10, "max": 12})   # Ok(12)
        check_number(12, {"min": 15})
        # Err("must be greater than or equal to 15")

    Supported comparators: equal_to, greater_than, greater_than_or_equal_to
    (min), less_than, less_than_or_equal_to (max).
    """
    pairs = to_pairs(checks, "number checks")
    if not is_numeric(value):
        return Err("must be a number")
    return _compare(value, pairs)


def _decimal_bound(bound: Any) -> Err[str] | None:
    if isinstance(bound, Decimal):
        return None
    return Err(f"{bound} must be a decimal")


def check_decimal(value: Any, checks: Checks) -> Result:
    """
    Validate a Decimal against comparator checks.

    Same comparators and messages as check_number, but every bound must
    itself be a Decimal.
    """
    pairs = to_pairs(checks, "decimal checks")
    if not isinstance(value, Decimal):
        return Err("must be a decimal")
    return _compare(value, pairs, bound_check=_decimal_bound)


def _size(value: Any) -> int | None:
    if isinstance(value, (list, tuple, str, bytes, bytearray, Mapping)):
        return len(value)
    return None


def check_length(value: Any, checks: Checks) -> Result:
    """
    Check that the length of a value matches comparator checks.

    Lists, tuples and strings use their length, maps use the key count.

    Usage:
        check_length([1], {"min": 2})
        # Err("length must be greater than or equal to 2")
        check_length("hello", {"equal_to": 5})   # Ok("hello")
    """
    pairs = to_pairs(checks, "length checks")
    size = _size(value)
    if size is None:
        return Err("length check supports only lists, binaries, maps and tuples")

    result = _compare(size, pairs)
    if isinstance(result, Err):
        return Err(f"length {result.error}")
    return Ok(value)


def check_format(value: Any, pattern: re.Pattern | str) -> Result:
    """
    Check whether a string matches a regex.

    The pattern may be compiled or given as source text; the match may occur
    anywhere in the string.

    Usage:
        check_format("year: 2001", r"year:\\s\\d{4}")   # Ok(...)
        check_format("hello", r"\\d+")   # Err("does not match format")
    """
    if not isinstance(value, str):
        return Err("format check only support string")

    if isinstance(pattern, str):
        try:
            pattern = re.compile(pattern)
        except re.error as e:
            logger.debug("Invalid regex pattern %r: %s", pattern, e)
            return Err("invalid regex pattern")
    elif not isinstance(pattern, re.Pattern):
        raise RuleError(f"format must be a regex or a string, got {pattern!r}")

    if pattern.search(value) is None:
        return Err("does not match format")
    return Ok(value)


def _members(enum: Any) -> Collection | None:
    """Container to test membership against, or None if not enumerable."""
    if isinstance(enum, Mapping):
        return enum.items()
    if isinstance(enum, Collection) and not isinstance(enum, (str, bytes, bytearray)):
        return enum
    return None


def _contains(members: Collection, value: Any) -> bool:
    try:
        return value in members
    except TypeError:
        # unhashable value tested against a set
        return False


def check_inclusion(value: Any, enum: Any) -> Result:
    """
    Check that the value is a member of the given collection.

    Maps are enumerated as (key, value) pairs.

    Usage:
        check_inclusion(1, [1, 2])                   # Ok(1)
        check_inclusion(1, {"a": 1})                 # Err(...)
        check_inclusion(("a", 1), {"a": 1})          # Ok(("a", 1))
    """
    members = _members(enum)
    if members is None:
        return Err("given condition does not implement protocol Enumerable")
    if _contains(members, value):
        return Ok(value)
    return Err("not be in the inclusion list")


def check_exclusion(value: Any, enum: Any) -> Result:
    """Check that the value is **not** a member. Similar to check_inclusion."""
    members = _members(enum)
    if members is None:
        return Err("given condition does not implement protocol Enumerable")
    if _contains(members, value):
        return Err("must not be in the exclusion list")
    return Ok(value)


def check_required(value: Any, required: bool | Callable[[], bool]) -> Result:
    """
    Fail with "is required" when the value is None and required resolves True.

    `required` may be a zero-argument callable, resolved at check time.
    """
    if callable(required):
        required = required()
    if required and value is None:
        return Err("is required")
    return Ok(value)
