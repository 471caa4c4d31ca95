"""
Type definitions for vetted.

Provides a minimal Result type (Ok/Err), the rule aliases and the
contract-violation exception.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing the validated value."""

    value: T = None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Error result.

    `error` is a message string for a single value, a list of
    (index, message) pairs for lists and a dict of key -> message for maps.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


class RuleError(TypeError):
    """Raised when a rule, check list or type tag is malformed."""


Result = Union[Ok[Any], Err[Any]]

# Type aliases
Pairs = Sequence[tuple[str, Any]]
Rule = Union[Mapping[str, Any], Pairs]
Checks = Union[Mapping[str, Any], Pairs]
ValidationSpec = Mapping[Hashable, Rule]
Evaluator = Callable[[Any, Any], Result]
ListErrors = list[tuple[int, Any]]
MapErrors = dict[Hashable, Any]


def to_pairs(entries: Any, what: str = "rule") -> list[tuple[str, Any]]:
    """Flatten a dict or a sequence of pairs into a list of (name, options)."""
    if isinstance(entries, Mapping):
        return list(entries.items())

    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise RuleError(
            f"{what} must be a dict or a list of pairs, got {type(entries).__name__}"
        )

    pairs = []
    for entry in entries:
        if not isinstance(entry, (tuple, list)) or len(entry) != 2:
            raise RuleError(f"{what} entry must be a (name, options) pair: {entry!r}")
        pairs.append((entry[0], entry[1]))
    return pairs
