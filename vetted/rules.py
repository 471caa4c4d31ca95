"""
Rule normalization.

Puts `required` first and `type` second, keeps everything else in the order
given, and expands the flattened shorthands into their constraint family:

    {"max": 10, "type": "integer", "min_length": 2, "required": True}
    ->
    [("required", True), ("type", "integer"),
     ("number", [("max", 10)]), ("length", [("min", 2)])]
"""

from __future__ import annotations

from typing import Any

from .tags import ANY
from .types import Rule, to_pairs

NUMBER_ALIASES = frozenset(
    {
        "min",
        "max",
        "equal_to",
        "greater_than",
        "greater_than_or_equal_to",
        "less_than",
        "less_than_or_equal_to",
    }
)

LENGTH_ALIASES = {
    "min_length": "min",
    "max_length": "max",
    "min_items": "min",
    "max_items": "max",
}

NAME_ALIASES = {
    "pattern": "format",
    "enum": "in",
}


def expand(name: str, options: Any) -> tuple[str, Any]:
    """Expand one shorthand constraint into its canonical (name, options)."""
    if name in NUMBER_ALIASES:
        return "number", [(name, options)]
    if name in LENGTH_ALIASES:
        return "length", [(LENGTH_ALIASES[name], options)]
    return NAME_ALIASES.get(name, name), options


def normalize(rule: Rule) -> list[tuple[str, Any]]:
    """
    Return the rule as an ordered list of (name, options) pairs.

    `required` defaults to False and `type` to "any"; both are always
    present in the result. A repeated `required` or `type` keeps the last one.
    """
    required: Any = False
    type_tag: Any = ANY
    rest: list[tuple[str, Any]] = []

    for name, options in to_pairs(rule):
        if name == "required":
            required = options
        elif name == "type":
            type_tag = options
        else:
            rest.append(expand(name, options))

    return [("required", required), ("type", type_tag), *rest]
