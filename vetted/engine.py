"""
The rule engine and the composite validators built on it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from functools import partial
from types import MappingProxyType
from typing import Any

from .constraints import (
    check_decimal,
    check_exclusion,
    check_format,
    check_inclusion,
    check_length,
    check_number,
    check_required,
)
from .context import resolve_ignore_unknown
from .rules import normalize
from .tags import check_type
from .types import (
    Err,
    Evaluator,
    ListErrors,
    MapErrors,
    Ok,
    Result,
    Rule,
    RuleError,
    ValidationSpec,
)

logger = logging.getLogger(__name__)

EVALUATORS: Mapping[str, Evaluator] = MappingProxyType(
    {
        "type": check_type,
        "number": check_number,
        "decimal": check_decimal,
        "length": check_length,
        "format": check_format,
        "in": check_inclusion,
        "not_in": check_exclusion,
    }
)


def _build_table(
    ignore_unknown: bool, evaluators: Mapping[str, Evaluator] | None
) -> dict[str, Evaluator]:
    """Evaluators for one call; built-in names cannot be overridden."""
    table = dict(evaluators or {})
    table.update(EVALUATORS)
    table["each"] = partial(
        check_each, ignore_unknown=ignore_unknown, evaluators=evaluators
    )
    table["embed"] = partial(
        check_embed, ignore_unknown=ignore_unknown, evaluators=evaluators
    )
    return table


def _run(
    value: Any,
    pairs: list[tuple[str, Any]],
    table: Mapping[str, Evaluator],
    ignore_unknown: bool,
) -> Result:
    for name, options in pairs:
        if name == "required":
            result = check_required(value, options)
        elif value is None:
            return Ok(None)
        elif name == "func":
            if not callable(options):
                raise RuleError(f"func must be callable, got {options!r}")
            result = options(value)
        else:
            evaluator = table.get(name)
            if evaluator is None:
                if ignore_unknown:
                    logger.debug("Skipping unknown constraint: %s", name)
                    continue
                return Err(f"validate_{name} is not support")
            result = evaluator(value, options)

        if not isinstance(result, (Ok, Err)):
            raise RuleError(f"{name} must return Ok or Err, got {result!r}")
        if isinstance(result, Err):
            return result

    return Ok(value)


def validate(
    value: Any,
    rule: Rule,
    *,
    ignore_unknown: bool | None = None,
    evaluators: Mapping[str, Evaluator] | None = None,
) -> Result:
    """
    Validate a value against a rule.

    Args:
        value: The value to check; None means absent
        rule: Dict (or list of pairs) of constraint name -> options
        ignore_unknown: Skip unknown constraint names instead of failing.
                        Defaults to the surrounding validation_context.
        evaluators: Extra constraint evaluators `(value, options) -> Result`
                    available to this call only

    Returns:
        Ok(value) if every constraint passes
        Err(message) for the first constraint that fails

    Usage:
        validate(10, {"type": "integer", "number": {"min": 10, "max": 20}})
        # Ok(10)
        validate("email@g.c", {"type": "string", "format": r".+@.+\\.[a-z]{2,10}"})
        # Err("does not match format")

    Supported constraints: required, type, number, decimal, length, format
    (pattern), in (enum), not_in, each, embed, func, plus the flattened
    number and length shorthands (min, max, min_length, max_items, ...).
    """
    ignore = resolve_ignore_unknown(ignore_unknown)
    table = _build_table(ignore, evaluators)
    return _run(value, normalize(rule), table, ignore)


def validate_list(
    items: Sequence[Any],
    rule: Rule,
    *,
    ignore_unknown: bool | None = None,
    evaluators: Mapping[str, Evaluator] | None = None,
) -> Ok[Any] | Err[ListErrors]:
    """
    Validate every item of a list against the same rule.

    Returns:
        Ok(items) if every item passes
        Err([(index, message), ...]) for the failing items, in index order

    Usage:
        validate_list([1, 2, 3], {"type": "integer", "number": {"min": 2}})
        # Err([(0, "must be greater than or equal to 2")])
    """
    ignore = resolve_ignore_unknown(ignore_unknown)
    table = _build_table(ignore, evaluators)
    pairs = normalize(rule)

    errors: ListErrors = []
    count = 0
    for index, item in enumerate(items):
        count += 1
        result = _run(item, pairs, table, ignore)
        if isinstance(result, Err):
            errors.append((index, result.error))

    if errors:
        logger.debug("%d of %d list items failed validation", len(errors), count)
        return Err(errors)
    return Ok(items)


def validate_map(
    data: Mapping[Any, Any],
    spec: ValidationSpec,
    *,
    ignore_unknown: bool | None = None,
    evaluators: Mapping[str, Evaluator] | None = None,
) -> Ok[Any] | Err[MapErrors]:
    """
    Validate a dict against a validation spec.

    Each spec key is looked up in `data` (missing keys count as None) and
    checked against that key's rule. Keys in `data` but not in the spec are
    ignored.

    Returns:
        Ok(data) if every key passes
        Err({key: message, ...}) for the failing keys

    Usage:
        spec = {
            "email": {"type": "string", "required": True},
            "password": {"type": "string", "length": {"min": 8}},
            "age": {"type": "integer", "number": {"min": 16, "max": 60}},
        }
        validate_map({"email": "a@b.co", "password": "123456", "age": 28}, spec)
        # Err({"password": "length must be greater than or equal to 8"})
    """
    if not isinstance(data, Mapping):
        raise RuleError(f"data must be a mapping, got {type(data).__name__}")
    if not isinstance(spec, Mapping):
        raise RuleError(f"spec must be a mapping, got {type(spec).__name__}")

    ignore = resolve_ignore_unknown(ignore_unknown)
    table = _build_table(ignore, evaluators)

    errors: MapErrors = {}
    for key, rule in spec.items():
        result = _run(data.get(key), normalize(rule), table, ignore)
        if isinstance(result, Err):
            errors[key] = result.error

    if errors:
        logger.debug("Keys failed validation: %s", list(errors))
        return Err(errors)
    return Ok(data)


def check_each(
    value: Any,
    rule: Rule,
    *,
    ignore_unknown: bool | None = None,
    evaluators: Mapping[str, Evaluator] | None = None,
) -> Ok[Any] | Err[Any]:
    """
    The `each` constraint: validate every element of a list with `rule`.

    Usage:
        validate([12, 10, 13], {"type": ("array", "number"), "each": {"min": 11}})
        # Err([(1, "must be greater than or equal to 11")])
    """
    if not isinstance(value, list):
        return Err("each validation only support array type")
    return validate_list(
        value, rule, ignore_unknown=ignore_unknown, evaluators=evaluators
    )


def check_embed(
    value: Any,
    spec: ValidationSpec,
    *,
    ignore_unknown: bool | None = None,
    evaluators: Mapping[str, Evaluator] | None = None,
) -> Ok[Any] | Err[Any]:
    """
    The `embed` constraint: validate a nested dict with its own spec.

    Usage:
        address = {"city": {"type": "string", "required": True}}
        validate({"city": None}, {"type": "map", "embed": address})
        # Err({"city": "is required"})
    """
    if not isinstance(value, Mapping):
        return Err("is invalid")
    return validate_map(
        value, spec, ignore_unknown=ignore_unknown, evaluators=evaluators
    )
