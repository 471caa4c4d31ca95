"""
Pydantic interop for vetted.

Provides to_pydantic(), which compiles a validation spec into a model.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from typing import Optional as TypingOptional

from pydantic import ConfigDict, create_model, model_validator

from .engine import validate_map
from .rules import normalize
from .tags import ArrayOf, Primitive, Record, is_array_form, to_tag
from .types import Err, RuleError, ValidationSpec

_PYTHON_TYPES: dict[str, Any] = {
    "boolean": bool,
    "integer": int,
    "float": float,
    "number": int | float,
    "string": str,
    "binary": str | bytes,
    "tuple": tuple,
    "array": list,
    "list": list,
    "map": dict,
    "decimal": Decimal,
    "date": date,
    "time": time,
    "datetime": datetime,
    "naive_datetime": datetime,
    "utc_datetime": datetime,
}


def to_pydantic(name: str, spec: ValidationSpec) -> type:
    """
    Compile a validation spec to a Pydantic model.

    Field types come from each rule's `type`; fields whose rule is required
    are mandatory, the rest default to None. The whole spec is checked with
    validate_map before Pydantic sees the input, so every rule failure is
    raised as a pydantic.ValidationError.

    Args:
        name: Name of the generated model class
        spec: Mapping of field name -> rule

    Returns:
        A Pydantic BaseModel subclass

    Usage:
        User = to_pydantic("User", {
            "name": {"type": "string", "required": True, "min_length": 2},
            "age": {"type": "integer", "min": 0},
        })
        user = User(name="Alice")
    """
    if not isinstance(spec, Mapping):
        raise RuleError("Spec must be a mapping")

    fields: dict[str, Any] = {}
    for key, rule in spec.items():
        if not isinstance(key, str):
            raise RuleError(f"Model field names must be strings, got {key!r}")
        fields[key] = _extract_pydantic_field(rule)

    def check_rules(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            result = validate_map(data, spec)
            if isinstance(result, Err):
                raise ValueError(_describe(result.error))
        return data

    return create_model(
        name,
        __config__=ConfigDict(strict=True, arbitrary_types_allowed=True),
        __validators__={"check_rules": model_validator(mode="before")(check_rules)},
        **fields,
    )


def _describe(errors: dict[Any, Any]) -> str:
    return "; ".join(f"{key} {message}" for key, message in errors.items())


def _python_type(tag: Any) -> Any:
    if isinstance(tag, tuple) and not is_array_form(tag):
        return Any
    match to_tag(tag):
        case Primitive(name=name):
            return _PYTHON_TYPES.get(name, Any)
        case ArrayOf(inner=inner):
            return list[_python_type(inner)]  # type: ignore[misc]
        case Record(cls=cls):
            return cls
    return Any


def _extract_pydantic_field(rule: Any) -> tuple[Any, Any]:
    """Extract Pydantic field type and default from a rule."""
    options = dict(normalize(rule)[:2])
    required = options["required"]
    if callable(required):
        required = required()

    field_type = _python_type(options["type"])
    if required:
        return (field_type, ...)
    return (TypingOptional[field_type], None)
