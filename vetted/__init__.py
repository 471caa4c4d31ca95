"""
Vetted - declarative value validation with ordered, named constraints.

Usage:
    from vetted import validate, validate_list, validate_map

    validate(10, {"type": "integer", "number": {"min": 10, "max": 20}})
    validate_list([1, 2, 3], {"type": "integer", "min": 2})

    spec = {
        "email": {"type": "string", "required": True, "format": r".+@.+"},
        "tags": {"type": ("array", "string"), "max_items": 5},
    }
    result = validate_map(data, spec)
    Model = to_pydantic("MyModel", spec)
"""

from .constraints import (
    check_decimal,
    check_exclusion,
    check_format,
    check_inclusion,
    check_length,
    check_number,
    check_required,
)
from .context import validation_context
from .engine import (
    EVALUATORS,
    check_each,
    check_embed,
    validate,
    validate_list,
    validate_map,
)
from .rules import normalize
from .schema import to_pydantic
from .tags import ANY, ArrayOf, Primitive, Record, check_type, to_tag
from .types import Err, Ok, RuleError

__all__ = [
    # Result types
    "Ok",
    "Err",
    "RuleError",
    # Engine
    "validate",
    "validate_list",
    "validate_map",
    "normalize",
    "validation_context",
    "EVALUATORS",
    # Type tags
    "ANY",
    "Primitive",
    "ArrayOf",
    "Record",
    "to_tag",
    "check_type",
    # Constraints
    "check_number",
    "check_decimal",
    "check_length",
    "check_format",
    "check_inclusion",
    "check_exclusion",
    "check_required",
    "check_each",
    "check_embed",
    # Schema
    "to_pydantic",
]
