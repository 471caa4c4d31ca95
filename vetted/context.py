"""
Context manager for validation configuration (e.g., ignoring unknown constraints).
"""

from contextlib import contextmanager
from contextvars import ContextVar

# Context variable for unknown-constraint suppression
_ignore_unknown: ContextVar[bool] = ContextVar("ignore_unknown", default=False)


def ignores_unknown() -> bool:
    """Check if unknown constraint names are currently skipped."""
    return _ignore_unknown.get()


def resolve_ignore_unknown(explicit: bool | None) -> bool:
    """An explicit keyword argument wins over the surrounding context."""
    if explicit is None:
        return ignores_unknown()
    return explicit


@contextmanager
def validation_context(*, ignore_unknown: bool = False):
    """
    Context manager for validation configuration.

    Args:
        ignore_unknown: If True, constraint names that have no evaluator are
                        skipped instead of failing with "validate_<name> is
                        not support".

    Example:
        from vetted import validate, validation_context

        rule = {"type": "string", "placeholder": "Your name"}

        validate("Alice", rule)
        # Err(error='validate_placeholder is not support')

        with validation_context(ignore_unknown=True):
            validate("Alice", rule)  # Ok(value='Alice')
    """
    token = _ignore_unknown.set(ignore_unknown)
    try:
        yield
    finally:
        _ignore_unknown.reset(token)
