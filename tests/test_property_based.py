"""Property-based tests for the vetted rule engine."""

from hypothesis import given
from hypothesis import strategies as st

from vetted import Err, Ok, normalize, validate, validate_list

SHORTHANDS = ["min", "max", "min_length", "in", "not_in", "placeholder"]


@st.composite
def rule_entries(draw):
    """Generate a rule as a list of pairs, with required/type anywhere."""
    entries = draw(
        st.lists(
            st.tuples(st.sampled_from(SHORTHANDS), st.integers(0, 5)),
            max_size=5,
        )
    )
    required = draw(st.booleans())
    position = draw(st.integers(0, len(entries)))
    entries.insert(position, ("required", required))
    position = draw(st.integers(0, len(entries)))
    entries.insert(position, ("type", draw(st.sampled_from(["integer", "any"]))))
    return entries


scalars = st.one_of(st.none(), st.integers(), st.text(max_size=5), st.booleans())


@given(rule_entries())
def test_required_then_type_lead(entries):
    names = [name for name, _ in normalize(entries)]
    assert names[:2] == ["required", "type"]
    assert "required" not in names[2:]
    assert "type" not in names[2:]


@given(rule_entries())
def test_none_without_required_succeeds(entries):
    entries = [(n, o) for n, o in entries if n != "required"]
    assert validate(None, entries) == Ok(None)


@given(scalars, rule_entries())
def test_validate_is_idempotent(value, entries):
    assert validate(value, entries) == validate(value, entries)


@given(st.lists(st.integers(-10, 10), max_size=20), st.integers(-10, 10))
def test_list_errors_are_ascending_failures(items, bound):
    result = validate_list(items, {"type": "integer", "min": bound})
    failing = [i for i, item in enumerate(items) if item < bound]
    if failing:
        assert isinstance(result, Err)
        assert [index for index, _ in result.error] == failing
    else:
        assert result == Ok(items)
