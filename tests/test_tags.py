"""
Tests for vetted.tags (type tags and check_type).
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum

import pytest

from vetted import ArrayOf, Err, Ok, Primitive, Record, RuleError, check_type, to_tag


@dataclass
class User:
    name: str | None = None
    email: str | None = None


@dataclass
class Admin(User):
    pass


class Color(Enum):
    RED = "red"


def dumb(_):
    return None


TYPE_CHECKS = [
    ("string", "Bluz", True),
    ("string", 10, False),
    ("integer", 10, True),
    ("integer", 10.0, False),
    ("integer", True, False),
    ("float", 10.1, True),
    ("float", 10, False),
    ("number", 10.1, True),
    ("number", 10, True),
    ("number", "123", False),
    ("boolean", False, True),
    ("boolean", 0, False),
    ("binary", b"raw", True),
    ("binary", "text", True),
    ("tuple", (1, 2), True),
    ("tupple", [1, 2], False),
    ("map", {"name": "Bluz"}, True),
    ("map", [], False),
    ("array", [1, 2, 3], True),
    ("array", 10, False),
    ("list", [], True),
    ("atom", Color.RED, True),
    ("atom", "string", False),
    ("function", dumb, True),
    ("function", "not func", False),
    ("keyword", [("limit", 12)], True),
    ("keyword", [], True),
    ("keyword", [1, 2], False),
    ("decimal", Decimal("1.0"), True),
    ("decimal", "1.0", False),
    ("decimal", 1.0, False),
    ("date", date(2023, 10, 11), True),
    ("date", datetime(2023, 10, 11), False),
    ("date", "1.0", False),
    ("time", time(9, 10), True),
    ("time", "1.0", False),
    ("datetime", datetime(2023, 10, 11, 9, 0, tzinfo=timezone.utc), True),
    ("datetime", "1.0", False),
    ("naive_datetime", datetime(2023, 10, 11, 9, 10), True),
    ("naive_datetime", datetime(2023, 10, 11, tzinfo=timezone.utc), False),
    ("utc_datetime", datetime(2023, 10, 11, tzinfo=timezone.utc), True),
    ("utc_datetime", datetime(2023, 10, 11, 9, 10), False),
    ("any", object(), True),
    (User, User(email=""), True),
    (User, {}, False),
    (User, Admin(), False),
    (("array", User), [User(email="")], True),
    (("array", User), [], True),
    (("array", User), {}, False),
]


class TestCheckType:
    @pytest.mark.parametrize("tag,value,ok", TYPE_CHECKS)
    def test_type_table(self, tag, value, ok):
        result = check_type(value, tag)
        assert isinstance(result, Ok if ok else Err)

    def test_message_names_the_tag(self):
        assert check_type("a string", "number") == Err("is not a number")
        assert check_type({}, User) == Err("is not a User")

    def test_unknown_tag_never_matches(self):
        assert check_type([1, 2], "tupple") == Err("is not a tupple")

    def test_array_of_strings(self):
        assert isinstance(check_type(["one", "two"], ("array", "string")), Ok)

    def test_invalid_element_hides_detail(self):
        assert check_type([1, "two"], ("array", "string")) == Err("is invalid")

    def test_array_tag_on_non_list(self):
        assert check_type("one", ("array", "string")) == Err("is not an array")

    def test_other_compound_tag(self):
        assert check_type({"a": 1}, ("map", "string")) == Err("is not an array")

    def test_compound_element_tag_fails_as_data(self):
        assert check_type([{"a": 1}], ("array", ("map", "string"))) == Err("is invalid")
        assert check_type([], ("array", ("map", "string"))) == Ok([])

    def test_nested_arrays(self):
        tag = ("array", ("array", "integer"))
        assert isinstance(check_type([[1, 2], [3]], tag), Ok)
        assert check_type([[1, 2], ["3"]], tag) == Err("is invalid")

    def test_ok_carries_value(self):
        assert check_type(10, "integer") == Ok(10)


class TestToTag:
    def test_string_becomes_primitive(self):
        assert to_tag("integer") == Primitive("integer")

    def test_array_tuple(self):
        assert to_tag(("array", "string")) == ArrayOf(Primitive("string"))
        assert to_tag(("list", User)) == ArrayOf(Record(User))

    def test_class_becomes_record(self):
        assert to_tag(User) == Record(User)

    def test_variant_passthrough(self):
        tag = ArrayOf(Primitive("integer"))
        assert to_tag(tag) is tag
        assert isinstance(check_type([1, 2], tag), Ok)

    def test_bad_spelling_raises(self):
        with pytest.raises(RuleError):
            to_tag(42)
