"""
Tests for vetted.rules (normalization).
"""

import pytest

from vetted import ANY, RuleError, normalize


class TestNormalize:
    def test_required_and_type_first(self):
        rule = {"max": 10, "type": "integer", "in": [1, 2], "required": True}
        assert normalize(rule) == [
            ("required", True),
            ("type", "integer"),
            ("number", [("max", 10)]),
            ("in", [1, 2]),
        ]

    def test_defaults(self):
        assert normalize({}) == [("required", False), ("type", ANY)]

    def test_rest_keeps_order(self):
        rule = [("format", r"\d"), ("not_in", ["0"]), ("length", {"max": 3})]
        assert normalize(rule)[2:] == rule

    def test_length_aliases(self):
        rule = {"min_length": 2, "max_items": 5}
        assert normalize(rule)[2:] == [
            ("length", [("min", 2)]),
            ("length", [("max", 5)]),
        ]

    def test_name_aliases(self):
        rule = {"pattern": "a+", "enum": ["a"]}
        assert normalize(rule)[2:] == [("format", "a+"), ("in", ["a"])]

    def test_unknown_names_pass_through(self):
        assert normalize({"placeholder": "x"})[2:] == [("placeholder", "x")]

    def test_last_type_wins(self):
        rule = [("type", "string"), ("type", "integer")]
        assert normalize(rule)[1] == ("type", "integer")

    def test_malformed_rule(self):
        with pytest.raises(RuleError):
            normalize("type: integer")
        with pytest.raises(RuleError):
            normalize([("type",)])
