"""Tests for rule-name dispatch and rule-string parsing."""

import pytest

from formcheck.core.errors import ConfigurationError, ErrorCode, InvalidRuleError, UnknownRuleError
from formcheck.validation import predicates
from formcheck.validation.registry import PREDICATES, available_rules, bind_arguments, get_predicate
from formcheck.validation.rules import RuleSpec, parse_rule


class TestRegistry:
    def test_all_rules_registered(self):
        assert available_rules() == [
            "between", "date", "email", "equal", "greater", "less",
            "match", "max", "min", "required", "url",
        ]

    @pytest.mark.parametrize("name", ["min", "MIN", "Min", "  min "])
    def test_case_normalized(self, name):
        assert get_predicate(name) is predicates.at_least

    def test_unknown_rule_is_configuration_error(self):
        with pytest.raises(UnknownRuleError) as exc_info:
            get_predicate("minimum")
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.code is ErrorCode.E8001_UNKNOWN_RULE
        assert "minimum" in str(exc_info.value)
        assert "required" in exc_info.value.error.metadata["available"]

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            PREDICATES["custom"] = lambda value: True

    def test_bind_arguments_accepts_optional_format(self):
        bound = bind_arguments("min", predicates.at_least, "2024-01-01", ("2023-01-01", "Y-m-d"))
        assert bound.arguments["fmt"] == "Y-m-d"

    def test_missing_argument(self):
        with pytest.raises(InvalidRuleError) as exc_info:
            bind_arguments("between", predicates.between, "5", ("1",))
        assert exc_info.value.code is ErrorCode.E8003_INVALID_RULE_ARGUMENTS

    def test_too_many_arguments(self):
        with pytest.raises(InvalidRuleError):
            bind_arguments("required", predicates.is_required, "x", ("extra",))

    @pytest.mark.parametrize("name,predicate,args,expected", [
        ("required", predicates.is_required, ("",), ("x",)),
        ("date", predicates.is_date, ("Y-m-d", ""), ("x", "Y-m-d")),
        ("between", predicates.between, ("1", "10", ""), ("x", "1", "10", "")),
        ("email", predicates.is_email, ("", "", ""), ("x",)),
    ])
    def test_surplus_trailing_empty_arguments_are_dropped(self, name, predicate, args, expected):
        assert bind_arguments(name, predicate, "x", args).args == expected

    def test_missing_argument_is_not_filled_by_trimming(self):
        with pytest.raises(InvalidRuleError):
            bind_arguments("equal", predicates.is_equal, "x", ())

    def test_surplus_non_empty_argument_still_rejected(self):
        with pytest.raises(InvalidRuleError):
            bind_arguments("required", predicates.is_required, "x", ("", "extra"))


class TestParseRule:
    def test_name_only(self):
        rule = parse_rule("required", "Please fill in.")
        assert rule == RuleSpec(name="required", args=(), message="Please fill in.", source="required")

    def test_arguments_stay_strings(self):
        rule = parse_rule(r"match||[1-9]\d{3}", "Invalid.")
        assert rule.name == "match"
        assert rule.args == (r"[1-9]\d{3}",)

    def test_trailing_separator_gives_empty_argument(self):
        rule = parse_rule("between||1||10||", "Out of range.")
        assert rule.args == ("1", "10", "")

    def test_custom_separator(self):
        rule = parse_rule("min::3", "Too short.", separator="::")
        assert rule.name == "min"
        assert rule.args == ("3",)

    def test_normalized_name(self):
        assert parse_rule("Between||1||2", "x").normalized_name == "between"

    def test_rule_spec_is_immutable(self):
        rule = parse_rule("required", "x")
        with pytest.raises(AttributeError):
            rule.message = "y"
