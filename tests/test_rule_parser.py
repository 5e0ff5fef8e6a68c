import pytest
from pydantic import ValidationError

from fast_rules import RuleDirective, RuleRegistry, UnknownRuleError
from fast_rules.core.rule_parser import extract_rule, has_async_rules, parse_rules


def test_extract_rule_without_arguments():
    directive = extract_rule("required")
    assert directive.name == "required"
    assert directive.value is None
    assert directive.parameters == []


def test_extract_rule_splits_name_and_argument_string():
    directive = extract_rule("between:3,10")
    assert directive.name == "between"
    assert directive.value == "3,10"
    assert directive.parameters == ["3", "10"]


def test_extract_rule_keeps_colons_inside_argument():
    directive = extract_rule("after:2020-01-01T10:00")
    assert directive.name == "after"
    assert directive.value == "2020-01-01T10:00"


def test_extract_rule_keeps_empty_argument():
    directive = extract_rule("min:")
    assert directive.name == "min"
    assert directive.value == ""


def test_directive_is_immutable():
    directive = extract_rule("min:3")
    with pytest.raises(ValidationError):
        directive.name = "max"


def test_parse_string_and_list_forms_preserve_order():
    registry = RuleRegistry()
    parsed = parse_rules(
        {
            "age": "required|integer|between:18,99",
            "name": ["required", "min:3"],
        },
        registry,
    )

    assert list(parsed.keys()) == ["age", "name"]
    assert [d.name for d in parsed["age"]] == ["required", "integer", "between"]
    assert [str(d) for d in parsed["name"]] == ["required", "min:3"]


def test_parse_accepts_ready_directives():
    registry = RuleRegistry()
    directive = RuleDirective(name="max", value="5")
    parsed = parse_rules({"code": [directive, "alpha"]}, registry)
    assert parsed["code"][0] is directive
    assert parsed["code"][1].name == "alpha"


def test_parse_fails_fast_on_unknown_rule():
    with pytest.raises(UnknownRuleError) as exc_info:
        parse_rules({"name": "required|shiny"}, RuleRegistry())
    assert exc_info.value.rule_name == "shiny"


def test_parse_trailing_pipe_is_an_unknown_empty_rule():
    with pytest.raises(UnknownRuleError):
        parse_rules({"name": "required|"}, RuleRegistry())


def test_has_async_rules_flags_async_directives():
    registry = RuleRegistry()
    registry.register_async("remote", lambda value, args, attribute, done: done())

    assert has_async_rules(parse_rules({"a": "required"}, registry), registry) is False
    assert has_async_rules(parse_rules({"a": "required", "b": "remote"}, registry), registry) is True
