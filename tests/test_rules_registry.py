import pytest

from fast_rules import AsyncValidatorRule, RuleRegistry, UnknownRuleError, Validator, ValidatorRule
from fast_rules.core.rules import rules


def test_builtin_catalog_flags():
    registry = RuleRegistry()
    assert registry.has("required")
    assert registry.is_implicit("required")
    assert registry.is_implicit("required_if")
    assert not registry.is_implicit("min")
    assert not registry.is_async("required")


def test_make_unknown_rule_raises():
    registry = RuleRegistry()
    with pytest.raises(UnknownRuleError) as exc_info:
        registry.make("nope")
    assert exc_info.value.error_type == "unknown_rule"
    assert "nope" in str(exc_info.value)


def test_register_overwrites_and_switches_flags():
    registry = RuleRegistry()
    registry.register_async("remote", lambda value, args, attribute, done: done())
    assert registry.is_async("remote")

    registry.register("remote", lambda value, args, attribute: True, implicit=True)
    assert not registry.is_async("remote")
    assert registry.is_implicit("remote")


def test_register_async_is_not_implicit_by_default():
    registry = RuleRegistry()
    registry.register_async("remote", lambda value, args, attribute, done: done())
    assert not registry.is_implicit("remote")


def test_class_rules_are_bound_to_the_validator():
    seen = {}

    class MatchesOther(ValidatorRule):
        def passes(self, value, args, attribute):
            seen["validator"] = self.validator
            return self.other_value(args) == value

    registry = RuleRegistry()
    registry.register("matches", MatchesOther)
    validation = Validator({"a": "x", "b": "x"}, {"b": "matches:a"}, registry=registry)

    assert validation.passes() is True
    assert seen["validator"] is validation


def test_async_class_rule_is_a_coroutine_rule():
    class Remote(AsyncValidatorRule):
        async def passes(self, value, args, attribute):
            return True

    registry = RuleRegistry()
    registry.register_async("remote", Remote)
    assert registry.make("remote").is_coroutine


def test_reset_restores_builtins_only():
    rules.register("custom", lambda value, args, attribute: True)
    assert rules.has("custom")

    rules.reset()
    assert not rules.has("custom")
    assert rules.has("between")


def test_scoped_registry_does_not_leak_into_global_one():
    registry = RuleRegistry()
    registry.register("even", lambda value, args, attribute: int(value) % 2 == 0)

    validation = Validator({"n": 3}, {"n": "even"}, registry=registry)
    assert validation.fails() is True
    assert validation.errors.first("n") == "The n attribute has errors."
    assert not rules.has("even")

    with pytest.raises(UnknownRuleError):
        Validator({"n": 3}, {"n": "even"})


def test_global_register_installs_message():
    Validator.register("even", lambda value, args, attribute: int(value) % 2 == 0, "The {attribute} must be even.")

    validation = Validator({"n": 3}, {"n": "even"})
    assert validation.fails() is True
    assert validation.errors.first("n") == "The n must be even."


def test_registry_without_builtins_still_checks_presence():
    registry = RuleRegistry(load_builtins=False)
    registry.register("even", lambda value, args, attribute: int(value) % 2 == 0)

    assert Validator({"n": 2}, {"n": "even"}, registry=registry).passes() is True
    assert Validator({"n": 3}, {"n": "even"}, registry=registry).passes() is False
    # Absent values skip non-implicit rules as with the full catalog
    assert Validator({}, {"n": "even"}, registry=registry).passes() is True
