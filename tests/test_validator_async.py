import asyncio

import pytest

from fast_rules import AsyncValidatorRule, InvalidUsageError, Validator


@pytest.fixture
def deferred_rule():
    """Async rule whose completions are held until the test releases them."""
    pending = []

    def remote(value, args, attribute, done):
        pending.append((attribute, args, done))

    Validator.register_async("remote", remote, "The {attribute} failed the remote check.")
    return pending


def _outcomes(validation):
    calls = []
    validation.check_async(lambda: calls.append("passes"), lambda: calls.append("fails"))
    return calls


def test_one_failure_among_three_async_directives(deferred_rule):
    validation = Validator({"a": "x", "b": "y"}, {"a": "remote:ok|remote:bad", "b": "remote:ok"})
    assert validation.has_async is True

    calls = _outcomes(validation)
    assert len(deferred_rule) == 3
    assert calls == []

    for _, args, done in deferred_rule:
        done(args == "ok")

    assert calls == ["fails"]
    assert validation.error_count == 1
    assert validation.errors.all() == {"a": ["The a failed the remote check."]}


def test_all_async_directives_pass(deferred_rule):
    validation = Validator({"a": "x"}, {"a": "required|remote|remote"})
    calls = _outcomes(validation)

    for _, _, done in reversed(deferred_rule):
        done()

    assert calls == ["passes"]
    assert validation.errors.all() == {}


def test_terminal_callback_waits_for_late_async_after_inline_sync(deferred_rule):
    validation = Validator({"a": "x", "b": 5}, {"a": "remote", "b": "integer|min:1"})
    calls = _outcomes(validation)

    assert calls == []
    deferred_rule[0][2]()
    assert calls == ["passes"]


def test_zero_directives_still_fire_once():
    calls = []
    Validator({}, {}).check_async(lambda: calls.append("passes"), lambda: calls.append("fails"))
    Validator({}, {"name": "min:3"}).check_async(lambda: calls.append("passes"))
    assert calls == ["passes", "passes"]


def test_completion_called_twice_is_counted_once():
    def twice(value, args, attribute, done):
        done(False)
        done(False)

    Validator.register_async("twice", twice, "Twice {attribute}.")
    validation = Validator({"a": "x"}, {"a": "twice"})
    calls = _outcomes(validation)

    assert calls == ["fails"]
    assert validation.error_count == 1


def test_async_failure_messages_follow_completion_order():
    pending = {}

    def slow(value, args, attribute, done):
        pending[args] = done

    Validator.register_async("slow", slow)
    validation = Validator(
        {"a": "x"},
        {"a": "slow:first|slow:second"},
        {"slow": "{attribute} failed {slow}"},
    )
    _outcomes(validation)

    pending["second"](False)
    pending["first"](False)
    assert validation.errors.get("a") == ["a failed second", "a failed first"]


def test_predicate_message_overrides_template(deferred_rule):
    validation = Validator({"username": "taken"}, {"username": "remote"})
    calls = _outcomes(validation)

    deferred_rule[0][2](False, "That username is taken.")
    assert calls == ["fails"]
    assert validation.errors.first("username") == "That username is taken."


def test_missing_callback_with_async_rules_raises_before_running(deferred_rule):
    validation = Validator({"a": "x"}, {"a": "remote"})

    with pytest.raises(InvalidUsageError):
        validation.passes()
    with pytest.raises(InvalidUsageError):
        validation.fails()
    assert deferred_rule == []


def test_fails_callback_only(deferred_rule):
    calls = []
    validation = Validator({"a": "x"}, {"a": "remote"})
    validation.fails(lambda: calls.append("fails"))

    deferred_rule[0][2](False)
    assert calls == ["fails"]


def test_absent_value_skips_async_rule(deferred_rule):
    calls = []
    Validator({}, {"a": "remote"}).passes(lambda: calls.append("passes"))
    assert deferred_rule == []
    assert calls == ["passes"]


def test_coroutine_rule_without_running_loop_raises():
    async def available(value, args, attribute):
        return True

    Validator.register_async("available", available)
    validation = Validator({"username": "bob"}, {"username": "required|available"})

    with pytest.raises(InvalidUsageError):
        validation.passes(lambda: None)


@pytest.mark.asyncio
async def test_coroutine_rule_failure():
    async def available(value, args, attribute):
        await asyncio.sleep(0)
        return value != "taken"

    Validator.register_async("available", available, "The {attribute} has already been taken.")

    validation = Validator({"username": "taken"}, {"username": "required|available"})
    assert await validation.fails_async() is True
    assert validation.errors.first("username") == "The username has already been taken."

    validation = Validator({"username": "free"}, {"username": "required|available"})
    assert await validation.passes_async() is True


@pytest.mark.asyncio
async def test_coroutines_complete_out_of_order():
    async def delayed(value, args, attribute):
        await asyncio.sleep(float(args))
        return False

    Validator.register_async("delayed", delayed, "{attribute} after {delayed}")
    validation = Validator({"a": "x"}, {"a": "delayed:0.02|delayed:0"})

    assert await validation.passes_async() is False
    assert validation.errors.get("a") == ["a after 0", "a after 0.02"]


@pytest.mark.asyncio
async def test_raising_coroutine_counts_as_failure():
    async def broken(value, args, attribute):
        raise RuntimeError("service down")

    Validator.register_async("broken", broken)
    validation = Validator({"a": "x"}, {"a": "broken"})

    assert await validation.passes_async() is False
    assert validation.error_count == 1


@pytest.mark.asyncio
async def test_async_class_rule_reaches_other_input():
    class UniqueAgainst(AsyncValidatorRule):
        async def passes(self, value, args, attribute):
            await asyncio.sleep(0)
            return value != self.other_value(args)

    Validator.register_async("unique_against", UniqueAgainst, "The {attribute} must differ.")

    validation = Validator({"old": "a", "new": "a"}, {"new": "unique_against:old"})
    assert await validation.passes_async() is False
    assert validation.errors.first("new") == "The new must differ."


@pytest.mark.asyncio
async def test_passes_async_for_sync_rules():
    validation = Validator({"age": 15}, {"age": "required|integer|between:18,99"})
    assert await validation.passes_async() is False
    assert await validation.fails_async() is True


def test_late_completion_does_not_change_recorded_outcome():
    completions = []

    def flaky(value, args, attribute, done):
        completions.append(done)
        done(False, "First answer")

    Validator.register_async("flaky", flaky)
    validation = Validator({"a": "x"}, {"a": "flaky"})
    calls = _outcomes(validation)

    completions[0](True, "Second answer")
    assert calls == ["fails"]
    assert validation.errors.get("a") == ["First answer"]
    assert validation.error_count == 1


def test_rule_ignores_second_response():
    from fast_rules.core.rules import Rule

    resolved = []
    rule = Rule("held", lambda value, args, attribute, done: None, is_async=True)
    rule.validate("x", None, "a", lambda: resolved.append(rule.passes))

    rule.response(False, "no")
    rule.response(True, "yes")

    assert resolved == [False]
    assert rule.passes is False
    assert rule.custom_message == "no"
