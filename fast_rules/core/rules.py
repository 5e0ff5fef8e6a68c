from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from fast_rules.contracts.validator_rule import ValidatorRule
from fast_rules.core.validation_rules import BUILTIN_IMPLICIT_RULES, BUILTIN_RULES
from fast_rules.exceptions import UnknownRuleError
from fast_rules.utils.value_utils import to_number

if TYPE_CHECKING:
    from fast_rules.core.validator import Validator


class Rule:
    """
    A registered predicate bound to one validator run.

    Holds what the message renderer needs after evaluation: the attribute,
    the raw rule value, the outcome and any message supplied by an async predicate.
    """

    def __init__(self, name: str, fn: Callable, *, is_async: bool = False, validator: Optional['Validator'] = None):
        self.name = name
        self.fn = fn
        self.is_async = is_async
        self.validator = validator
        self.attribute: Optional[str] = None
        self.input_value: Any = None
        self.rule_value: Optional[str] = None
        self.passes: Optional[bool] = None
        self.custom_message: Optional[str] = None
        self._callback: Optional[Callable[[], None]] = None
        self._responded = False

    @property
    def is_coroutine(self) -> bool:
        return self.is_async and inspect.iscoroutinefunction(self.fn)

    def validate(self, input_value: Any, rule_value: Optional[str], attribute: Optional[str] = None,
                 callback: Optional[Callable[[], None]] = None) -> Optional[bool]:
        """
        Evaluate the predicate.

        Synchronous rules return the outcome. Asynchronous rules return None and
        invoke `callback` once the predicate reports back through `response`.
        """
        self.attribute = attribute
        self.input_value = input_value
        self.rule_value = rule_value
        self._callback = callback
        self._responded = False
        self.passes = None
        self.custom_message = None

        if not self.is_async:
            self.passes = bool(self.fn(input_value, rule_value, attribute))
            return self.passes

        if self.is_coroutine:
            loop = asyncio.get_running_loop()
            task = loop.create_task(self.fn(input_value, rule_value, attribute))
            task.add_done_callback(self._on_task_done)
        else:
            self.fn(input_value, rule_value, attribute, self.response)
        return None

    def response(self, passed: bool = True, message: Optional[str] = None) -> None:
        """Completion callback handed to callback-style async predicates. Only the first call counts."""
        if self._responded:
            logging.warning(f"[RULES] Async rule `{self.name}` on `{self.attribute}` responded more than once, ignoring")
            return
        self._responded = True
        self.passes = bool(passed)
        self.custom_message = message
        if self._callback is not None:
            self._callback()

    def _on_task_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            logging.warning(f"[RULES] Async rule `{self.name}` on `{self.attribute}` was cancelled")
            self.response(False)
            return
        exc = task.exception()
        if exc is not None:
            logging.exception(f"[RULES] Async rule `{self.name}` on `{self.attribute}` raised", exc_info=exc)
            self.response(False)
            return
        self.response(bool(task.result()))

    def get_parameters(self) -> list[str]:
        if self.rule_value is None:
            return []
        return self.rule_value.split(',')

    def get_value_type(self) -> str:
        value = self.input_value
        if isinstance(value, (list, tuple, dict, set)):
            return 'array'
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return 'numeric'
        if self.validator is not None and self.validator.has_numeric_rule(self.attribute) \
                and to_number(value) is not None:
            return 'numeric'
        return 'string'

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Rule(name={self.name!r}, attribute={self.attribute!r}, passes={self.passes!r})"


class RuleRegistry:
    """Name -> predicate table with async and implicit flags."""

    def __init__(self, *, load_builtins: bool = True) -> None:
        self._rules: Dict[str, Any] = {}
        self._async: set[str] = set()
        self._implicit: set[str] = set()
        if load_builtins:
            self.reset()

    def reset(self) -> None:
        """Drop custom registrations and restore the built-in catalog."""
        self._rules.clear()
        self._async.clear()
        self._implicit.clear()
        for name, fn in BUILTIN_RULES.items():
            self.register(name, fn, implicit=name in BUILTIN_IMPLICIT_RULES)

    def register(self, name: str, fn: Any, implicit: bool = False) -> None:
        self._rules[name] = fn
        self._async.discard(name)
        self._set_implicit(name, implicit)

    def register_async(self, name: str, fn: Any, implicit: bool = False) -> None:
        self._rules[name] = fn
        self._async.add(name)
        self._set_implicit(name, implicit)
        logging.debug(f"[RULES] Registered async rule `{name}`")

    def _set_implicit(self, name: str, implicit: bool) -> None:
        if implicit:
            self._implicit.add(name)
        else:
            self._implicit.discard(name)

    def has(self, name: str) -> bool:
        return name in self._rules

    def names(self) -> tuple[str, ...]:
        return tuple(self._rules.keys())

    def is_async(self, name: str) -> bool:
        return name in self._async

    def is_implicit(self, name: str) -> bool:
        return name in self._implicit

    def make(self, name: str, validator: Optional['Validator'] = None) -> Rule:
        if name not in self._rules:
            raise UnknownRuleError(name)

        fn = self._rules[name]
        # Class-based rules get a fresh instance bound to the validator
        if inspect.isclass(fn) and issubclass(fn, ValidatorRule):
            fn = fn(validator).passes
        return Rule(name, fn, is_async=self.is_async(name), validator=validator)


# Process-wide registry used when a validator is not given its own
rules = RuleRegistry()


__all__ = [
    "Rule",
    "RuleRegistry",
    "rules",
]
