from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from fast_rules.core import lang as lang_store
from fast_rules.core.async_resolvers import AsyncResolvers
from fast_rules.core.errors import ErrorBag
from fast_rules.core.rule_parser import RawRules, RuleSet, has_async_rules, parse_rules
from fast_rules.core.rules import Rule, RuleRegistry, rules as default_registry
from fast_rules.core.validation_rules.presence_rules import required
from fast_rules.contracts.rule_directive import RuleDirective
from fast_rules.exceptions import InvalidUsageError


class Validator:
    """
    Validates an input mapping against per-attribute rule definitions.

    Usage:
        validation = Validator({'age': 15}, {'age': 'required|integer|between:18,99'})
        if validation.fails():
            validation.errors.first('age')

        # with async rules a callback is required
        validation.passes(lambda: print('ok'))

        # or, inside a coroutine
        ok = await validation.passes_async()
    """

    # Rules that make size rules compare numbers instead of lengths
    numeric_rules: tuple[str, ...] = ('integer', 'numeric', 'between')

    def __init__(self,
        input: Mapping[str, Any],
        rules: RawRules,
        custom_messages: Optional[Mapping[str, str]] = None,
        *,
        registry: Optional[RuleRegistry] = None,
        lang: Optional[str] = None,
    ):
        """
        Args:
            input: Values under validation, keyed by attribute.
            rules: `{attribute: "rule|rule:args"}` or `{attribute: ["rule", "rule:args"]}`.
            custom_messages: Templates keyed by `rule` or `rule.attribute`.
            registry: Rule registry to resolve names against (process-wide one by default).
            lang: Message language (the current default language by default).

        Raises:
            UnknownRuleError: If a rule name is not registered.
        """
        self.input = input if input is not None else {}
        self.registry = registry if registry is not None else default_registry
        self.lang = lang or Validator.get_default_lang()

        self.messages = lang_store.make(self.lang)
        self.messages.set_custom(custom_messages)

        self.errors = ErrorBag()
        self.error_count = 0

        self.has_async = False
        self.rules = self._parse_rules(rules)

    # --------------- running ---------------
    def check(self) -> bool:
        """
        Run every applicable directive synchronously.

        Returns:
            bool: True when no directive failed.
        """
        if self.has_async:
            raise InvalidUsageError("check() cannot run async rules; use check_async() or pass a callback.")
        self._reset_run()

        for attribute, value, directive in self._directives():
            rule = self.get_rule(directive.name)
            if not self._is_validatable(rule, value):
                continue
            if not rule.validate(value, directive.value, attribute):
                self._add_failure(rule)

        logging.debug(f"[VALIDATOR] Checked {len(self.rules)} attribute(s), {self.error_count} failure(s)")
        return self.error_count == 0

    def check_async(self, passes: Optional[Callable[[], Any]] = None,
                    fails: Optional[Callable[[], Any]] = None) -> None:
        """
        Run every applicable directive, sync and async, reporting through callbacks.

        Failures are recorded as they resolve, so messages of one attribute
        follow completion order. Exactly one of `passes`/`fails` is invoked,
        once all directives resolved.
        """
        self._ensure_loop_for_coroutines()
        self._reset_run()

        def failed_one(rule: Rule) -> None:
            self._add_failure(rule)

        def resolved_all(all_passed: bool) -> None:
            if all_passed:
                if passes is not None:
                    passes()
            elif fails is not None:
                fails()

        resolvers = AsyncResolvers(failed_one, resolved_all)

        for attribute, value, directive in self._directives():
            rule = self.get_rule(directive.name)
            if not self._is_validatable(rule, value):
                continue
            self._validate_in_slot(resolvers, rule, value, directive, attribute)

        resolvers.enable_firing()
        resolvers.fire()

    def _validate_in_slot(self, resolvers: AsyncResolvers, rule: Rule, value: Any,
                          directive: RuleDirective, attribute: str) -> None:
        index = resolvers.add(rule)
        if rule.is_async:
            rule.validate(value, directive.value, attribute, lambda: resolvers.resolve(index))
        else:
            rule.validate(value, directive.value, attribute)
            resolvers.resolve(index)

    def passes(self, passes: Optional[Callable[[], Any]] = None) -> Optional[bool]:
        """Determine if validation passes. Returns None when run with a callback."""
        if self._check_async('passes', passes):
            return self.check_async(passes)
        return self.check()

    def fails(self, fails: Optional[Callable[[], Any]] = None) -> Optional[bool]:
        """Determine if validation fails. Returns None when run with a callback."""
        if self._check_async('fails', fails):
            return self.check_async(None, fails)
        return not self.check()

    async def passes_async(self) -> bool:
        """Await the outcome of `check_async`; works for sync-only rule sets as well."""
        outcome: asyncio.Future[bool] = asyncio.get_running_loop().create_future()

        def settle(result: bool) -> None:
            if not outcome.done():
                outcome.set_result(result)

        self.check_async(lambda: settle(True), lambda: settle(False))
        return await outcome

    async def fails_async(self) -> bool:
        return not await self.passes_async()

    # --------------- helpers ---------------
    def _check_async(self, func_name: str, callback: Optional[Callable[[], Any]]) -> bool:
        has_callback = callable(callback)
        if self.has_async and not has_callback:
            raise InvalidUsageError(f"{func_name}() expects a callback when async rules are being tested.")
        return self.has_async or has_callback

    def _ensure_loop_for_coroutines(self) -> None:
        coroutine_rules = [
            directive.name
            for _, _, directive in self._directives()
            if self.registry.is_async(directive.name) and self.get_rule(directive.name).is_coroutine
        ]
        if not coroutine_rules:
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            raise InvalidUsageError(
                f"Rules {', '.join(coroutine_rules)} are coroutines and need a running event loop; "
                f"await passes_async() instead."
            ) from None

    def _directives(self) -> Iterable[tuple[str, Any, RuleDirective]]:
        for attribute, directives in self.rules.items():
            # Attributes missing from the input validate as None
            value = self.input.get(attribute)
            for directive in directives:
                yield attribute, value, directive

    def _reset_run(self) -> None:
        self.errors.clear()
        self.error_count = 0

    def _add_failure(self, rule: Rule) -> None:
        message = self.messages.render(rule)
        self.errors.add(rule.attribute, message)
        self.error_count += 1
        logging.debug(f"[VALIDATOR] `{rule.attribute}` failed `{rule.name}`")

    def _parse_rules(self, rules: RawRules) -> RuleSet:
        parsed = parse_rules(rules, self.registry)
        self.has_async = has_async_rules(parsed, self.registry)
        return parsed

    def _is_validatable(self, rule: Rule, value: Any) -> bool:
        """Implicit rules always run; the rest only run on values `required` accepts."""
        if self.registry.is_implicit(rule.name):
            return True
        # Registries built without the catalog still need the presence check
        if not self.registry.has('required'):
            return required(value)
        return bool(self.get_rule('required').validate(value, None))

    def has_rule(self, attribute: Optional[str], find_rules: Iterable[str]) -> bool:
        find_rules = set(find_rules)
        return any(directive.name in find_rules for directive in self.rules.get(attribute, []))

    def has_numeric_rule(self, attribute: Optional[str]) -> bool:
        return self.has_rule(attribute, self.numeric_rules)

    def set_attribute_names(self, attributes: Mapping[str, str]) -> None:
        self.messages.set_attribute_names(attributes)

    def get_rule(self, name: str) -> Rule:
        return self.registry.make(name, self)

    # --------------- process-wide API ---------------
    @classmethod
    def make(cls, input: Mapping[str, Any], rules: RawRules,
             custom_messages: Optional[Mapping[str, str]] = None, **kwargs) -> 'Validator':
        return cls(input, rules, custom_messages, **kwargs)

    @staticmethod
    def register(name: str, fn: Any, message: Optional[str] = None, implicit: bool = False) -> None:
        """Register a synchronous rule and its message in the default language."""
        default_registry.register(name, fn, implicit)
        lang_store.set_rule_message(Validator.get_default_lang(), name, message)

    @staticmethod
    def register_async(name: str, fn: Any, message: Optional[str] = None) -> None:
        """Register an async rule (callback style or coroutine) and its message in the default language."""
        default_registry.register_async(name, fn)
        lang_store.set_rule_message(Validator.get_default_lang(), name, message)

    @staticmethod
    def set_messages(lang_code: str, messages: Mapping[str, Any]) -> None:
        lang_store.set_messages(lang_code, dict(messages))

    @staticmethod
    def get_messages(lang_code: str) -> Mapping[str, Any]:
        return lang_store.get_messages(lang_code)

    @staticmethod
    def use_lang(lang_code: str) -> None:
        lang_store.use_lang(lang_code)

    @staticmethod
    def get_default_lang() -> str:
        return lang_store.get_default_lang()


__all__ = [
    "Validator",
]
