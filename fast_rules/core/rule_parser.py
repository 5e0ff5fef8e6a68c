from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Mapping, Sequence, Union

from fast_rules.contracts.rule_directive import RuleDirective
from fast_rules.exceptions import UnknownRuleError

if TYPE_CHECKING:
    from fast_rules.core.rules import RuleRegistry

RawRules = Mapping[str, Union[str, Sequence[Union[str, RuleDirective]]]]
RuleSet = Dict[str, list[RuleDirective]]


def extract_rule(rule_string: str) -> RuleDirective:
    """
    Split a token like `min:3` into name `min` and value `3`.

    Only the first colon separates; the rest stays in the value
    (`after:2020-01-01T10:00`). `min:` keeps an empty value.
    """
    if ':' not in rule_string:
        return RuleDirective(name=rule_string)
    name, value = rule_string.split(':', 1)
    return RuleDirective(name=name, value=value)


def parse_rules(raw_rules: RawRules, registry: 'RuleRegistry') -> RuleSet:
    """
    Normalize rule definitions into `{attribute: [RuleDirective, ...]}`.

    Attribute and directive order is preserved. Every rule name is checked
    against the registry so typos fail when the validator is built.
    """
    parsed: RuleSet = {}
    for attribute, attribute_rules in raw_rules.items():
        tokens = attribute_rules.split('|') if isinstance(attribute_rules, str) else list(attribute_rules)

        directives = []
        for token in tokens:
            directive = token if isinstance(token, RuleDirective) else extract_rule(token)
            if not registry.has(directive.name):
                raise UnknownRuleError(directive.name)
            directives.append(directive)

        parsed[attribute] = directives
    return parsed


def has_async_rules(rule_set: RuleSet, registry: 'RuleRegistry') -> bool:
    return any(
        registry.is_async(directive.name)
        for directives in rule_set.values()
        for directive in directives
    )
