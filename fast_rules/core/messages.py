from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional

from fast_rules.utils.serialisation import snake_case_to_words

if TYPE_CHECKING:
    from fast_rules.core.rules import Rule


class _Placeholders(dict):
    # Unknown placeholders stay in the message as written
    def __missing__(self, key: str) -> str:
        return '{' + key + '}'


def _between(messages: 'Messages', rule: 'Rule') -> Dict[str, Any]:
    params = rule.get_parameters()
    return {'min': params[0] if params else '', 'max': params[1] if len(params) > 1 else ''}


def _other_and_value(messages: 'Messages', rule: 'Rule') -> Dict[str, Any]:
    other, _, value = (rule.rule_value or '').partition(',')
    return {'other': messages.get_attribute_name(other), 'value': value}


def _fields(messages: 'Messages', rule: 'Rule') -> Dict[str, Any]:
    names = [messages.get_attribute_name(name) for name in rule.get_parameters() if name]
    return {'field': ', '.join(names)}


def _other_attribute(messages: 'Messages', rule: 'Rule') -> Dict[str, Any]:
    return {rule.name: messages.get_attribute_name(rule.rule_value or '')}


def _options(messages: 'Messages', rule: 'Rule') -> Dict[str, Any]:
    return {'values': ', '.join(rule.get_parameters())}


_REPLACEMENTS: Dict[str, Callable[['Messages', 'Rule'], Dict[str, Any]]] = {
    'between': _between,
    'digits_between': _between,
    'required_if': _other_and_value,
    'required_unless': _other_and_value,
    'required_with': _fields,
    'required_without': _fields,
    'same': _other_attribute,
    'different': _other_attribute,
    'in': _options,
    'not_in': _options,
}


class Messages:
    """
    Renders failure messages for one validator from a language table.

    Template lookup order: custom `rule.attribute`, table `rule.attribute`,
    custom `rule`, table `rule`, table `def`. Templates use `str.format`
    placeholders: `{attribute}` for the display name and `{<rule name>}` for
    the raw arguments, plus rule specific ones such as `{min}`/`{max}`.
    """

    def __init__(self, lang: str, messages: Mapping[str, Any]) -> None:
        self.lang = lang
        self.messages = messages
        self.custom_messages: Dict[str, str] = {}
        self.attribute_names: Dict[str, str] = {}

    def set_custom(self, custom_messages: Optional[Mapping[str, str]]) -> None:
        self.custom_messages = dict(custom_messages or {})

    def set_attribute_names(self, attributes: Optional[Mapping[str, str]]) -> None:
        self.attribute_names = dict(attributes or {})

    def get_attribute_name(self, attribute: str) -> str:
        if attribute in self.attribute_names:
            return self.attribute_names[attribute]
        table_names = self.messages.get('attributes') or {}
        if attribute in table_names:
            return table_names[attribute]
        return snake_case_to_words(attribute)

    def all(self) -> Mapping[str, Any]:
        return self.messages

    def render(self, rule: 'Rule') -> str:
        if rule.custom_message:
            return rule.custom_message

        template = self._get_template(rule)
        data = _Placeholders({
            'attribute': self.get_attribute_name(rule.attribute or ''),
            rule.name: ','.join(rule.get_parameters()),
        })
        if rule.name in _REPLACEMENTS:
            data.update(_REPLACEMENTS[rule.name](self, rule))

        try:
            return template.format_map(data)
        except (AttributeError, IndexError, ValueError):
            return template

    def _get_template(self, rule: 'Rule') -> str:
        template: Any = None
        for key in (f"{rule.name}.{rule.attribute}", rule.name):
            if key in self.custom_messages:
                template = self.custom_messages[key]
                break
            if key in self.messages:
                template = self.messages[key]
                break

        if isinstance(template, Mapping):
            template = template.get(rule.get_value_type())

        if not isinstance(template, str):
            template = self.messages.get('def') or 'The {attribute} attribute has errors.'
        return template
