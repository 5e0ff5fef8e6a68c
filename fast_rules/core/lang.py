"""
Language tables for validation messages.

Module-level state, in the spirit of the localization layer it is modelled on:
- bundled `<lang>.json` tables shipped in `fast_rules/lang/`
- an optional extra directory whose tables are merged over the bundled ones
- messages installed at runtime (`set_messages`, `set_rule_message`), kept
  apart from the file cache so reloading files never drops them
- a process-wide default language

Usage:
    from fast_rules.core import lang

    lang.use_lang('ru')
    messages = lang.make(lang.get_default_lang())
    lang.set_rule_message('en', 'phone', 'The {attribute} phone number is invalid.')
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from fast_rules import config
from fast_rules.core.messages import Messages

_BUNDLED_PATH = Path(__file__).resolve().parent.parent / "lang"

# Tables read from disk, dropped by `clear_cache`
_messages: Dict[str, Dict[str, Any]] = {}
# Whole tables given to `set_messages`, used instead of the files
_replaced: Dict[str, Dict[str, Any]] = {}
# Single rule templates given to `set_rule_message`
_installed: Dict[str, Dict[str, Any]] = {}

_lang_path: Optional[str] = config.VALIDATOR_LANG_PATH
_fallback_lang: str = config.VALIDATOR_LANG_FALLBACK
_default_lang: str = config.VALIDATOR_LANG


def _read_table(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open(encoding='utf-8') as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logging.warning(f"[LANG] Could not read language table `{path}`: {e}")
        return {}


def _load_files(lang: str) -> Dict[str, Any]:
    """Load and cache the file tables of a language. Idempotent."""
    if lang in _messages:
        return _messages[lang]

    table = _read_table(_BUNDLED_PATH / f"{lang}.json")
    if _lang_path:
        extra = _read_table(Path(_lang_path) / f"{lang}.json")
        attributes = {**table.get('attributes', {}), **extra.get('attributes', {})}
        table = {**table, **extra, 'attributes': attributes}

    if not table:
        logging.debug(f"[LANG] No messages found for language `{lang}`")

    _messages[lang] = table
    return table


def _load(lang: str) -> Dict[str, Any]:
    base = _replaced[lang] if lang in _replaced else _load_files(lang)
    return {**base, **_installed.get(lang, {})}


def get_messages(lang: str) -> Dict[str, Any]:
    return _load(lang)


def set_messages(lang: str, messages: Dict[str, Any]) -> None:
    """Replace the whole table of a language, including rule messages installed earlier."""
    _replaced[lang] = messages
    _installed.pop(lang, None)


def set_rule_message(lang: str, name: str, message: Optional[str] = None) -> None:
    """Install the default message of a rule. Falls back to the table's `def` template."""
    if message is None:
        message = _load(lang).get('def')
    _installed.setdefault(lang, {})[name] = message


def make(lang: str) -> Messages:
    """Build a message renderer for a language, filling gaps from the fallback language."""
    table = _load(lang)
    if lang != _fallback_lang:
        fallback = _load(_fallback_lang)
        attributes = {**fallback.get('attributes', {}), **table.get('attributes', {})}
        table = {**fallback, **table, 'attributes': attributes}
    return Messages(lang, table)


def use_lang(lang: str) -> None:
    global _default_lang
    _default_lang = lang


def get_default_lang() -> str:
    return _default_lang


def set_lang_path(path: Optional[str]) -> None:
    global _lang_path
    _lang_path = path
    clear_cache()


def set_fallback_lang(lang: str) -> None:
    global _fallback_lang
    _fallback_lang = lang


def clear_cache() -> None:
    """Forget tables read from disk. Messages installed at runtime are kept."""
    _messages.clear()


def reset() -> None:
    """Forget runtime messages as well and return to the configured languages."""
    global _lang_path, _fallback_lang, _default_lang
    _messages.clear()
    _replaced.clear()
    _installed.clear()
    _lang_path = None
    _fallback_lang = config.VALIDATOR_LANG_FALLBACK
    _default_lang = config.VALIDATOR_LANG
