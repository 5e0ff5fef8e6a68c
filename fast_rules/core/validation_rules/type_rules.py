import json
import re
from datetime import date, datetime
from typing import Any, Optional

from fast_rules.utils.value_utils import to_number

_INTEGER_RE = re.compile(r'^-?\d+$')
_EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
_URL_RE = re.compile(r'^https?://[^\s/$.?#][^\s]*$', re.IGNORECASE)
_ALPHA_RE = re.compile(r'^[^\W\d_]+$')
_ALPHA_NUM_RE = re.compile(r'^[^\W_]+$')
_ALPHA_DASH_RE = re.compile(r'^[\w-]+$')


def integer(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, str) and _INTEGER_RE.match(value.strip()) is not None


def numeric(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return to_number(value) is not None


def string(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, str)


def boolean(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    if isinstance(value, bool):
        return True
    return value in (0, 1, '0', '1', 'true', 'false')


def array(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, (list, tuple))


def email(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, str) and _EMAIL_RE.match(value) is not None


def url(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, str) and _URL_RE.match(value) is not None


def alpha(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, str) and _ALPHA_RE.match(value) is not None


def alpha_num(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    return isinstance(value, str) and _ALPHA_NUM_RE.match(value) is not None


def alpha_dash(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return isinstance(value, str) and _ALPHA_DASH_RE.match(value) is not None


def parse_date(value: Any) -> Optional[datetime]:
    """Datetime view of a value; None when it is not a date."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            return None
    return None


def date_rule(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    return parse_date(value) is not None


def regex(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    """
    `regex:pattern` or `regex:/pattern/flags` (flag `i` supported).

    The raw argument string is used whole, so patterns may contain commas and colons.
    """
    pattern = args or ''
    flags = 0
    delimited = re.match(r'^/(.*)/([a-z]*)$', pattern, re.DOTALL)
    if delimited:
        pattern = delimited.group(1)
        if 'i' in delimited.group(2):
            flags |= re.IGNORECASE
    return re.search(pattern, str(value), flags) is not None


def json_rule(value: Any, args: Optional[str] = None, attribute: Optional[str] = None) -> bool:
    if not isinstance(value, str):
        return False
    try:
        json.loads(value)
    except ValueError:
        return False
    return True
