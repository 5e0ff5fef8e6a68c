import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Numeric view of a value; None when it has none. Booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def stringify(value: Any) -> str:
    """String form used when comparing input values against rule arguments."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return ''
    return str(value)
