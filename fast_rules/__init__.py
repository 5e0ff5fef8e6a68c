"""
FastRules - Laravel-inspired declarative validation for Python applications

This package provides:
- A rule mini-language: `{"age": "required|integer|between:18,99"}`
- A registry of named rules (built-in catalog plus your own, sync or async)
- Implicit rules that run on absent values, others skipped until a value is present
- Async rules (coroutines or completion callbacks) joined into one pass/fail outcome
- Localized, overridable error messages per rule and attribute

Usage:
    from fast_rules import Validator

    validation = Validator({'age': 15}, {'age': 'required|integer|between:18,99'})
    validation.passes()          # False
    validation.errors.all()      # {'age': ['The age field must be between 18 and 99.']}
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .app_provider import boot
from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .decorators import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403

register = Validator.register  # noqa: F405
register_async = Validator.register_async  # noqa: F405
make = Validator.make  # noqa: F405
