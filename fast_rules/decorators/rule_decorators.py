from typing import Callable, Optional, TypeVar

from fast_rules.core.validator import Validator

T = TypeVar('T')


def rule(name: str, message: Optional[str] = None, implicit: bool = False) -> Callable[[T], T]:
    """
    Register the decorated function or `ValidatorRule` class as a synchronous rule.

    Usage:
    @rule("phone", "The {attribute} is not a valid phone number.")
    def phone(value, args, attribute):
        ...
    """
    def decorator(fn: T) -> T:
        Validator.register(name, fn, message, implicit)
        return fn
    return decorator


def async_rule(name: str, message: Optional[str] = None) -> Callable[[T], T]:
    """
    Register the decorated coroutine, callback-style function or `AsyncValidatorRule`
    class as an asynchronous rule.

    Usage:
    @async_rule("username_available", "The {attribute} has already been taken.")
    async def username_available(value, args, attribute):
        ...
    """
    def decorator(fn: T) -> T:
        Validator.register_async(name, fn, message)
        return fn
    return decorator
