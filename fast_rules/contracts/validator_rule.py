from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from fast_rules.core.validator import Validator


class ValidatorRule(ABC):
    """
    Contract for class-based synchronous rules.

    The registry instantiates the class once per lookup and binds it to the
    running validator, so rules comparing against other inputs
    (`same`, `confirmed`, `required_if` ...) can reach them via `self.validator`.
    """

    def __init__(self, validator: Optional['Validator'] = None) -> None:
        self.validator = validator

    def other_value(self, attribute: str) -> Any:
        if self.validator is None:
            return None
        return self.validator.input.get(attribute)

    @abstractmethod
    def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        """
        Decide whether the value satisfies the rule.

        Args:
            value: The value under validation (None when absent from input).
            args: Raw argument string of the directive (e.g. "3,10"), or None.
            attribute: The attribute being validated.
        """
        raise NotImplementedError


class AsyncValidatorRule(ValidatorRule):
    """Contract for class-based asynchronous rules, awaited on the running loop."""

    @abstractmethod
    async def passes(self, value: Any, args: Optional[str], attribute: Optional[str]) -> bool:
        raise NotImplementedError
