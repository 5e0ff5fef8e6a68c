from typing import Optional

from fast_rules.utils.serialisation import get_exception_error_type


class ValidatorException(Exception):
    def __init__(self, message: str, *, error_type: Optional[str] = None):
        """
        Base for structural misuse of the validator (never raised for failing values).

        Args:
            message: The error message.
            error_type: Machine readable type (inferred from the class name when omitted).
        """
        self.message = message
        self.error_type = error_type or get_exception_error_type(self)
        super().__init__(message)


class UnknownRuleError(ValidatorException, LookupError):
    def __init__(self, rule_name: str):
        self.rule_name = rule_name
        super().__init__(f"[RULES] Validator rule `{rule_name}` is not registered.")


class InvalidUsageError(ValidatorException, RuntimeError):
    pass
