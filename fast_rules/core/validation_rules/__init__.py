"""Built-in rule catalog loaded into every fresh `RuleRegistry`."""

from .comparison_rules import ConfirmedRule, DifferentRule, SameRule, after, before, in_rule, not_in
from .presence_rules import (
    PresentRule,
    RequiredIfRule,
    RequiredUnlessRule,
    RequiredWithRule,
    RequiredWithoutRule,
    accepted,
    required,
)
from .size_rules import BetweenRule, MaxRule, MinRule, SizeExactRule, digits, digits_between
from .type_rules import (
    alpha,
    alpha_dash,
    alpha_num,
    array,
    boolean,
    date_rule,
    email,
    integer,
    json_rule,
    numeric,
    regex,
    string,
    url,
)

BUILTIN_RULES = {
    # presence
    "required": required,
    "required_if": RequiredIfRule,
    "required_unless": RequiredUnlessRule,
    "required_with": RequiredWithRule,
    "required_without": RequiredWithoutRule,
    "accepted": accepted,
    "present": PresentRule,
    # types
    "integer": integer,
    "numeric": numeric,
    "string": string,
    "boolean": boolean,
    "array": array,
    "email": email,
    "url": url,
    "alpha": alpha,
    "alpha_num": alpha_num,
    "alpha_dash": alpha_dash,
    "date": date_rule,
    "regex": regex,
    "json": json_rule,
    # size
    "min": MinRule,
    "max": MaxRule,
    "between": BetweenRule,
    "size": SizeExactRule,
    "digits": digits,
    "digits_between": digits_between,
    # comparison
    "in": in_rule,
    "not_in": not_in,
    "same": SameRule,
    "different": DifferentRule,
    "confirmed": ConfirmedRule,
    "after": after,
    "before": before,
}

BUILTIN_IMPLICIT_RULES = frozenset({
    "required",
    "required_if",
    "required_unless",
    "required_with",
    "required_without",
    "accepted",
    "present",
})

__all__ = [
    "BUILTIN_RULES",
    "BUILTIN_IMPLICIT_RULES",
    "required",
]
