"""
rules.py — Declarative Field Rules and the Engine That Evaluates Them

A rule set maps a field name to an ordered list of `Rule`s:

    RULES = {
        "sabor": [required(), string(), max_length(255)],
        "preco": [required(), numeric(), min_value(0)],
    }

`validate(data, RULES)` returns True when every rule passes, otherwise the
full ordered list of failure messages (every field, every failing rule).

Semantics per field:
- A missing value (absent key, None, blank string, empty list) only triggers
  the field's `required` rule; the remaining rules are skipped.
- A present value is checked against every non-required rule in order.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Rule:
    predicate: Callable[[Any], bool]
    message: str
    implicit: bool = False  # evaluated only when the value is missing

    def render(self, field: str) -> str:
        return self.message.format(field=field)


RuleSet = Mapping[str, List[Rule]]
ValidationResult = Union[bool, List[str]]


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, dict)) and not value:
        return True
    return False


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float, str)):
        return False
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return False
    # inf / nan parse as floats but can't be stored or serialized
    return math.isfinite(number)


# -----------------------------------------------------------------------------
# Rule factories
# -----------------------------------------------------------------------------

def required(message: str = "O campo {field} é obrigatório") -> Rule:
    return Rule(lambda value: not is_missing(value), message, implicit=True)


def string(message: str = "O campo {field} deve ser um texto") -> Rule:
    return Rule(lambda value: isinstance(value, str), message)


def max_length(limit: int, message: Optional[str] = None) -> Rule:
    message = message or "O campo {field} não pode ter mais de %d caracteres" % limit
    # Only meaningful for text; a non-string value is reported by `string()`
    return Rule(lambda value: not isinstance(value, str) or len(value) <= limit, message)


def min_length(limit: int, message: Optional[str] = None) -> Rule:
    message = message or "O campo {field} deve ter pelo menos %d caracteres" % limit
    return Rule(lambda value: len(str(value)) >= limit, message)


def numeric(message: str = "O campo {field} deve ser um número") -> Rule:
    return Rule(_is_number, message)


def min_value(limit: float, message: Optional[str] = None) -> Rule:
    message = message or "O campo {field} deve ser no mínimo %s" % limit
    # Non-numeric values are reported by `numeric()`
    return Rule(lambda value: not _is_number(value) or float(value) >= limit, message)


def email(message: str = "O campo {field} deve ser um endereço de email válido") -> Rule:
    def _check(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            return False
        return True

    return Rule(_check, message)


def one_of(allowed: Iterable[str], message: Optional[str] = None) -> Rule:
    allowed = list(allowed)
    message = message or "O campo {field} deve ser um dos valores: %s" % ", ".join(allowed)
    return Rule(lambda value: value in allowed, message)


def check(predicate: Callable[[Any], bool], message: str) -> Rule:
    """Wrap an arbitrary predicate (e.g. a uniqueness lookup) as a rule."""
    return Rule(predicate, message)


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------

def validate(data: Mapping[str, Any], rules: RuleSet) -> ValidationResult:
    """
    Evaluate `rules` against `data`, collecting every failure message.
    """
    errors: List[str] = []

    for field, field_rules in rules.items():
        value = data.get(field)

        if is_missing(value):
            errors.extend(rule.render(field) for rule in field_rules if rule.implicit)
            continue

        for rule in field_rules:
            if rule.implicit:
                continue
            if not rule.predicate(value):
                errors.append(rule.render(field))

    return errors or True


def only_known_fields(data: Mapping[str, Any], rules: RuleSet) -> Dict[str, Any]:
    """
    Keep the keys of `data` that the rule set knows about and that carry a value.
    """
    return {
        field: data[field]
        for field in rules
        if field in data and not is_missing(data[field])
    }
