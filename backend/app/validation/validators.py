"""
validators.py — Rule Sets for Login, Users and Flavors

Each validator exposes `validate_create(data)` / `validate_update(data)`
returning True or the list of failure messages (see rules.py).

Create rules require every field; update rules only check the fields that
are present.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.flavor import Tamanho
from app.models.user import User
from app.validation.rules import (
    RuleSet,
    ValidationResult,
    check,
    email,
    max_length,
    min_length,
    min_value,
    numeric,
    one_of,
    required,
    string,
    only_known_fields,
    validate,
)

LOGIN_RULES: RuleSet = {
    "email": [
        required("O campo email é obrigatório"),
        email("O email fornecido não é válido"),
    ],
    "password": [
        required("O campo senha é obrigatório"),
    ],
}


class UserValidator:
    """
    Needs a session because the create rules check email uniqueness.
    """

    def __init__(self, db: Session):
        self.db = db

    def _email_is_free(self, value: Any) -> bool:
        if not isinstance(value, str):
            return True
        taken = (
            self.db.query(User.id)
            .filter(func.lower(User.email) == value.strip().lower())
            .first()
        )
        return taken is None

    @property
    def create_rules(self) -> RuleSet:
        return {
            "name": [required(), string(), max_length(255)],
            "email": [
                required(),
                email(),
                check(self._email_is_free, "O email informado já está em uso"),
            ],
            "password": [required(), min_length(6)],
        }

    @property
    def update_rules(self) -> RuleSet:
        return {
            "name": [string(), max_length(255)],
            "email": [email()],
            "password": [min_length(6)],
        }

    def validate_create(self, data: Mapping[str, Any]) -> ValidationResult:
        return validate(data, self.create_rules)

    def validate_update(self, data: Mapping[str, Any]) -> ValidationResult:
        return validate(data, self.update_rules)

    def update_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Fields of an update payload that carry a value; blanks are dropped."""
        return only_known_fields(data, self.update_rules)


class FlavorValidator:

    create_rules: RuleSet = {
        "sabor": [required(), string(), max_length(255)],
        "preco": [required(), numeric(), min_value(0)],
        "tamanho": [required(), one_of(Tamanho.values())],
    }

    update_rules: RuleSet = {
        "sabor": [string(), max_length(255)],
        "preco": [numeric(), min_value(0)],
        "tamanho": [one_of(Tamanho.values())],
    }

    def validate_create(self, data: Mapping[str, Any]) -> ValidationResult:
        return validate(data, self.create_rules)

    def validate_update(self, data: Mapping[str, Any]) -> ValidationResult:
        return validate(data, self.update_rules)

    def update_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Fields of an update payload that carry a value; blanks are dropped."""
        return only_known_fields(data, self.update_rules)
