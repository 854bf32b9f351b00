"""
authentication.py — Login Credential Check and Token Lifecycle

Flow:
    authenticate(email, password)
        → UserService.attempt_match   (hash comparison)
        → UserService.find_by_email   (load identity)
        → TokenIssuer.issue           (one new durable token)
        → AuthenticatedUser(id, email, token)

    revoke_token(identity)
        → TokenRepository.revoke(identity.token_id)

Wrong credentials are a normal negative result (`authenticated=False`), not
an exception. Token store failures and `RevocationError` propagate to the
caller untouched and are never retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import RevocationError
from app.core.logging import get_logger
from app.models.user import User
from app.services.tokens import TokenIssuer, TokenRepository
from app.services.users import UserService

logger = get_logger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Login response payload. Never carries the password hash."""
    id: int
    email: str
    token: str

    def to_dict(self):
        return {"id": self.id, "email": self.email, "token": self.token}


@dataclass(frozen=True)
class AuthenticationResult:
    authenticated: bool
    user: Optional[AuthenticatedUser] = None


@dataclass(frozen=True)
class CurrentIdentity:
    """The caller resolved from a bearer token."""
    user: User
    token_id: Optional[str]


class AuthenticationService:

    def __init__(self, users: UserService, token_issuer: TokenIssuer, token_repository: TokenRepository):
        self.users = users
        self.token_issuer = token_issuer
        self.token_repository = token_repository

    def authenticate(self, email: str, password: str) -> AuthenticationResult:
        if not self.users.attempt_match(email, password):
            return AuthenticationResult(authenticated=False)

        user = self.users.find_by_email(email)
        issued = self.token_issuer.issue(user, display_name=user.email)

        return AuthenticationResult(
            authenticated=True,
            user=AuthenticatedUser(id=user.id, email=user.email, token=issued.value),
        )

    def revoke_token(self, identity: CurrentIdentity) -> None:
        if not identity.token_id:
            raise RevocationError("Usuário não possui token ativo")
        self.token_repository.revoke(identity.token_id)
