"""
tokens.py — Bearer Token Issuance, Lookup and Revocation

Purpose:
- `TokenIssuer` mints a new token for a user: persists an `access_tokens`
  row, then signs a JWT whose `jti` is that row's id.
- `TokenRepository` resolves presented tokens and revokes them by id.

Key Rules:
- Issuance and revocation run at most once per call. Nothing here retries:
  retrying issuance could leave two live tokens for one login.
- Revocation is permanent. Revoking an unknown or already revoked id raises
  `RevocationError`.
"""

from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import RevocationError, TokenError
from app.core.logging import get_logger
from app.core.security import create_access_token, decode_token
from app.models.access_token import AccessToken
from app.models.user import User

logger = get_logger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    id: str      # internal, used for revocation
    value: str   # opaque bearer string handed to the client


class TokenIssuer:

    def __init__(self, db: Session, client_name: Optional[str] = None):
        self.db = db
        self.client_name = client_name or settings.TOKEN_CLIENT_NAME

    def issue(self, user: User, display_name: str) -> IssuedToken:
        now = datetime.datetime.utcnow()
        expires_at = now + datetime.timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

        token = AccessToken(
            id=uuid.uuid4().hex,
            user_id=user.id,
            name=display_name,
            client=self.client_name,
            revoked=False,
            created_at=now,
            expires_at=expires_at,
        )
        self.db.add(token)
        self.db.commit()

        value = create_access_token(
            {"sub": str(user.id), "jti": token.id, "aud": self.client_name},
            expires_at=expires_at,
        )
        logger.info("Issued token %s for user %s", token.id, user.id)
        return IssuedToken(id=token.id, value=value)


class TokenRepository:

    def __init__(self, db: Session):
        self.db = db

    def find(self, token_id: str) -> Optional[AccessToken]:
        return self.db.get(AccessToken, token_id)

    def resolve(self, value: str) -> AccessToken:
        """
        Map a presented bearer string to its token row.

        Raises:
            TokenError: bad signature / expired / wrong client, or no such row.
        """
        payload = decode_token(value)
        token = self.find(payload["jti"])
        if token is None or str(token.user_id) != str(payload["sub"]):
            raise TokenError("Token is not recognized")
        return token

    def revoke(self, token_id: str) -> None:
        token = self.find(token_id)
        if token is None:
            raise RevocationError(f"Token {token_id} não encontrado")
        if token.revoked:
            raise RevocationError(f"Token {token_id} já foi revogado")

        token.revoked = True
        self.db.commit()
        logger.info("Revoked token %s for user %s", token.id, token.user_id)
