"""
deps.py — Shared FastAPI Dependencies for the v1 API

- `get_current_identity`: resolve the bearer token to (user, token id).
  Revoked tokens still resolve here so logout can report them.
- `get_current_user`: same, but only for tokens that are still active.
- `parse_id`: path ids arrive as strings; anything non-numeric is simply an
  unknown id (404), not a request error.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import TokenError
from app.core.logging import get_logger
from app.models.user import User
from app.services.authentication import CurrentIdentity
from app.services.tokens import TokenRepository

logger = get_logger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/login", auto_error=False)

NOT_AUTHENTICATED = "Não autenticado"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=NOT_AUTHENTICATED,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_identity(
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> CurrentIdentity:
    if not token:
        raise _unauthorized()

    try:
        access_token = TokenRepository(db).resolve(token)
    except TokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise _unauthorized() from e

    return CurrentIdentity(user=access_token.user, token_id=access_token.id)


def get_current_user(
    identity: CurrentIdentity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    access_token = TokenRepository(db).find(identity.token_id)
    if access_token is None or access_token.revoked or access_token.is_expired():
        raise _unauthorized()
    return identity.user


def parse_id(raw: str) -> Optional[int]:
    raw = (raw or "").strip()
    if not raw.isdecimal() or len(raw) > 18:
        return None
    return int(raw)
