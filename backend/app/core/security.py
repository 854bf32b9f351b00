"""
security.py — Authentication Utilities (Password Hashing & JWT Encoding)

Purpose:
- Provide reusable security helpers across the backend.
- Hash & verify passwords (never store raw passwords).
- Encode and decode the signed bearer tokens handed to clients.

Key Constraints:
- Tokens are stateful: every encoded token carries a `jti` that points to an
  `access_tokens` row, so logout can revoke it server-side.
- Persisting and revoking token rows lives in services/tokens.py.

This module does NOT:
- Define API routes → that lives in app/api/v1/auth.py
- Query the database.
"""

import datetime
from typing import Any, Dict

from jose import jwt, JWTError  # `python-jose` library
from passlib.context import CryptContext  # password hashing

from app.core.config import settings
from app.core.exceptions import TokenError


# -----------------------------------------------------------------------------
# Password Hashing
# -----------------------------------------------------------------------------

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)

def hash_password(raw_password: str) -> str:
    """
    Hash a plaintext password using bcrypt.
    """
    return pwd_context.hash(raw_password)

def verify_password(raw_password: str, hashed_password: str) -> bool:
    """
    Verify that a raw password matches its hashed stored version.
    """
    return pwd_context.verify(raw_password, hashed_password)


# -----------------------------------------------------------------------------
# JWT Token Handling
# -----------------------------------------------------------------------------

def create_access_token(data: Dict[str, Any], expires_at: datetime.datetime) -> str:
    """
    Create a signed JWT access token.

    Expected payload format:
        data = {"sub": str(user_id), "jti": token_id, "aud": client_name}

    Returns:
        Encoded JWT string.
    """
    to_encode = data.copy()
    to_encode.update({"exp": expires_at})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT token issued for the configured client.

    Raises:
        TokenError: if the signature, expiry or audience check fails, or
        the payload lacks `sub` / `jti`.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.TOKEN_CLIENT_NAME,
        )
    except JWTError as e:
        raise TokenError(str(e)) from e

    if not payload.get("sub") or not payload.get("jti"):
        raise TokenError("Token payload is missing required claims")
    return payload
