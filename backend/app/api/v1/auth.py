"""
auth.py — Authentication and Session Handling Endpoints (API Layer)

Purpose:
- POST /login  → validate credentials shape, check them, issue a bearer token.
- POST /logout → revoke the token the caller authenticated with.

Status contract:
- login:  200 user+token | 422 validation | 404 wrong credentials | 500 internal
- logout: 200 | 500 (including a token that is already revoked)

Wrong credentials answer 404 ("user or password incorrect"), not 401; clients
depend on that status.

This file should be thin — hashing, token signing and token storage live in
core/security.py and services/*.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_identity
from app.core.database import get_db
from app.core.logging import get_logger
from app.core.responses import ResponseFormatter, respond
from app.services.authentication import AuthenticationService, CurrentIdentity
from app.services.tokens import TokenIssuer, TokenRepository
from app.services.users import UserService
from app.validation.rules import ValidationResult, validate
from app.validation.validators import LOGIN_RULES

logger = get_logger(__name__)

router = APIRouter(
    tags=["auth"]
)

formatter = ResponseFormatter("usuario")

# -----------------------------------------------------------------------------
# Request Schemas
# -----------------------------------------------------------------------------

class LoginRequest(BaseModel):
    """
    Schema for login POST.
    - `email`: User's login email (any case).
    - `password`: Raw password supplied by the user. Never logged.
    """
    email: Optional[str] = None
    password: Optional[str] = None

    def validate_request(self) -> ValidationResult:
        return validate(self.model_dump(), LOGIN_RULES)


def get_authentication_service(db: Session = Depends(get_db)) -> AuthenticationService:
    return AuthenticationService(
        users=UserService(db),
        token_issuer=TokenIssuer(db),
        token_repository=TokenRepository(db),
    )

# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.post("/login")
def login(
    payload: Optional[LoginRequest] = None,
    auth_service: AuthenticationService = Depends(get_authentication_service),
):
    """
    POST /login

    1. Validate email (required, well formed) and password (required).
    2. Lowercase the email and check the credentials.
    3. On success → 200 with {id, email, token}; otherwise → 404.
    """
    login_request = payload or LoginRequest()

    validation = login_request.validate_request()
    if validation is not True:
        logger.debug("Login rejected by validation: %s", validation)
        return respond(formatter.error("Erros de validação", validation, 422))

    try:
        result = auth_service.authenticate(
            login_request.email.strip().lower(),
            login_request.password,
        )
    except Exception as e:
        logger.exception("Login failed unexpectedly")
        return respond(formatter.error(f"Erro ao realizar login: {e}", status=500))

    if not result.authenticated:
        logger.info("Failed login attempt")
        return respond(formatter.error("Usuário ou senha incorreto", status=404))

    logger.info("User %s logged in", result.user.id)
    return respond(formatter.success("Usuário logado com sucesso", result.user.to_dict()))


@router.post("/logout")
def logout(
    identity: CurrentIdentity = Depends(get_current_identity),
    auth_service: AuthenticationService = Depends(get_authentication_service),
):
    """
    POST /logout

    Revokes the token used for this request. A second logout with the same
    token fails with 500 because the token is already revoked.
    """
    try:
        auth_service.revoke_token(identity)
    except Exception as e:
        logger.error("Logout failed for user %s: %s", identity.user.id, e)
        return respond(formatter.error(f"Erro ao realizar logout: {e}", status=500))

    logger.info("User %s logged out", identity.user.id)
    return respond(formatter.success("Usuário deslogado com sucesso!"))
