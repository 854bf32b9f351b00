"""
users.py — User Account Endpoints (API Layer)

Endpoints:
    • GET    /users          → page of users (id, name, email, created_at)
    • GET    /me             → the authenticated user
    • POST   /users          → create an account (public)
    • GET    /users/{id}     → one user
    • PUT    /users/{id}     → partial update (password re-hashed)
    • PATCH  /users/{id}     → same as PUT
    • DELETE /users/{id}     → delete

Every route except account creation requires a bearer token.

Role in System:
- Validate → call UserService → wrap the outcome in the "user" envelope.
- Password hashes never leave this layer.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_user, parse_id
from app.core.database import get_db
from app.core.logging import get_logger
from app.core.responses import ResponseFormatter, respond
from app.models.user import User
from app.services.users import UserService
from app.validation.validators import UserValidator

logger = get_logger(__name__)

router = APIRouter(
    tags=["users"]
)

formatter = ResponseFormatter("user")

NOT_FOUND = "Usuário não encontrado! Que triste!"


@router.get("/users")
def index(
    page: int = Query(1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    users = UserService(db).get_all_users(page)
    return respond(formatter.success("Usuários encontrados!!", users))


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    return respond(formatter.success("Usuário logado!", current_user.to_public_dict()))


@router.post("/users")
def store(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
):
    data = payload or {}

    validation = UserValidator(db).validate_create(data)
    if validation is not True:
        logger.debug("User creation rejected: %s", validation)
        return respond(formatter.error("Erro de validação", validation, 422))

    try:
        user = UserService(db).create_user(data)
    except Exception:
        logger.exception("Failed to create user")
        return respond(formatter.error("Erro ao cadastrar usuário", status=500))

    return respond(formatter.success("Usuário cadastrado com sucesso!!", user.to_public_dict()))


@router.get("/users/{user_id}")
def show(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    key = parse_id(user_id)
    user = UserService(db).get_user(key) if key is not None else None

    if user is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Usuário encontrado com sucesso!!", user.to_public_dict()))


@router.api_route("/users/{user_id}", methods=["PUT", "PATCH"])
def update(
    user_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = payload or {}

    validator = UserValidator(db)
    validation = validator.validate_update(data)
    if validation is not True:
        logger.debug("User update rejected: %s", validation)
        return respond(formatter.error("Erro de validação", validation, 422))

    key = parse_id(user_id)
    if key is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    try:
        user = UserService(db).update_user(key, validator.update_fields(data))
    except Exception:
        logger.exception("Failed to update user %s", key)
        return respond(formatter.error("Erro ao atualizar usuário", status=500))

    if user is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Usuário atualizado com sucesso!!", user.to_public_dict()))


@router.delete("/users/{user_id}")
def destroy(
    user_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    key = parse_id(user_id)
    if key is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    try:
        deleted = UserService(db).delete_user(key)
    except Exception:
        logger.exception("Failed to delete user %s", key)
        return respond(formatter.error("Erro ao deletar usuário", status=500))

    if not deleted:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Usuário deletado com sucesso!!"))
