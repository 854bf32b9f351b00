"""
flavors.py — Pizza Flavor Catalog Endpoints (API Layer)

Endpoints:
    • GET    /flavors        → page of flavors (public)
    • POST   /flavors        → create a flavor
    • GET    /flavors/{id}   → one flavor (public)
    • PUT    /flavors/{id}   → partial update
    • PATCH  /flavors/{id}   → same as PUT
    • DELETE /flavors/{id}   → delete

Writes require a bearer token. Responses use the "sabores" envelope key.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.deps import get_current_user, parse_id
from app.core.database import get_db
from app.core.logging import get_logger
from app.core.responses import ResponseFormatter, respond
from app.models.user import User
from app.services.flavors import FlavorService
from app.validation.validators import FlavorValidator

logger = get_logger(__name__)

router = APIRouter(
    prefix="/flavors",
    tags=["flavors"]
)

formatter = ResponseFormatter("sabores")
validator = FlavorValidator()

NOT_FOUND = "Sabor não encontrado! Que triste!"


@router.get("")
def index(page: int = Query(1), db: Session = Depends(get_db)):
    flavors = FlavorService(db).get_all_flavors(page)
    return respond(formatter.success("Sabores encontrados!!", flavors))


@router.post("")
def store(
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = payload or {}

    validation = validator.validate_create(data)
    if validation is not True:
        logger.debug("Flavor creation rejected: %s", validation)
        return respond(formatter.error("Erro de validação", validation, 422))

    try:
        flavor = FlavorService(db).create_flavor(data)
    except Exception:
        logger.exception("Failed to create flavor")
        return respond(formatter.error("Erro ao cadastrar sabor", status=500))

    return respond(formatter.success("Sabor cadastrado com sucesso!!", flavor.to_public_dict()))


@router.get("/{flavor_id}")
def show(flavor_id: str, db: Session = Depends(get_db)):
    key = parse_id(flavor_id)
    flavor = FlavorService(db).get_flavor(key) if key is not None else None

    if flavor is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Sabor encontrado com sucesso!!", flavor.to_public_dict()))


@router.api_route("/{flavor_id}", methods=["PUT", "PATCH"])
def update(
    flavor_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    data = payload or {}

    validation = validator.validate_update(data)
    if validation is not True:
        logger.debug("Flavor update rejected: %s", validation)
        return respond(formatter.error("Erro de validação", validation, 422))

    key = parse_id(flavor_id)
    if key is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    try:
        flavor = FlavorService(db).update_flavor(key, validator.update_fields(data))
    except Exception:
        logger.exception("Failed to update flavor %s", key)
        return respond(formatter.error("Erro ao atualizar sabor", status=500))

    if flavor is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Sabor atualizado com sucesso!!", flavor.to_public_dict()))


@router.delete("/{flavor_id}")
def destroy(
    flavor_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    key = parse_id(flavor_id)
    if key is None:
        return respond(formatter.error(NOT_FOUND, status=404))

    try:
        deleted = FlavorService(db).delete_flavor(key)
    except Exception:
        logger.exception("Failed to delete flavor %s", key)
        return respond(formatter.error("Erro ao deletar sabor", status=500))

    if not deleted:
        return respond(formatter.error(NOT_FOUND, status=404))

    return respond(formatter.success("Sabor deletado com sucesso!!"))
