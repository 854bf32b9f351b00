"""
flavors.py — Catalog CRUD for Pizza Flavors

Thin wrapper over the `flavors` table. Inputs are expected to have passed
FlavorValidator already; unknown ids come back as None / False.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.flavor import Flavor, Tamanho
from app.services.pagination import paginate
from app.validation.rules import is_missing

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("sabor", "preco", "tamanho")


class FlavorService:

    def __init__(self, db: Session):
        self.db = db

    def get_all_flavors(self, page: int = 1) -> Dict[str, Any]:
        query = self.db.query(Flavor).order_by(Flavor.id)
        return paginate(query, page, serializer=Flavor.to_public_dict)

    def get_flavor(self, flavor_id: int) -> Optional[Flavor]:
        return self.db.get(Flavor, flavor_id)

    def create_flavor(self, data: Mapping[str, Any]) -> Flavor:
        flavor = Flavor(
            sabor=data["sabor"],
            preco=float(data["preco"]),
            tamanho=Tamanho(data["tamanho"]).value,
        )
        try:
            self.db.add(flavor)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(flavor)
        logger.info("Created flavor %s (%s)", flavor.id, flavor.sabor)
        return flavor

    def update_flavor(self, flavor_id: int, data: Mapping[str, Any]) -> Optional[Flavor]:
        flavor = self.get_flavor(flavor_id)
        if flavor is None:
            return None

        changes = {key: data[key] for key in UPDATABLE_FIELDS if not is_missing(data.get(key))}
        if "sabor" in changes:
            flavor.sabor = changes["sabor"]
        if "preco" in changes:
            flavor.preco = float(changes["preco"])
        if "tamanho" in changes:
            flavor.tamanho = Tamanho(changes["tamanho"]).value

        if changes:
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(flavor)
            logger.info("Updated flavor %s (%s)", flavor.id, ", ".join(sorted(changes)))
        return flavor

    def delete_flavor(self, flavor_id: int) -> bool:
        flavor = self.get_flavor(flavor_id)
        if flavor is None:
            return False
        try:
            self.db.delete(flavor)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deleted flavor %s", flavor_id)
        return True
