"""
users.py — Account CRUD and Credential Lookups

Purpose:
- Encapsulate every query against the `users` table.
- Hash passwords on create and whenever an update supplies a new one.
- Serve as the identity store for authentication (`find_by_email`,
  `attempt_match`).

Return conventions:
- Unknown ids are reported as None / False, never as exceptions.
- Storage failures (constraint violations, connection errors) propagate;
  the API layer turns them into 500 envelopes.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.core.security import hash_password, pwd_context, verify_password
from app.models.user import User
from app.services.pagination import paginate
from app.validation.rules import is_missing

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("name", "email", "password")


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def get_all_users(self, page: int = 1) -> Dict[str, Any]:
        query = self.db.query(User).order_by(User.id)
        return paginate(query, page, serializer=User.to_public_dict)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(func.lower(User.email) == email.strip().lower())
            .first()
        )

    def attempt_match(self, email: str, password: str) -> bool:
        """
        True when a user with `email` exists and `password` matches its hash.
        """
        user = self.find_by_email(email)
        if user is None:
            # Keep timing similar to a real comparison
            pwd_context.dummy_verify()
            return False
        return verify_password(password, user.hashed_password)

    def create_user(self, data: Mapping[str, Any]) -> User:
        user = User(
            name=data["name"],
            email=data["email"].strip().lower(),
            hashed_password=hash_password(str(data["password"])),
        )
        try:
            self.db.add(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        logger.info("Created user %s", user.id)
        return user

    def update_user(self, user_id: int, data: Mapping[str, Any]) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None

        changes = {key: data[key] for key in UPDATABLE_FIELDS if not is_missing(data.get(key))}
        if "name" in changes:
            user.name = changes["name"]
        if "email" in changes:
            user.email = changes["email"].strip().lower()
        if "password" in changes:
            user.hashed_password = hash_password(str(changes["password"]))

        if changes:
            try:
                self.db.commit()
            except Exception:
                self.db.rollback()
                raise
            self.db.refresh(user)
            logger.info("Updated user %s (%s)", user.id, ", ".join(sorted(changes)))
        return user

    def delete_user(self, user_id: int) -> bool:
        user = self.get_user(user_id)
        if user is None:
            return False
        try:
            self.db.delete(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Deleted user %s", user_id)
        return True
