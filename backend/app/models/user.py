"""
user.py — ORM Model for Application Users

Purpose:
- Represent the people allowed to administer the pizzeria backend.
- Stores hashed passwords only — never raw.
- Owns the bearer tokens issued to the user (deleted together with the user).

Used by:
- services/users.py (account CRUD)
- services/authentication.py (credential check + token issuance)
"""

import datetime

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Display
    name = Column(String(255), nullable=False)

    # Authentication fields (email always stored lowercase)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime,
        default=datetime.datetime.utcnow,
        onupdate=datetime.datetime.utcnow,
        nullable=False,
    )

    tokens = relationship(
        "AccessToken",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def to_public_dict(self):
        """
        Public-safe projection: never includes the password hash.
        """
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User {self.email}>"
