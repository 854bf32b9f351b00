"""
flavor.py — ORM Model for Pizza Flavors ("sabores")

Purpose:
- Represent one entry of the pizzeria catalog: name, price and size.
- No relationship to users.

Important Constraint:
- `tamanho` only ever holds one of the `Tamanho` values; the validator
  rejects anything else before it reaches the table.
"""

from enum import Enum

from sqlalchemy import Column, Float, Integer, String

from app.core.database import Base


class Tamanho(str, Enum):
    """Allowed pizza sizes."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    @classmethod
    def values(cls):
        return [member.value for member in cls]


class Flavor(Base):
    __tablename__ = "flavors"

    id = Column(Integer, primary_key=True, index=True)

    sabor = Column(String(255), nullable=False)
    preco = Column(Float, nullable=False)
    tamanho = Column(String(16), nullable=False)

    def to_public_dict(self):
        return {
            "id": self.id,
            "sabor": self.sabor,
            "preco": self.preco,
            "tamanho": self.tamanho,
        }

    def __repr__(self):
        return f"<Flavor {self.sabor} | {self.tamanho} | {self.preco}>"
