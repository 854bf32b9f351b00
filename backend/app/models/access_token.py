"""
access_token.py — ORM Model for Issued Bearer Tokens

Purpose:
- Record every bearer token handed to a client so it can be revoked later.
- The row id is the token's `jti` claim: clients only ever see the signed
  token string, the id stays internal.

Key Points:
- A token belongs to exactly one user and one issuing client.
- `revoked` only ever goes False → True. A revoked token is never reactivated.
"""

import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class AccessToken(Base):
    __tablename__ = "access_tokens"

    # Primary Key (uuid4 hex, also the JWT `jti`)
    id = Column(String(64), primary_key=True)

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Display name (the user's email at issuance time) and issuing client
    name = Column(String(255), nullable=True)
    client = Column(String(255), nullable=False)

    revoked = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    expires_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="tokens")

    def is_expired(self, now: datetime.datetime = None) -> bool:
        now = now or datetime.datetime.utcnow()
        return self.expires_at <= now

    def __repr__(self):
        return f"<AccessToken {self.id} | user={self.user_id} | revoked={self.revoked}>"
