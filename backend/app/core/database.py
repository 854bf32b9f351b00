"""
database.py — Database Session & Connection Management

Purpose:
- Create and provide access to the relational database used by the backend.
- Manage SQLAlchemy Engine + Session lifecycle.
- Expose a FastAPI dependency `get_db()` that yields a session per-request.
- Own the declarative `Base` shared by every ORM model.

Key Characteristics:
- Synchronous SQLAlchemy engine.
- No migrations — `init_db()` creates missing tables at startup.
- Session is opened at the start of a request and closed after the response.

This module does NOT:
- Define ORM models (see app/models/*).
- Perform any queries or business logic.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.core.config import settings

Base = declarative_base()

# -----------------------------------------------------------------------------
# SQLAlchemy Engine
# -----------------------------------------------------------------------------

db_url = settings.DATABASE_URL

# Use psycopg (v3) driver for Postgres URLs that don't name one
if db_url.startswith("postgresql://") and "+" not in db_url.split("://")[0]:
    db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)

connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}

engine = create_engine(
    db_url,
    connect_args=connect_args,
    pool_pre_ping=True  # Ensures connections are valid before use
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db(bind=None) -> None:
    """
    Create all tables known to `Base` if they don't exist yet.
    """
    # Import models so they register on Base.metadata
    from app.models import access_token, flavor, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------

def get_db() -> Session:
    """
    FastAPI dependency: yields a database session for the duration of the request.

    Usage in API endpoint:
        def endpoint(db: Session = Depends(get_db)):
            db.query(...)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
