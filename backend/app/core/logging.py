"""
logging.py — Application-Wide Logging Configuration

Purpose:
- Configure a standardized logging format for the entire backend.
- Keep request handling, authentication and persistence logs consistent.

Rules:
- Simple console logging, level taken from settings.
- Uniform formatting: timestamp | level | module | message
- Passwords and bearer token values are never logged.
"""

import logging

# -----------------------------------------------------------------------------
# Log Format
# -----------------------------------------------------------------------------

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)

# Third-party loggers that are noisy at INFO/DEBUG (bcrypt backend probing,
# per-statement SQL echo)
QUIET_LOGGERS = ("passlib", "sqlalchemy.engine")

# -----------------------------------------------------------------------------
# Root Logger Initialization
# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging settings.

    Parameters:
        level (str): "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"

    Behavior:
    - Sets logging format globally.
    - Ensures logs stream to stdout (FastAPI / Uvicorn picks this up).
    - Should be called ONCE, typically in `main.py` at app startup.
    """

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging initialized with level %s", level)

# -----------------------------------------------------------------------------
# Logger Access Helper
# -----------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
    """
    Return a logger instance to be used in any module.

    In any module:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)
