"""
main.py — FastAPI Application Entrypoint

Purpose:
- Initialize application services (logging, config, DB tables).
- Register API routers.
- Turn framework-level errors (bad JSON body, 401, unknown route) into the
  same {status, message, errors?} envelope the controllers return.
- Provide `app` object used by ASGI server (uvicorn).

This file should stay clean — no business logic here.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.database import init_db
from app.core.logging import configure_logging, get_logger
from app.core.responses import ResponseFormatter, respond
from app.api.v1 import auth, flavors, users

# -----------------------------------------------------------------------------
# App Initialization
# -----------------------------------------------------------------------------

configure_logging(settings.LOG_LEVEL)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Pizzaria Backend",
    description="Authentication, user accounts and flavor catalog for the pizzeria",
    version="0.1.0",
    lifespan=lifespan,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------------------------------------------------------
# Error Envelopes
# -----------------------------------------------------------------------------

_errors = ResponseFormatter("data")


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return respond(_errors.error("Erro de validação", messages, 422))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return respond(
        _errors.error(str(exc.detail), status=exc.status_code),
        headers=getattr(exc, "headers", None),
    )

# -----------------------------------------------------------------------------
# Router Registration
# -----------------------------------------------------------------------------

# Mount all v1 API routers under /api/v1 prefix
app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(flavors.router, prefix="/api/v1")

# -----------------------------------------------------------------------------
# Health Check
# -----------------------------------------------------------------------------

@app.get("/")
def root():
    return {"status": "ok", "message": "Pizzaria backend running"}
