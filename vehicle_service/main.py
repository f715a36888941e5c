"""
Point d'entree FastAPI / FastAPI entry point.
Vehicle Service - registre des vehicules clients et de leurs photos.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from vehicle_service.api import api_router
from vehicle_service.api.deps import ROLES_HEADER, USER_HEADER
from vehicle_service.config import settings
from vehicle_service.database import async_session, init_db
from vehicle_service.exceptions import ServiceError
from vehicle_service.rate_limit import limiter
from vehicle_service.services.photo_storage import get_photo_storage
from vehicle_service.utils.seed import seed_demo_vehicles

logger = logging.getLogger("vehicle_service")

# Champs structures recopies dans les logs JSON / Structured extras copied into JSON logs
LOG_EXTRAS = ("vehicle_id", "photo_id", "customer_id", "request_id", "path", "failed_files")


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in LOG_EXTRAS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging() -> None:
    """Texte en dev, JSON en production / Plain text in dev, JSON in production."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    if settings.DEBUG:
        logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
        return
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logging.root.handlers = [handler]
    logging.root.setLevel(level)


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialisation et fermeture / Startup and shutdown."""
    get_photo_storage().ensure_root()
    # Creer les tables au demarrage / Create tables on startup
    await init_db()
    if settings.SEED_DEMO_DATA:
        async with async_session() as session:
            await seed_demo_vehicles(session)
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("%s shutting down", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Registre des vehicules clients / Customer vehicle registry",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", USER_HEADER, ROLES_HEADER, "X-Request-ID"],
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Ajoute les headers de securite / Add security headers."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """X-Request-ID propage ou cree + ligne d'acces / Propagated or new X-Request-ID + access line."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        started = time.perf_counter()
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method, request.url.path, response.status_code,
            (time.perf_counter() - started) * 1000,
            extra={"request_id": request_id, "path": request.url.path},
        )
        return response


app.add_middleware(RequestIDMiddleware)


# --- Erreurs / Error handlers ---

async def service_error_handler(request: Request, exc: ServiceError):
    """Erreur metier -> {"detail": message} avec son code / Domain error -> its status code."""
    if exc.status_code >= 500:
        logger.error("%s: %s", type(exc).__name__, exc.message, exc_info=exc,
                     extra={"path": request.url.path})
        return JSONResponse(status_code=exc.status_code, content={"detail": "Internal server error"})
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s", request.url.path, exc_info=exc, extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Erreurs de validation par champ / Per-field validation messages (400)."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        errors.setdefault(str(loc[-1]), error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": errors})


app.add_exception_handler(ServiceError, service_error_handler)
app.add_exception_handler(SQLAlchemyError, database_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)


# Routes API
app.include_router(api_router)


@app.get("/")
async def root():
    """Health check."""
    return {"app": settings.APP_NAME, "version": settings.APP_VERSION, "status": "running"}
