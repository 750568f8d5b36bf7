# motri/main.py
from __future__ import annotations

# --- Framework / Utils ---
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

# --- Konfiguration / Infrastruktur ---
from motri.core.config import Settings
from motri.core.errors import AppError
from motri.core.security import JWTService, PasswordHasher
from motri.db.database import Database
from motri.utils.email_utils import MailSender, build_mail_sender
from motri.utils.files import ImageStorage, ensure_dir

# --- API-Router (JSON) ---
from motri.api.routes import (
    auth as auth_routes,
    reports as reports_routes,
)

log = logging.getLogger(__name__)


# =============================================================================
# Fehlerbehandlung: alles als {"message": ...}
# =============================================================================
def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form"))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _validation_message(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        log.exception("Unerwarteter Fehler bei %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


# =============================================================================
# App-Factory
# =============================================================================
def create_app(
    settings: Optional[Settings] = None,
    *,
    database: Optional[Database] = None,
    mail_sender: Optional[MailSender] = None,
) -> FastAPI:
    settings = settings or Settings()

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    # Abhaengigkeiten einmal bauen und ueber app.state bereitstellen
    app.state.settings = settings
    app.state.database = database or Database(settings.DB_URL)
    app.state.hasher = PasswordHasher.from_settings(settings)
    app.state.jwt_service = JWTService.from_settings(settings)
    app.state.mail_sender = mail_sender or build_mail_sender(settings)
    app.state.image_storage = ImageStorage(settings.UPLOAD_DIR)

    register_exception_handlers(app)

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    # -------------------------------------------------------------------------
    # Hochgeladene Bilder (nur lesend)
    # -------------------------------------------------------------------------
    ensure_dir(settings.UPLOAD_DIR)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    # -------------------------------------------------------------------------
    # Startup: DB muss erreichbar sein, sonst bricht der Prozess ab
    # -------------------------------------------------------------------------
    @app.on_event("startup")
    def on_startup() -> None:
        db: Database = app.state.database
        try:
            db.ping()
            db.create_all()
        except Exception:
            log.exception("Datenbank nicht erreichbar (%s)", db.engine.url.render_as_string(hide_password=True))
            raise
        log.info("%s gestartet (env=%s)", settings.APP_NAME, settings.APP_ENV)

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.database.dispose()

    # -------------------------------------------------------------------------
    # Router registrieren
    # -------------------------------------------------------------------------
    app.include_router(auth_routes.router, prefix="/api/auth")
    app.include_router(reports_routes.router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "API is running"}

    _install_openapi(app)
    return app


# =============================================================================
# OpenAPI: Bearer-Auth global aktivieren
# =============================================================================
def _install_openapi(app: FastAPI) -> None:
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description="Motri Incident-Reporting API",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {}).setdefault("securitySchemes", {})
        openapi_schema["components"]["securitySchemes"]["BearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }

        # Global Security
        openapi_schema["security"] = [{"BearerAuth": []}]

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi
