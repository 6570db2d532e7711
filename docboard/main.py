"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from docboard.api import auth, documents, users
from docboard.config import Settings, get_settings
from docboard.database import Database
from docboard.errors import DocboardError, Unauthenticated, ValidationError
from docboard.security import PasswordHasher, TokenCodec
from docboard.services.auth import AuthService

logger = logging.getLogger(__name__)

REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render application errors with their HTTP status and no internals."""

    @app.exception_handler(DocboardError)
    async def handle_docboard_error(request: Request, exc: DocboardError):
        content: dict = {"detail": exc.message}
        if isinstance(exc, ValidationError) and exc.errors:
            content["errors"] = exc.errors
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(
                    str(part) for part in error["loc"] if part not in REQUEST_LOCATIONS
                ),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"detail": "Invalid input", "errors": errors}),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application around explicitly constructed collaborators."""
    settings = settings or get_settings()
    configure_logging(settings)
    database = database or Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        if settings.admin_password:
            with database.session() as db:
                AuthService(
                    db, app.state.password_hasher, app.state.token_codec
                ).ensure_default_admin(
                    settings.admin_name, settings.admin_email, settings.admin_password
                )
        yield
        database.dispose()

    app = FastAPI(
        title="Docboard API",
        description="Internal documentation and ticket tracker",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = TokenCodec.from_settings(settings)

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[
                "http://localhost:3000",
                "http://127.0.0.1:3000",
            ],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    # Register routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(documents.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app
