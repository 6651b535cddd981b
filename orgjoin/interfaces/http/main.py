from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orgjoin.config.settings import Settings, get_settings
from orgjoin.infrastructure.auth.jwt_service import JWTService
from orgjoin.infrastructure.db.session import create_engine, create_session_factory
from orgjoin.infrastructure.email.models import EmailService
from orgjoin.infrastructure.email.providers.logging_provider import LoggingEmailService
from orgjoin.infrastructure.email.renderer.engine import EmailTemplateRenderer
from orgjoin.interfaces.http.routers import membership_requests
from orgjoin.interfaces.middleware.auth_middleware import AuthMiddleware
from orgjoin.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    jwt_service: JWTService | None = None,
    email_service: EmailService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Organization Membership Requests",
        version="0.1.0",
        description="Join requests, admin review and resolution for organizations",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.jwt_service = jwt_service or JWTService.from_settings(settings)
    app.state.email_service = email_service or LoggingEmailService()
    app.state.email_renderer = EmailTemplateRenderer.create_default()
    register_error_handlers(app)

    api = APIRouter(prefix="/api/v1")
    api.include_router(membership_requests.router)

    @api.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(api)

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
