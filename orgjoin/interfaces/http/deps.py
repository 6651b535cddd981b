from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from orgjoin.application.errors import AuthError
from orgjoin.config.settings import Settings, get_settings
from orgjoin.infrastructure.auth.context import AuthContext
from orgjoin.infrastructure.auth.jwt_service import JWTService
from orgjoin.infrastructure.db.session import SQLAlchemyUnitOfWork
from orgjoin.infrastructure.email.models import EmailService
from orgjoin.infrastructure.email.renderer.engine import EmailTemplateRenderer


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_org_admin_context(
    organization_id: str, context: AuthContext = Depends(get_auth_context)
) -> AuthContext:
    """Auth context of a caller holding the ADMIN role in `organization_id`."""
    context.require_admin(organization_id)
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_jwt_service(request: Request) -> JWTService:
    service = getattr(request.app.state, "jwt_service", None)
    if service is None:
        raise RuntimeError("JWT service not configured")
    return service


def get_email_service(request: Request) -> EmailService:
    service = getattr(request.app.state, "email_service", None)
    if service is None:
        raise RuntimeError("Email service not configured")
    return service


def get_email_renderer(request: Request) -> EmailTemplateRenderer:
    renderer = getattr(request.app.state, "email_renderer", None)
    if renderer is None:
        raise RuntimeError("Email renderer not configured")
    return renderer
