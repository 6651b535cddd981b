from __future__ import annotations

import logging
from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from orgjoin.application.errors import AppError, AuthError
from orgjoin.config.settings import Settings
from orgjoin.infrastructure.auth.context import AuthContext, fetch_memberships, fetch_user
from orgjoin.interfaces.middleware.error_handler import error_response

logger = logging.getLogger(__name__)

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            authorization = request.headers.get("Authorization")
            if not authorization:
                raise AuthError("Missing Authorization header")
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            user_id = jwt_service.decode_subject(token)
            session_factory = getattr(request.app.state, "session_factory", None)
            if session_factory is None:
                raise RuntimeError("Session factory not configured")
            async with session_factory() as session:
                user = await fetch_user(session, user_id)
                if not user or not user.is_active:
                    raise AuthError("Inactive or missing user")
                memberships = await fetch_memberships(session, user_id)
            request.state.auth_context = AuthContext(user_id=user_id, memberships=memberships)
            return await call_next(request)
        except AppError as exc:
            # Raised before routing, so the app exception handlers never see it
            logger.info("Request rejected before routing: %s - %s", exc.code, exc.message)
            return error_response(exc)
