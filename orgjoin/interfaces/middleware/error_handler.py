from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from orgjoin.application.errors import AppError, InfrastructureError, ValidationError
from orgjoin.interfaces.http.schemas.membership_requests import ErrorResponse

logger = logging.getLogger(__name__)


def error_response(exc: AppError) -> JSONResponse:
    body = ErrorResponse(
        code=exc.code,
        message=exc.message,
        details=dict(exc.details) if exc.details is not None else None,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    # `ctx` may hold exception instances, keep only the serialisable fields
    return [
        {
            "loc": [str(part) for part in err.get("loc", ())],
            "msg": err.get("msg"),
            "type": err.get("type"),
        }
        for err in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:  # noqa: WPS430
        logger.info(
            "Application error handled: %s - %s (status: %d)",
            exc.code,
            exc.message,
            exc.status_code,
            extra={"path": request.url.path, "method": request.method},
        )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(  # noqa: WPS430
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(
            "Request validation failed", details={"errors": _validation_errors(exc)}
        )
        logger.info("Request validation failed on %s %s", request.method, request.url.path)
        return error_response(error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: WPS430
        payload = {"status": "error", "code": "http_error", "message": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=payload)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        logger.error(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
        return error_response(InfrastructureError("Unexpected server error"))
