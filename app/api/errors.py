"""Centralized error responses: every error body is {"error": ..., "details"?: [...]}."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.schemas.auth import ErrorResponse, ValidationErrorDetail

logger = logging.getLogger(__name__)


def format_validation_errors(errors: Sequence[Any]) -> list[ValidationErrorDetail]:
    """Flatten pydantic errors into one entry per failing field (body prefix dropped)."""
    details: list[ValidationErrorDetail] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        details.append(
            ValidationErrorDetail(
                field=".".join(loc) or "body",
                message=err.get("msg", "Invalid value"),
            )
        )
    return details


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = format_validation_errors(exc.errors())
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "fields": [d.field for d in details]},
    )
    body = ErrorResponse(error="Validation failed", details=details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=body.model_dump(),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    body = ErrorResponse(error=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log with traceback, never echo the internal message."""
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    body = ErrorResponse(error="Internal server error")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
