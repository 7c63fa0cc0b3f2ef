"""Structured error responses."""
from datetime import datetime, timezone
from http import HTTPStatus
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
from ..api.schemas import ErrorInfo
from .correlation import get_correlation_id

log = structlog.get_logger()


def error_response(request: Request, exc: Exception, status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR) -> JSONResponse:
    """Build the ErrorInfo envelope for an exception raised while serving ``request``."""
    error_info = ErrorInfo(
        url=request.url.path,
        url_query_string=request.url.query or None,
        http_method=request.method,
        http_status=status.name,
        http_status_code=status.value,
        error_date_time=datetime.now(timezone.utc),
        error_message=str(exc),
    )
    return JSONResponse(
        status_code=status.value,
        content=error_info.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns any unhandled exception into a 500 ErrorInfo response."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            log.error(
                "unhandled.exception",
                error=str(exc),
                error_type=exc.__class__.__name__,
                path=request.url.path,
                correlation_id=get_correlation_id(),
                exc_info=True
            )
            return error_response(request, exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report invalid request parameters with the standard envelope."""
    log.warning(
        "request.invalid",
        errors=exc.errors(),
        path=request.url.path,
        correlation_id=get_correlation_id(),
    )
    return error_response(request, exc)
