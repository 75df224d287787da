"""
Custom exception handlers for consistent API error responses.

Every failure leaves the API as ``{"ok": false, "message": ...}``, optionally
extended with a payload the caller needs (for example the prior usage of an
already redeemed code).
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """
    Failure with a user-facing (Polish) message.

    Subclasses fix the HTTP status and a machine-readable code; ``payload``
    replaces the default body when the client needs more than the message.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Błąd serwera"
    error_code: str = "API_ERROR"

    def __init__(
        self,
        detail: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            status_code=type(self).status_code,
            detail=detail or self.default_message,
            headers=headers,
        )
        self.payload = payload or {}


class ValidationError(APIError):
    """Malformed or missing input (400)"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Nieprawidłowe dane wejściowe."
    error_code = "VALIDATION_ERROR"


class AuthenticationError(APIError):
    """Wrong password or PIN (401)"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Brak dostępu."
    error_code = "AUTH_FAILED"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"
    error_code = "NOT_FOUND"


class ConflictError(APIError):
    """Duplicate account or an already used code (409)"""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Konflikt danych."
    error_code = "CONFLICT"


class InternalError(APIError):
    """Store failure or exhausted generation (500)"""
    error_code = "INTERNAL_ERROR"


def error_body(message: str, **extra: Any) -> Dict[str, Any]:
    body = {"ok": False, "message": message}
    body.update(extra)
    return body


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} at {request.url.path}: {exc.detail}")
    else:
        logger.info(f"{exc.error_code} at {request.url.path}: {exc.detail}")

    if exc.payload:
        content = dict(exc.payload)
        content.setdefault("ok", False)
        content.setdefault("message", exc.detail)
    else:
        content = error_body(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown routes, bad methods) in API format"""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = "Not found"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Convert request body/query validation failures to 400"""
    logger.warning(f"Request validation failed at {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Nieprawidłowe dane wejściowe."),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the raw error, answer with a sanitized message"""
    logger.exception(f"Unhandled error at {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Błąd serwera"),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
