# app/core/errors.py
"""
Application error taxonomy.

Every error is an HTTPException so services can raise them directly and
FastAPI turns them into responses. `register_exception_handlers` renders
them as `{"message": ...}` instead of FastAPI's default `{"detail": ...}`.
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
        )

    @property
    def message(self) -> str:
        return str(self.detail)


class NotAuthenticated(AppError):
    """No session (or an invalid one) where a user is required."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "User not authenticated"


class BadInput(AppError):
    """Missing or malformed request payload."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class UploadError(AppError):
    """The object store rejected an upload."""

    default_message = "Upload failed"


class RemoteError(AppError):
    """Any other failure reported by Auth, Storage or the model provider."""

    default_message = "Remote service error"


def provider_message(exc: Exception) -> str:
    """
    Extract a human-readable message from a provider exception.

    Supabase errors carry `.message` (auth, newer storage) or a dict payload
    as first arg (older storage); anything else falls back to str().
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    if exc.args and isinstance(exc.args[0], dict):
        payload = exc.args[0]
        return str(payload.get("message") or payload.get("error") or payload)
    return str(exc) or exc.__class__.__name__


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    message = errors[0]["msg"] if errors else BadInput.default_message
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
