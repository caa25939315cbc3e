"""
Error taxonomy for the Job Portal API.

Every failure a caller can observe belongs to one kind. Services raise these;
a single exception handler turns them into JSON responses so no route picks
its own status codes.
"""
import enum
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    DATABASE = "database"
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    kind: ErrorKind = ErrorKind.DATABASE
    status_code: int = 500
    code: str = "server_error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": self.code,
            "message": self.message,
            "status": self.status_code,
        }


class AuthenticationError(AppError):
    kind = ErrorKind.AUTHENTICATION
    status_code = 401
    code = "authentication_error"
    default_message = "Authentication required"


class AuthorizationError(AppError):
    kind = ErrorKind.AUTHORIZATION
    status_code = 403
    code = "authorization_error"
    default_message = "You do not have permission to perform this action"


class ValidationError(AppError):
    kind = ErrorKind.VALIDATION
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input data"


class NotFoundError(AppError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404
    code = "not_found_error"
    default_message = "Resource not found"


class StorageError(AppError):
    """The entity store failed or stayed unreachable after the allowed retry."""

    kind = ErrorKind.DATABASE
    status_code = 503
    code = "database_error"
    default_message = "Database operation failed"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"API error ({exc.kind.value}) on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"API error ({exc.kind.value}) on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies are reported like any other validation failure
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", ValidationError.default_message)
    body = ValidationError(message).to_dict()
    body["details"] = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()
    ]
    return JSONResponse(status_code=ValidationError.status_code, content=body)


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Unhandled database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=StorageError.status_code, content=StorageError().to_dict())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
