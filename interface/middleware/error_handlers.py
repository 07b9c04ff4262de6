from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    PermissionDeniedError,
    TokenError,
    ValidationError,
)
from interface.schemas import error_response
from utils.logging_config import setup_logger

logger = setup_logger("interface.errors", "errors.log")

# Checked in order, so subclasses come before their bases
DOMAIN_STATUS_CODES = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (TokenError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
)


def validation_message(errors) -> str:
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return f"Invalid input data: {'. '.join(messages)}"


async def domain_error_handler(request: Request, exc: Exception):
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
            return error_response(str(exc), status_code, headers)
    return await unhandled_error_handler(request, exc)


async def external_service_error_handler(request: Request, exc: ExternalServiceError):
    logger.warning(f"Upstream failure on {request.method} {request.url.path}: {exc}")
    status_code = (
        status.HTTP_503_SERVICE_UNAVAILABLE if exc.unavailable else status.HTTP_502_BAD_GATEWAY
    )
    return error_response(str(exc), status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        return error_response(f"Route {request.url.path} not found", exc.status_code)
    return error_response(str(exc.detail), exc.status_code, getattr(exc, "headers", None))


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(validation_message(exc.errors()), status.HTTP_400_BAD_REQUEST)


async def model_validation_error_handler(request: Request, exc: PydanticValidationError):
    return error_response(validation_message(exc.errors()), status.HTTP_400_BAD_REQUEST)


async def duplicate_key_error_handler(request: Request, exc: DuplicateKeyError):
    key_value = (exc.details or {}).get("keyValue") or {}
    if key_value:
        field, value = next(iter(key_value.items()))
        return error_response(f"{field} '{value}' already exists", status.HTTP_409_CONFLICT)
    return error_response("Resource already exists", status.HTTP_409_CONFLICT)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response("Something went wrong!", status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Render every failure as {"success": false, "data": null, "error": message}.
    """
    for exc_type, _ in DOMAIN_STATUS_CODES:
        app.add_exception_handler(exc_type, domain_error_handler)
    app.add_exception_handler(ExternalServiceError, external_service_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(PydanticValidationError, model_validation_error_handler)
    app.add_exception_handler(DuplicateKeyError, duplicate_key_error_handler)
    app.add_exception_handler(PyMongoError, unhandled_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
