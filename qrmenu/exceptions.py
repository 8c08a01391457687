"""Domain errors and their HTTP rendering"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

logger = structlog.get_logger()


class QRMenuError(Exception):
    """Base class for errors that map onto an HTTP status"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthenticatedError(QRMenuError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(QRMenuError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(QRMenuError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(QRMenuError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class ConflictError(QRMenuError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def handle_domain_error(request: Request, exc: QRMenuError) -> JSONResponse:
    if exc.status_code == status.HTTP_403_FORBIDDEN:
        logger.info("Access denied", path=request.url.path, reason=exc.message)
    return error_response(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = ValidationError.default_message
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error", path=request.url.path, error=str(exc.orig))
    return error_response(status.HTTP_409_CONFLICT, ConflictError.default_message)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as {"error": message}"""
    app.add_exception_handler(QRMenuError, handle_domain_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_unexpected)
