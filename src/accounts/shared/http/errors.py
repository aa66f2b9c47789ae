from enum import Enum

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accounts.shared.logger import Logger

__all__ = ["ApiError", "ErrorType", "error_responder", "install_error_handlers"]

logger = Logger(__name__).get_logger()


class ErrorType(str, Enum):
    """Machine readable error kinds."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    NOT_FOUND = "NOT_FOUND"
    EMAIL_ALREADY_TAKEN = "EMAIL_ALREADY_TAKEN"
    UNPROCESSABLE_ENTITY = "UNPROCESSABLE_ENTITY"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
    SERVER_ERROR = "SERVER_ERROR"
    STORE_TIMEOUT = "STORE_TIMEOUT"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.FORBIDDEN: 403,
    ErrorType.INVALID_CREDENTIALS: 403,
    ErrorType.INVALID_PASSWORD: 403,
    ErrorType.NOT_FOUND: 404,
    ErrorType.EMAIL_ALREADY_TAKEN: 409,
    ErrorType.UNPROCESSABLE_ENTITY: 422,
    ErrorType.TOO_MANY_REQUESTS: 429,
    ErrorType.SERVER_ERROR: 500,
    ErrorType.STORE_TIMEOUT: 504,
}

# Kinds for framework-raised HTTP errors (unknown route, bad method...)
_STATUS_KINDS = {
    400: ErrorType.VALIDATION_ERROR,
    403: ErrorType.FORBIDDEN,
    404: ErrorType.NOT_FOUND,
    422: ErrorType.UNPROCESSABLE_ENTITY,
    429: ErrorType.TOO_MANY_REQUESTS,
}


class ApiError(HTTPException):
    def __init__(self, error_type: ErrorType, message: str):
        super().__init__(status_code=error_type.status_code, detail=message)
        self.error_type = error_type


def error_responder(error_type: ErrorType, message: str) -> ApiError:
    return ApiError(error_type, message)


def _render(error_type: ErrorType, message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error_type.value, "message": message},
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.debug(
        "%s %s -> %s: %s",
        request.method,
        request.url.path,
        exc.error_type.value,
        exc.detail,
    )
    return _render(exc.error_type, exc.detail, exc.status_code)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    error_type = _STATUS_KINDS.get(exc.status_code, ErrorType.SERVER_ERROR)
    return _render(error_type, exc.detail, exc.status_code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, problems)
    return _render(
        ErrorType.VALIDATION_ERROR,
        "; ".join(problems),
        ErrorType.VALIDATION_ERROR.status_code,
    )


def install_error_handlers(app: FastAPI):
    """Route every error raised while handling a request through one renderer."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
