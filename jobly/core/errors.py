"""
Typed application errors and their translation to HTTP responses.

Data-access functions and dependencies raise these; the handlers registered
by register_exception_handlers() turn them into JSON bodies of the form
{"detail": <message>, "status": <code>}.
"""

import logging
from typing import List, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Union[str, List[str]] = "Internal server error"):
        super().__init__(message)
        self.message = message


class BadRequestError(JoblyError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


def _error_response(status_code: int, message, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": message, "status": status_code},
        headers=headers,
    )


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")

    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return _error_response(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed path/query/body values are client errors (400), not 422."""
    errors = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    logger.warning(f"{request.method} {request.url.path} rejected (400): {errors}")
    return _error_response(status.HTTP_400_BAD_REQUEST, errors)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
