# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Translation of directory errors into HTTP responses.

Endpoints catch ``DirectoryError`` and re-raise the result of
``to_http_exception``. Request-body validation failures and unexpected
exceptions are handled application-wide by the handlers registered in
``register_exception_handlers``.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domains.errors import ConflictError, DirectoryError, NotFoundError

logger = logging.getLogger(__name__)


def to_http_exception(error: DirectoryError) -> HTTPException:
    """Map a directory error to an HTTP exception.

    Not-found errors become 404. Validation, conflict and invalid
    reference errors become 400. A conflict carrying a payload (such as
    the courses blocking a teacher removal) returns it next to the message.

    Args:
        error: Domain error raised by a service.

    Returns:
        HTTPException ready to be raised.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)

    if isinstance(error, ConflictError) and error.payload:
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"message": error.message, **error.payload},
        )

    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Render request validation failures as a 400 with joined messages."""
    detail = ", ".join(_format_validation_error(error) for error in exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": detail or "Invalid request"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unexpected failures as a generic 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register application-wide exception handlers."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
