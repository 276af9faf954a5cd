"""Response envelope and exception handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from whattoeat.domain.errors import BackendError, WhatToEatError

_logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def success(data: object) -> dict[str, object]:
    """Wrap a serialized payload in the success envelope."""
    return {"success": True, "data": data}


def failure(status_code: int, message: str) -> JSONResponse:
    """Build an error envelope response."""
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "error": ...}``."""

    @app.exception_handler(WhatToEatError)
    async def domain_error_handler(
        request: Request, exc: WhatToEatError
    ) -> JSONResponse:
        if isinstance(exc, BackendError):
            _logger.error(
                "Backend failure on %s %s: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc.__cause__ or exc,
            )
            return failure(exc.status_code, INTERNAL_ERROR_MESSAGE)
        return failure(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return failure(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return failure(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        _logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path
        )
        return failure(500, INTERNAL_ERROR_MESSAGE)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    message = str(first.get("msg", "Invalid value"))
    if location:
        return f"{'.'.join(location)}: {message}"
    return message
