"""Exception handlers mapping the HashFort error taxonomy to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hashfort.config import HashFortConfig
from hashfort.core.errors import HashFortError, RateLimitError

logger = logging.getLogger("hashfort.http")


def install_exception_handlers(app: FastAPI, config: HashFortConfig) -> None:
    """Render every failure as a flat {"error": ...} body.

    Unclassified exceptions become 500 with a generic message unless
    config.expose_error_details is set.
    """

    @app.exception_handler(HashFortError)
    async def hashfort_error_handler(request: Request, exc: HashFortError):
        headers = None
        if isinstance(exc, RateLimitError):
            headers = {"Retry-After": str(int(exc.extra["retry_after"]) + 1)}
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if config.expose_error_details else "An unexpected error occurred"
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": message},
        )
