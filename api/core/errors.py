"""
Exception handlers that render every failure as `{"error": message}`.

- HTTPException (not found, auth, conflicts) keeps its status code.
- Request validation errors become 422 with the pydantic details.
- Storage and runtime failures (asyncpg errors, lost connections) are a 500
  carrying the raw message.

Handlers keyed on concrete exception classes run inside the middleware stack,
so their responses still pass through CORS. The bare `Exception` handler is
only a last resort: Starlette serves it from the outermost middleware.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

STORAGE_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    RuntimeError,
)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def storage_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Starlette re-raises after this response, so the server logs the traceback.
    return JSONResponse(status_code=500, content={"error": str(exc)})


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    for exc_class in STORAGE_ERRORS:
        app.add_exception_handler(exc_class, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
