# File: /pagedb/core/error_handlers.py | Version: 1.0 | Title: Engine error mapping + optional standardized envelope
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pagedb.engine.errors import PageDBError

log = logging.getLogger(__name__)

_CODE_MAP = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_SERVER_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def _err(code: int, message: str, kind: str | None = None):
    body = {"code": _CODE_MAP.get(code, "ERROR"), "message": message}
    if kind:
        body["type"] = kind
    return {"error": body}


def register_engine_handlers(app: FastAPI, *, std_errors: bool = False) -> None:
    @app.exception_handler(PageDBError)
    async def _engine_exc(_req: Request, exc: PageDBError):
        if exc.status_code >= 500:
            log.warning("%s: %s", exc.__class__.__name__, exc.message)
        if std_errors:
            content = _err(exc.status_code, exc.message, exc.__class__.__name__)
        else:
            content = {"detail": exc.message, "type": exc.__class__.__name__}
        return JSONResponse(status_code=exc.status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exc(_req: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code, content=_err(exc.status_code, str(exc.detail))
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_exc(_req: Request, exc: RequestValidationError):
        return JSONResponse(status_code=422, content=_err(422, "Validation error"))

    @app.exception_handler(Exception)
    async def _unhandled(_req: Request, exc: Exception):
        log.exception("Unhandled error")
        return JSONResponse(status_code=500, content=_err(500, "Internal server error"))
