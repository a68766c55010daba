from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.errors import (
    ERROR_INTERNAL,
    ApiError,
    InvalidArgument,
    api_error_from_validation_errors,
    build_api_error,
    build_validation_errors,
)
from backend.errors.api_error import Clock
from backend.internal_core.config import ContractsConfig, load_config

logger = logging.getLogger(__name__)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def api_error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status, content=error.to_wire())


def _field_key(loc: Any) -> str:
    parts = [str(part) for part in (loc or ())]
    if len(parts) > 1 and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    return ".".join(parts) or "request"


def _request_validation_errors(exc: RequestValidationError):
    grouped: dict[str, list[str]] = {}
    for item in exc.errors():
        grouped.setdefault(_field_key(item.get("loc")), []).append(str(item.get("msg", "invalid value")))
    return build_validation_errors((field, "; ".join(msgs)) for field, msgs in grouped.items())


def install_exception_handlers(
    app: FastAPI,
    config: Optional[ContractsConfig] = None,
    clock: Optional[Clock] = None,
) -> None:
    """Register handlers so every failure on ``app`` is answered with an ApiError."""
    cfg = config or load_config()

    async def _invalid_argument(request: Request, exc: InvalidArgument) -> JSONResponse:
        logger.warning("invalid_argument path=%s detail=%s", request.url.path, exc)
        return api_error_response(build_api_error(400, None, str(exc) or "Invalid argument", clock=clock))

    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = _request_validation_errors(exc)
        logger.warning("request_validation_failed path=%s fields=%s", request.url.path, errors.fields())
        return api_error_response(api_error_from_validation_errors(errors, clock=clock))

    async def _http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail = exc.detail
        if isinstance(detail, str) and detail.strip():
            message, details = detail, None
        else:
            message, details = "Request failed", detail
        return api_error_response(build_api_error(exc.status_code, None, message, details, clock=clock))

    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error path=%s", request.url.path)
        details = str(exc) if cfg.ESG_EXPOSE_INTERNAL_ERRORS else None
        return api_error_response(
            build_api_error(500, ERROR_INTERNAL, "Internal server error", details, clock=clock)
        )

    app.add_exception_handler(InvalidArgument, _invalid_argument)
    app.add_exception_handler(RequestValidationError, _request_validation)
    app.add_exception_handler(StarletteHTTPException, _http_exception)
    app.add_exception_handler(Exception, _unhandled)
