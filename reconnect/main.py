"""ASGI entrypoint: wires settings, logging, error envelopes and the v1 API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from reconnect.api.v1 import router as api_v1_router
from reconnect.core.config import Settings, get_settings
from reconnect.core.db import engine
from reconnect.core.errors import EngineError, InvalidInteractionError, ResourceNotFoundError
from reconnect.core.logging import configure_logging
from reconnect.models import Base

logger = logging.getLogger(__name__)

STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHENTICATED",
    404: "RESOURCE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
}

# Engine errors missing here are programmer errors and surface as 500.
ENGINE_ERRORS: dict[type[EngineError], tuple[int, str]] = {
    InvalidInteractionError: (422, "VALIDATION_ERROR"),
    ResourceNotFoundError: (404, "RESOURCE_NOT_FOUND"),
}


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    """Build the relationship tracking API."""
    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(title="Reconnect", version=settings.version, lifespan=_lifespan)

    if settings.cors_origins:
        _add_cors(application, settings)
    _register_error_handlers(application)

    application.include_router(api_v1_router, prefix="/api/v1")
    return application


def _add_cors(application: FastAPI, settings: Settings) -> None:
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _register_error_handlers(application: FastAPI) -> None:
    application.add_exception_handler(HTTPException, _handle_http_error)
    application.add_exception_handler(RequestValidationError, _handle_request_validation)
    for error_type in ENGINE_ERRORS:
        application.add_exception_handler(error_type, _handle_engine_error)
    application.add_exception_handler(Exception, _handle_unexpected_error)


async def _handle_http_error(_: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, HTTPException)
    fallback = STATUS_CODES.get(exc.status_code, f"HTTP_{exc.status_code}")
    detail = exc.detail
    if isinstance(detail, dict):
        return error_envelope(
            exc.status_code, detail.get("code", fallback), str(detail.get("message") or detail)
        )
    return error_envelope(exc.status_code, fallback, str(detail))


async def _handle_request_validation(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    errors = exc.errors()
    logger.info("Rejected request payload", extra={"path": request.url.path, "errors": errors})
    message = "Validation error"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_envelope(422, "VALIDATION_ERROR", message)


async def _handle_engine_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, EngineError)
    status_code, code = next(
        ENGINE_ERRORS[cls] for cls in type(exc).__mro__ if cls in ENGINE_ERRORS
    )
    extra = {"path": request.url.path, "error_type": type(exc).__name__}
    if isinstance(exc, InvalidInteractionError):
        extra["field"] = exc.field
    logger.info(str(exc), extra=extra)
    return error_envelope(status_code, code, str(exc))


async def _handle_unexpected_error(request: Request, _: Exception) -> JSONResponse:
    logger.exception("Unhandled application error", extra={"path": request.url.path})
    return error_envelope(500, "INTERNAL_SERVER_ERROR", "Internal server error")


def error_envelope(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


app = create_app()
