import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from libs.result import Error
from .error import ClientError, ServerError, error_body
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.base_error))


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.details or ''}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error, include_details=request.app.state.debug),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = None
    errors = exc.errors()
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        details = f"{location}: {errors[0].get('msg')}"
    logger.warning(f"Validation error on {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(Error("VALIDATION_ERROR", "Validation error", details)),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    details = traceback.format_exc() if request.app.state.debug else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(Error("INTERNAL_ERROR", "Internal server error", details)),
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from src.adapter.services.session_sweeper import SessionSweeper
        from src.depends import (
            AsyncSessionLocal,
            engine,
            keyed_lock,
            profile_allocator,
            system_clock,
        )

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        sweeper = SessionSweeper(
            AsyncSessionLocal,
            profile_allocator,
            system_clock,
            keyed_lock,
            ApplicationConfig.SESSION_SWEEP_INTERVAL_SECONDS,
        )
        await sweeper.restore_slots()
        if ApplicationConfig.SESSION_SWEEP_INTERVAL_SECONDS > 0:
            sweeper.start()
        try:
            yield
        finally:
            await sweeper.stop()

    app = FastAPI(title="SubShare Access API", version="0.1.0", lifespan=lifespan)
    app.state.debug = ApplicationConfig.DEBUG

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import admin, attestation, delegation, health_check, passes, sessions

    prefix = ApplicationConfig.API_PREFIX

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(delegation.router, prefix=prefix, tags=["Delegation"])
    app.include_router(sessions.router, prefix=prefix, tags=["Sessions"])
    app.include_router(attestation.router, prefix=prefix, tags=["Attestation"])
    app.include_router(passes.router, prefix=prefix, tags=["Passes"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
