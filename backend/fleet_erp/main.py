from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleet_erp.api.v1.router import api_router
from fleet_erp.core.config import Settings, get_settings
from fleet_erp.core.exceptions import AppError
from fleet_erp.core.logging import configure_logging
from fleet_erp.core.middleware import RequestIDMiddleware
from fleet_erp.core.responses import error_response, success_response
from fleet_erp.db.session import Database

logger = logging.getLogger(__name__)


def _sanitize_json(value):
    if isinstance(value, dict):
        return {key: _sanitize_json(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_sanitize_json(item) for item in value]
    if isinstance(value, tuple):
        return tuple(_sanitize_json(item) for item in value)
    if isinstance(value, Exception):
        return str(value)
    return value


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    database: Database = app.state.database
    configure_logging(settings.log_level)
    database.open()
    logger.info("Application startup")
    yield
    await database.close()
    logger.info("Application shutdown")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, exc.details, request=request),
        )

    @app.exception_handler(HTTPException)
    async def http_error_handler(request: Request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response("http_error", str(exc.detail), request=request),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(
                "validation_error",
                "Request validation failed",
                {"errors": _sanitize_json(exc.errors())},
                request=request,
            ),
        )

    @app.exception_handler(Exception)
    async def unknown_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=error_response("internal_error", "Internal server error", request=request),
        )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.project_name,
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Permissions", "description": "Permission catalog and current user access"},
            {"name": "Vehicles", "description": "Fleet vehicles CRUD and filtering"},
            {"name": "Audit", "description": "Audit trail of data changes"},
        ],
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url, echo=settings.database_echo)

    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/healthz", tags=["Health"])
    async def healthz(request: Request):
        return success_response(data={"status": "ok"}, request=request)

    _register_exception_handlers(app)
    return app


app = create_app()
