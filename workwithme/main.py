from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from workwithme.config import AppConfig, load_config
from workwithme.db.base import get_engine
from workwithme.db.migrations_runner import apply_migrations
from workwithme.http.errors import (
    handle_catalog_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from workwithme.http.request_id import RequestIdMiddleware
from workwithme.logging_setup import configure_logging
from workwithme.logic.errors import CatalogError
from workwithme.logic.seeder import seed_catalog
from workwithme.middleware.cors import apply_cors
from workwithme.routes import api_router

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "How to Work With Me API - Server is running"


def _prepare_store(config: AppConfig) -> None:
    engine = get_engine(config.database.url)
    if config.auto_apply_migrations:
        applied = apply_migrations(engine)
        if applied:
            logger.info("store_migrated files=%s", applied)
    if config.seed_on_startup:
        seed_catalog()


def create_app(config: AppConfig | None = None) -> FastAPI:
    """Build the API application.

    Configures logging, prepares the store (migrations and optional seed),
    registers the error handlers that render `{"error": ...}` bodies, and
    mounts the public and admin routers.
    """
    configure_logging()
    cfg = config or load_config()
    if cfg.admin.uses_default_password:
        logger.warning("ADMIN_PASSWORD not set; using the insecure default admin password")

    _prepare_store(cfg)

    app = FastAPI(title="How to Work With Me API")
    app.state.config = cfg

    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app, origins=cfg.http.cors_origins)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root() -> str:
        return ROOT_MESSAGE

    @app.get("/health", response_class=PlainTextResponse)
    def health() -> str:
        return "OK"

    logger.info("app_created cors_origins=%s", cfg.http.cors_origins)
    return app


# No module-level app: `workwithme serve` runs uvicorn with factory=True.
