from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from permitter.core.config import PermitterConfig, set_default_config
from permitter.core.errors import (
    AccessDeniedError,
    MissingResourceError,
    NotFoundError,
    PermitterConfigurationError,
)
from permitter.db.init_db import init_db
from permitter.logging_config import configure_app_logging
from permitter.permitters import build_type_registry
from permitter.routers import employees, health, performance_reviews
from permitter.security.abilities import load_abilities_config
from permitter.security.ability import AbilityFactory
from permitter.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_permitter_config(settings: Settings) -> PermitterConfig:
    if settings.authorizer:
        authorizer = settings.authorizer
    else:
        path = settings.resolved_abilities_config_path()
        authorizer = AbilityFactory(load_abilities_config(path))
        logger.info("Loaded abilities config: %s", path)

    return PermitterConfig(
        policy=settings.policy,
        authorizer=authorizer,
        registry=build_type_registry(),
    )


def _error_handler(status_code: int):
    async def handler(request: Request, exc: Exception) -> JSONResponse:
        logger.info("%s path=%s method=%s: %s", type(exc).__name__, request.url.path, request.method, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    return handler


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings = get_settings()
        configure_app_logging(settings.log_level)
        logger.info("App startup beginning")

        config = build_permitter_config(settings)
        app.state.permitter_config = config
        set_default_config(config)
        logger.info("Permitter policy: %s", config.policy.value)

        init_db()
        logger.info("Database initialized (tables ensured + seed if needed)")

        yield

    app = FastAPI(lifespan=lifespan)

    app.add_exception_handler(MissingResourceError, _error_handler(status.HTTP_400_BAD_REQUEST))
    app.add_exception_handler(AccessDeniedError, _error_handler(status.HTTP_403_FORBIDDEN))
    app.add_exception_handler(NotFoundError, _error_handler(status.HTTP_404_NOT_FOUND))
    app.add_exception_handler(PermitterConfigurationError, _error_handler(status.HTTP_500_INTERNAL_SERVER_ERROR))

    app.include_router(health.router)
    app.include_router(employees.router)
    app.include_router(performance_reviews.router)

    return app


app = create_app()
