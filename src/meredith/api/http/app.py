"""Meredith HTTP application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.meredith.api.http.app_data import ApplicationDependencies
from src.meredith.api.http.middleware import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from src.meredith.api.http.routers import health, page
from src.meredith.api.http.routers.shop import category, product
from src.meredith.api.utils.app_startup import configure_logging
from src.meredith.core.exceptions import MeredithError
from src.meredith.core.services import DbManageService, DbSessionService, JwtService
from src.meredith.runtime.context import get_config

configure_logging()


async def startup() -> None:
    """Build the process-wide services and attach them to ``app.state``."""
    config = get_config()
    logger.info("Starting Meredith ({})", config.app.environment)

    database_service = DbSessionService()
    if config.app.environment != "production":
        DbManageService(database_service.engine).create_all()
    if not config.jwt.secret:
        logger.warning("jwt.secret is empty; write endpoints will answer 500")

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        jwt_service=JwtService(),
    )


async def shutdown() -> None:
    deps: ApplicationDependencies | None = getattr(app.state, "app_dependencies", None)
    if deps is not None:
        deps.database_service.engine.dispose()
    logger.info("Meredith stopped")


@asynccontextmanager
async def lifespan(_: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


def _check_cors() -> None:
    config = get_config().app
    if config.environment == "production" and "*" in config.cors.origins:
        raise RuntimeError("Wildcard CORS origin is not allowed in production")


_check_cors()
_is_production = get_config().app.environment == "production"

app = FastAPI(
    title="Meredith API",
    lifespan=lifespan,
    docs_url=None if _is_production else "/docs",
    redoc_url=None if _is_production else "/redoc",
)

# Last added runs first: request context wraps everything else
_cors = get_config().app.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors.origins,
    allow_credentials=_cors.allow_credentials,
    allow_methods=_cors.allow_methods,
    allow_headers=_cors.allow_headers,
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(MeredithError)
async def meredith_error_handler(request: Request, exc: MeredithError) -> JSONResponse:
    logger.bind(code=exc.code, status_code=exc.status_code).info(
        "request.rejected: {}", exc.message
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.include_router(health.router)
app.include_router(page.router)
app.include_router(category.router)
app.include_router(product.router)

__all__ = ["app", "startup", "shutdown"]
