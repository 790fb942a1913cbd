import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_api.config import Settings, get_settings
from inventory_api.core.error_handlers import register_exception_handlers
from inventory_api.core.logging import setup_logging
from inventory_api.database import build_engine, build_session_factory, init_db
from inventory_api.middleware import (
    BodySizeLimitMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
    add_process_time_header,
    build_limiter,
)
from inventory_api.routers import health_router, products_router
from inventory_api.routers.health import HEALTH_PATH

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, *, configure_logging: bool = True) -> FastAPI:
    """Build the application; everything it needs hangs off ``app.state``."""
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.limiter = build_limiter(settings)

    register_exception_handlers(app)

    # Last added runs first.
    app.add_middleware(
        RateLimitMiddleware,
        limiter=app.state.limiter,
        limit=settings.rate_limit,
        exempt_paths=(HEALTH_PATH,),
    )
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.MAX_BODY_BYTES)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(add_process_time_header)

    app.include_router(health_router)
    app.include_router(products_router, prefix=settings.API_PREFIX)

    return app


__all__ = ["create_app"]
