"""
Recipe Box API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.auth import router as auth_router
from api.errors import register_exception_handlers
from api.middleware import register_middleware
from api.routes import router as api_router
from config.settings import Settings, get_settings
from database.session import build_engine, build_session_factory, init_models

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("sqlalchemy.engine", "aiosqlite", "asyncio"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(app.state.settings)
    # Refuse to serve if the database cannot be reached.
    await init_models(engine)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info("Connected to database; ready to accept requests.")
    try:
        yield
    finally:
        await engine.dispose()
        logger.info("Database engine disposed.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; without explicit settings, read the process ones and set up logging."""
    if settings is None:
        settings = get_settings()
        configure_logging(settings)

    app = FastAPI(
        title="Recipe Box API",
        version="1.0.0",
        description="Register, log in and keep a personal list of recipes.",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/auth")
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
        log_level="debug" if _settings.debug else "info",
    )
