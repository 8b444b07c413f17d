"""Main FastAPI application with all middleware"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI

from airdrop.api import api_router
from airdrop.core.config import Settings, get_settings
from airdrop.core.database import build_engine
from airdrop.core.errors import register_exception_handlers
from airdrop.core.logging import setup_logging
from airdrop.core.middleware import setup_middleware
from airdrop.core.rate_limit import Clock, build_rate_limiters
from airdrop.repositories import AirdropStore, SQLAlchemyStore

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    settings = app.state.settings
    logger.info(f"Starting up {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    owns_store = app.state.store is None
    if owns_store:
        store = SQLAlchemyStore(build_engine(settings))
        await store.create_all()
        app.state.store = store

    try:
        yield
    finally:
        logger.info(f"Shutting down {settings.APP_NAME}...")
        if owns_store:
            await app.state.store.close()
            app.state.store = None

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[AirdropStore] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """
    Build the application

    ``store`` replaces the database-backed gateway (tests pass an
    in-memory one); ``clock`` drives the rate limiter windows.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Airdrop registration, social verification and referral API",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.store = store
    app.state.rate_limiters = build_rate_limiters(settings, clock)

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "version": settings.APP_VERSION,
            "docs": "/api/docs",
            "ping": "/api/ping"
        }

    return app

setup_logging()
app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "airdrop.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=1 if settings.DEBUG else settings.worker_count()
    )
