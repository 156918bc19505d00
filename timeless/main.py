"""
FastAPI Main Application
Runner board + admin console API with a periodic board ticker
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from timeless.config import settings
from timeless.core.logging import setup_logging
from timeless.infrastructure.db import database
from timeless.infrastructure.store.store_factory import build_store
from timeless.realtime.runtime import BoardRuntime
from timeless.scheduler.scheduler import BoardTicker
from timeless.utils.logging_redaction import install_redaction_filter
from timeless.api.routes import health, news, runner, stocks

setup_logging(
    settings.LOG_LEVEL,
    log_file=settings.LOG_FILE,
    max_bytes=settings.LOG_MAX_BYTES,
    backup_count=settings.LOG_BACKUP_COUNT,
)
install_redaction_filter()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info("🚀 Starting The Timeless board")
    logger.info("=" * 60)

    # 1. Document store
    logger.info("📊 Step 1/3: Initializing document store (%s)...", settings.STORE_BACKEND)
    if settings.STORE_BACKEND == "sql" and settings.AUTO_CREATE_TABLES:
        await database.init_db()
    store = build_store(settings.STORE_BACKEND, database.async_session_factory)
    created = await store.news.provision()
    app.state.store = store
    logger.info("✅ Store ready (%d news slots provisioned)", created)

    # 2. Board runtime
    logger.info("⚡ Step 2/3: Starting board runtime...")
    runtime = BoardRuntime(store)
    await runtime.start()
    app.state.runtime = runtime

    # 3. Ticker
    app.state.ticker = None
    if settings.SCHEDULER_ENABLED:
        try:
            logger.info("📅 Step 3/3: Starting board ticker...")
            ticker = BoardTicker(
                runtime,
                interval_seconds=settings.BOARD_REFRESH_SECONDS,
                timezone=settings.TIMEZONE,
            )
            ticker.start()
            app.state.ticker = ticker
        except Exception as e:
            logger.error(f"❌ Failed to start board ticker: {e}")
    else:
        logger.info("⏰ Board ticker disabled")

    logger.info("🎯 API Server: http://%s:%s (docs at /docs)", settings.API_HOST, settings.API_PORT)

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("🛑 Shutting down The Timeless board...")
    if app.state.ticker:
        app.state.ticker.stop()
    await runtime.stop()
    await database.close_db()
    logger.info("👋 Shutdown complete")


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router, tags=["Health"])
    app.include_router(news.router, prefix="/api/v1/news", tags=["News Slots"])
    app.include_router(stocks.router, prefix="/api/v1/stocks", tags=["Instruments"])
    app.include_router(runner.router, prefix="/api/v1/runner", tags=["Runner"])


# Create FastAPI app
app = FastAPI(
    title="The Timeless - Runner Board",
    description="Scheduled news slots and synthetic stock board",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

include_routers(app)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "The Timeless",
        "version": "1.0.0",
        "screens": {
            "runner": "/api/v1/runner/board",
            "admin": "/api/v1/news, /api/v1/stocks",
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("timeless.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
