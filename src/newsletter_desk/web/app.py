# ABOUTME: FastAPI application factory with database lifespan.
# ABOUTME: Main entry point for the newsletter-desk HTTP API.

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from newsletter_desk.db.session import close_db, init_db
from newsletter_desk.web.errors import register_exception_handlers
from newsletter_desk.web.routes import health, newsletters, subscriptions

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context for database setup/teardown."""
    logger.info("app_startup")
    await init_db()
    yield
    logger.info("app_shutdown")
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Newsletter Desk",
        description="Newsletter sign-up with double opt-in confirmation",
        version="0.1.0",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(subscriptions.router)
    app.include_router(newsletters.router)

    return app


# Application instance for uvicorn
app = create_app()
