"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from simple_blog import __version__
from simple_blog.api import site_router
from simple_blog.api.views import redirect
from simple_blog.config import get_settings
from simple_blog.database import engine, init_db
from simple_blog.services.base import AuthorizationFailure
from simple_blog.utils.permissions import AuthenticationMiddleware
from simple_blog.utils.security import get_token_codec

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - runs on startup and shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Environment: %s", settings.environment)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    await init_db(engine)
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    AuthenticationMiddleware,
    codec=get_token_codec(),
    cookie_name=settings.session_cookie_name,
)


@app.exception_handler(AuthorizationFailure)
async def authorization_failure_handler(
    _request: Request, _exc: AuthorizationFailure
) -> RedirectResponse:
    """Send anonymous and non-owner requests back to the landing page."""
    return redirect("/")


# Include site router
app.include_router(site_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the app is running."""
    return {"status": "healthy", "version": __version__}
