"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nt_savitarna import __version__
from nt_savitarna.core.database import init_db
from nt_savitarna.core.logging_config import get_logger, setup_logging

from .api.v1 import (
    admin_dashboard,
    admin_orders,
    admin_users,
    admin_valuators,
    auth,
    checkout,
    health,
    orders,
    reports,
    seed,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging(
    log_level=settings.log_level,
    log_format=settings.log_format,
    log_dir=settings.log_file_dir if settings.enable_file_logging else None,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    try:
        logger.info("Starting up NT Savitarna Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down NT Savitarna Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    NT Savitarna API

    Self-service portal of a real-estate valuation company. Clients register,
    order valuations and download their reports; administrators manage orders,
    valuators and clients and review business reports.
    """,
    version=__version__,
    openapi_url=f"{constant.API_STR}/openapi.json",
    docs_url=f"{constant.API_STR}/docs",
    redoc_url=f"{constant.API_STR}/redoc",
    lifespan=lifespan,
)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix=f"{constant.API_STR}/auth")
app.include_router(orders.router, prefix=f"{constant.API_STR}/orders")
app.include_router(checkout.router, prefix=f"{constant.API_STR}/checkout")
app.include_router(admin_orders.router, prefix=f"{constant.API_STR}/admin/orders")
app.include_router(admin_dashboard.router, prefix=f"{constant.API_STR}/admin")
app.include_router(admin_users.router, prefix=f"{constant.API_STR}/admin/users")
app.include_router(admin_valuators.router, prefix=f"{constant.API_STR}/admin/valuators")
app.include_router(reports.router, prefix=f"{constant.API_STR}/admin/reports")
app.include_router(seed.router, prefix=f"{constant.API_STR}/seed")
