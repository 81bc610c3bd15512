"""User Management API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UserManagementError → structured JSON responses
    - Request/response logging wraps every route, including error responses
    - Database initialized, tables created and seed applied on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_application() factory: tests and ASGI servers build the same app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from user_management_api.api.error_handlers import register_error_handlers
from user_management_api.api.request_logging import RequestResponseLoggingMiddleware
from user_management_api.api.routes import auth, health, users
from user_management_api.config import get_settings
import user_management_api.infrastructure.database as database
from user_management_api.infrastructure.observability import setup_logging
from user_management_api.services.seed import seed_initial_data

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_all()
    async with manager.session() as db:
        await seed_initial_data(db, settings)
    logger.info("User Management API started")
    yield
    logger.info("User Management API shutting down")
    await manager.dispose()


def create_application() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="User Management API",
        version=settings.version,
        description=(
            "User CRUD backed by an in-memory SQL store. "
            "Passwords are never returned."
        ),
        lifespan=lifespan,
    )

    # CORS — configured from settings, not hardcoded
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestResponseLoggingMiddleware,
        body_max_chars=settings.log_body_max_chars,
    )

    register_error_handlers(app)

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)

    return app


app = create_application()
