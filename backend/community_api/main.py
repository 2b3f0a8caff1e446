"""Community Platform API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix
    - One error dispatcher (api/error_handlers.py) renders every failure
    - The session lives in a signed cookie (SessionMiddleware)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from community_api.api.error_handlers import register_error_handlers
from community_api.api.routes import auth, communities, health, members, roles
from community_api.config import get_settings
from community_api.infrastructure.database import init_db
from community_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Community API started")
    yield
    logger.info("Community API shutting down")
    await manager.dispose()


app = FastAPI(title="Community API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.cookie_secret,
    session_cookie=settings.session_cookie_name,
    https_only=settings.cookie_secure,
    same_site="lax",
)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(roles.router, prefix=settings.api_prefix)
app.include_router(communities.router, prefix=settings.api_prefix)
app.include_router(members.router, prefix=settings.api_prefix)

register_error_handlers(app)
