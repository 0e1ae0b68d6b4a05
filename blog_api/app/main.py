"""
Main entrypoint for the Blog API.

This module assembles the FastAPI application, sets up logging,
middleware and exception handlers, and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn blog_api.app.main:app --reload

The MongoDB connection is opened when the application starts serving,
not at import time, so importing this module never touches the
network.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .api.router import API_PREFIX, router as api_router, seed_router
from .core.config import Settings, settings as default_settings
from .core.db import MongoStore
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)
request_logger = logging.getLogger("blog_api.requests")


def _open_store(settings: Settings) -> MongoStore:
    try:
        return MongoStore.connect(
            settings.mongodb_uri,
            settings.database_name,
            settings.server_selection_timeout_ms,
        )
    except PyMongoError as exc:
        logger.error("MongoDB connection error: %s", exc)
        raise


def create_app(settings: Optional[Settings] = None, store: Optional[MongoStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.
    store : Optional[MongoStore]
        An already connected store.  When omitted, the store is
        connected from ``settings.mongodb_uri`` at startup and closed
        at shutdown.  Tests pass an in-memory store here.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # A failed connection propagates out of startup, so uvicorn
        # exits instead of serving without a backend.
        owned = app.state.store is None
        if owned:
            app.state.store = _open_store(settings)
        app.state.store.ensure_indexes()
        logger.info("Environment: %s", settings.environment)
        logger.info("API URL: http://localhost:%s%s", settings.port, API_PREFIX)
        logger.info("Health Check: http://localhost:%s%s/health", settings.port, API_PREFIX)
        try:
            yield
        finally:
            if owned:
                app.state.store.close()
                app.state.store = None

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    register_exception_handlers(app)

    app.include_router(api_router)
    if settings.enable_seed:
        app.include_router(seed_router, prefix=API_PREFIX, tags=["utilities"])
    else:
        logger.info("Seed endpoint disabled for environment %s", settings.environment)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
