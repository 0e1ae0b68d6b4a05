"""Entry point for the Blog API.

Loads configuration from a ``.env`` file in the working directory (if
present) and serves the FastAPI application with uvicorn.  Supported
variables include ``PORT``, ``MONGODB_URI`` and ``ENVIRONMENT``; see
``blog_api/app/core/config.py`` for the full list.

Usage:
    python run.py
"""
import asyncio
import logging

from dotenv import load_dotenv
from uvicorn import Config, Server

# Settings are read when the package is imported, so the .env file has
# to be loaded first.
load_dotenv()

from blog_api.app.core.config import settings  # noqa: E402
from blog_api.app.main import app  # noqa: E402

logger = logging.getLogger(__name__)


async def main() -> None:
    """Serve the API until SIGINT/SIGTERM.

    uvicorn handles the signals and runs the application's shutdown,
    which closes the MongoDB connection before the process exits.
    """
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, lifespan="on", log_level=settings.log_level.lower())
    server = Server(config)
    logger.info("Starting %s on port %s", settings.project_name, settings.port)
    await server.serve()
    if not server.started:
        # Startup failed, most likely because MongoDB was unreachable.
        raise SystemExit(1)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
