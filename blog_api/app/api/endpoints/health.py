"""
Health check endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..deps import get_settings
from ...core.config import Settings
from ...core.db import MongoStore, get_store
from ...schemas.common import HealthRead

router = APIRouter()


@router.get("/health", response_model=HealthRead)
def health_check(
    store: MongoStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> HealthRead:
    """Report liveness and whether MongoDB answers a ping.

    Always responds 200; a lost database connection shows up as
    ``"database": "Disconnected"`` rather than an error status.  The
    ping is bounded by ``settings.health_timeout_ms``, so with the
    server down the response takes about that long.
    """
    return HealthRead(
        status="OK",
        message="Server is running!",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.environment,
        database="Connected" if store.is_connected(settings.health_timeout_ms) else "Disconnected",
    )
