"""
Route directory.

Returns a static description of the available endpoints so that
clients exploring the API have somewhere to start.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..deps import get_settings
from ...core.config import Settings

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def api_index(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    endpoints: Dict[str, Any] = {
        "health": "GET /api/health",
        "users": {
            "getAll": "GET /api/users",
            "create": "POST /api/users",
            "getById": "GET /api/users/:id",
            "update": "PUT /api/users/:id",
            "delete": "DELETE /api/users/:id",
        },
        "posts": {
            "getAll": "GET /api/posts",
            "create": "POST /api/posts",
        },
    }
    if settings.enable_seed:
        endpoints["utilities"] = {"seed": "POST /api/seed"}
    return {
        "message": settings.project_name,
        "version": settings.api_version,
        "endpoints": endpoints,
    }
