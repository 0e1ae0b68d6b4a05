"""
FastAPI dependencies shared by the endpoint modules.
"""

from fastapi import Depends, Request

from ..core.config import Settings
from ..core.db import MongoStore, get_store
from ..services.post_service import PostService
from ..services.seed_service import SeedService
from ..services.user_service import UserService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(store: MongoStore = Depends(get_store)) -> UserService:
    return UserService(store)


def get_post_service(store: MongoStore = Depends(get_store)) -> PostService:
    return PostService(store)


def get_seed_service(store: MongoStore = Depends(get_store)) -> SeedService:
    return SeedService(store)
