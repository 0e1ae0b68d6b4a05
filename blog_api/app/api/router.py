"""
Top-level API router.

Aggregates the resource routers under the ``/api`` prefix.  The seed
router is kept separate because ``create_app`` mounts it only when
seeding is enabled.
"""

from fastapi import APIRouter

from .endpoints import health, info, posts, seed, users

API_PREFIX = "/api"

router = APIRouter()

# The index route has an empty path, so it needs a non-empty prefix here.
router.include_router(info.router, prefix=API_PREFIX, tags=["info"])
router.include_router(health.router, prefix=API_PREFIX, tags=["health"])
router.include_router(users.router, prefix=f"{API_PREFIX}/users", tags=["users"])
router.include_router(posts.router, prefix=f"{API_PREFIX}/posts", tags=["posts"])

seed_router = seed.router
