"""
Post endpoints.

Posts can be listed and created.  Updating and deleting posts is not
part of the API.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status

from ..deps import get_post_service
from ...core.validation import validate_payload
from ...schemas.common import Envelope, envelope
from ...schemas.post import PostCreate, PostRead
from ...services.post_service import PostService

router = APIRouter()


@router.get("", response_model=Envelope[List[PostRead]], response_model_exclude_unset=True)
def list_posts(service: PostService = Depends(get_post_service)) -> Envelope:
    """Return every post, newest first, with ``author`` expanded."""
    posts = service.list_posts()
    return envelope(data=posts, count=len(posts))


@router.post(
    "",
    response_model=Envelope[PostRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_post(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: PostService = Depends(get_post_service),
) -> Envelope:
    """Create a post.  ``author`` must be the id of an existing user."""
    data = validate_payload(PostCreate, payload)
    post = service.create_post(data)
    return envelope(data=post, message="Post created successfully")
