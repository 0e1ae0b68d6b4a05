"""
User endpoints.

Plain CRUD over the ``users`` collection.  Bodies are taken as raw
JSON objects and validated with ``validate_payload`` so that missing
fields produce the API's own 400 envelope instead of FastAPI's 422.

Handlers are synchronous: FastAPI runs them in its thread pool, so a
slow store call blocks only the request that made it.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, status

from ..deps import get_user_service
from ...core.validation import validate_payload
from ...schemas.common import Envelope, envelope
from ...schemas.user import UserCreate, UserRead, UserUpdate
from ...services.user_service import UserService

router = APIRouter()


@router.get("", response_model=Envelope[List[UserRead]], response_model_exclude_unset=True)
def list_users(service: UserService = Depends(get_user_service)) -> Envelope:
    """Return every user, newest first.  No pagination."""
    users = service.list_users()
    return envelope(data=users, count=len(users))


@router.post(
    "",
    response_model=Envelope[UserRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Envelope:
    """Create a user from ``name``, ``email`` and an optional ``age``.

    Responds 400 when a required field is missing or the email is
    already registered.
    """
    data = validate_payload(UserCreate, payload)
    user = service.create_user(data)
    return envelope(data=user, message="User created successfully")


@router.get("/{user_id}", response_model=Envelope[UserRead], response_model_exclude_unset=True)
def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> Envelope:
    return envelope(data=service.get_user(user_id))


@router.put("/{user_id}", response_model=Envelope[UserRead], response_model_exclude_unset=True)
def update_user(
    user_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: UserService = Depends(get_user_service),
) -> Envelope:
    """Update a user.  Fields missing from the body keep their value."""
    data = validate_payload(UserUpdate, payload)
    user = service.update_user(user_id, data)
    return envelope(data=user, message="User updated successfully")


@router.delete("/{user_id}", response_model=Envelope, response_model_exclude_unset=True)
def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Envelope:
    """Delete a user.  Their posts are not removed."""
    service.delete_user(user_id)
    return envelope(message="User deleted successfully")
