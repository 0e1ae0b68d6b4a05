"""
Pydantic schemas for posts.

A post belongs to exactly one user, stored as the user's ``ObjectId``
in ``author``.  When a post is read the reference is expanded into an
``AuthorRead``.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import DocumentRead, is_blank
from .user import AuthorRead


class PostCreate(BaseModel):
    """Schema for creating a post.  ``author`` is a user id."""

    title: str = Field(..., examples=["First Post"])
    content: str = Field(..., examples=["This is the first post content"])
    author: str = Field(..., description="Id of an existing user")

    @model_validator(mode="before")
    @classmethod
    def _require_fields(cls, data: Any) -> Any:
        if isinstance(data, dict) and any(is_blank(data.get(key)) for key in ("title", "content", "author")):
            raise ValueError("Title, content, and author are required")
        return data

    @field_validator("title", "author")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class PostRead(DocumentRead):
    """Schema for reading a post.

    ``author`` is ``None`` when the referenced user was deleted after
    the post was written.
    """

    title: str
    content: str
    author: Optional[AuthorRead] = None
