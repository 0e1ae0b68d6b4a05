"""
Pydantic models for user data.

``UserCreate`` and ``UserUpdate`` validate incoming payloads;
``UserRead`` renders a stored document.  Names and emails are trimmed
and emails lower-cased here so the store only ever sees normalised
values, which keeps the unique index on ``email`` case-insensitive in
practice.
"""

import math
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import DocumentRead, is_blank

Number = Union[int, float]


def _check_age(value: Optional[Number]) -> Optional[Number]:
    # NaN compares false against everything, so check finiteness first.
    if value is not None and (not math.isfinite(value) or value < 0):
        raise ValueError("Age must be a non-negative number")
    return value


class UserCreate(BaseModel):
    """Schema for creating a user."""

    name: str = Field(..., examples=["Ann"])
    email: str = Field(..., examples=["ann@example.com"])
    age: Optional[Number] = Field(None, examples=[30])

    @model_validator(mode="before")
    @classmethod
    def _require_name_and_email(cls, data: Any) -> Any:
        if isinstance(data, dict) and (is_blank(data.get("name")) or is_blank(data.get("email"))):
            raise ValueError("Name and email are required")
        return data

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("age")
    @classmethod
    def _validate_age(cls, value: Optional[Number]) -> Optional[Number]:
        return _check_age(value)


class UserUpdate(BaseModel):
    """Schema for updating a user.

    Merge semantics: fields left out of the payload keep their stored
    value.  ``name`` and ``email`` may not be emptied; ``age`` may be
    sent as ``null`` to remove it.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    age: Optional[Number] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_empty_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            if "name" in data and is_blank(data["name"]):
                raise ValueError("Name cannot be empty")
            if "email" in data and is_blank(data["email"]):
                raise ValueError("Email cannot be empty")
        return data

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else value

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, value: Optional[str]) -> Optional[str]:
        return value.strip().lower() if value is not None else value

    @field_validator("age")
    @classmethod
    def _validate_age(cls, value: Optional[Number]) -> Optional[Number]:
        return _check_age(value)

    def changes(self) -> Dict[str, Any]:
        """Return only the fields present in the request payload."""
        return self.model_dump(exclude_unset=True)


class UserRead(DocumentRead):
    """Schema for reading a user from the API."""

    name: str
    email: str
    age: Optional[Number] = None


class AuthorRead(BaseModel):
    """The subset of a user embedded in a post."""

    id: str = Field(validation_alias="_id")
    name: str
    email: str

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)
