"""
Shared schema pieces: the response envelope and document helpers.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

DataT = TypeVar("DataT")


def is_blank(value: Any) -> bool:
    """True for ``None`` and for strings that are empty after trimming."""
    return value is None or (isinstance(value, str) and not value.strip())


class DocumentRead(BaseModel):
    """Fields every stored document exposes.

    Documents come straight from MongoDB, so ``_id`` is accepted and
    rendered as ``id``; timestamps are rendered as ``createdAt`` and
    ``updatedAt``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(validation_alias="_id")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> str:
        return str(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # pymongo returns naive datetimes holding UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Envelope(BaseModel, Generic[DataT]):
    """Uniform wrapper returned by the resource endpoints."""

    success: bool = True
    message: Optional[str] = None
    count: Optional[int] = None
    data: Optional[DataT] = None


def envelope(data: Any = None, message: Optional[str] = None, count: Optional[int] = None) -> Envelope:
    """Build a success envelope holding only the fields that were given.

    Endpoints are declared with ``response_model_exclude_unset`` so keys
    that were never set stay out of the JSON body.
    """
    fields: Dict[str, Any] = {"success": True}
    if message is not None:
        fields["message"] = message
    if count is not None:
        fields["count"] = count
    if data is not None:
        fields["data"] = data
    return Envelope(**fields)


class SeedSummary(BaseModel):
    users: int
    posts: int


class HealthRead(BaseModel):
    status: str
    message: str
    timestamp: str
    environment: str
    database: str


def utcnow() -> datetime:
    """Current UTC time at millisecond precision, the resolution BSON stores."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)
