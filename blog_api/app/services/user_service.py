"""
Business logic for users.

``UserService`` reads and writes the ``users`` collection through the
injected ``MongoStore``.  Payloads reach it already validated; the
service maps store outcomes (missing document, duplicate email, driver
failure) onto ``ApiError`` subclasses.
"""

import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..core.db import MongoStore, parse_object_id
from ..core.errors import DuplicateError, NotFoundError, store_errors
from ..schemas.common import utcnow
from ..schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger(__name__)

# Newest first; ``_id`` breaks ties between documents written in the
# same millisecond.
NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]


class UserService:
    """Operations on users."""

    def __init__(self, store: MongoStore) -> None:
        self.store = store

    def list_users(self) -> List[UserRead]:
        """Return all users, most recently created first."""
        with store_errors("Failed to fetch users"):
            docs = list(self.store.users.find().sort(NEWEST_FIRST))
        return [UserRead.model_validate(doc) for doc in docs]

    def create_user(self, data: UserCreate) -> UserRead:
        """Insert a user and return the stored document.

        Raises ``DuplicateError`` when the email is already taken.  The
        check is left to the unique index rather than a prior lookup so
        two concurrent requests cannot both succeed.
        """
        now = utcnow()
        doc = data.model_dump(exclude_none=True)
        doc.update(createdAt=now, updatedAt=now)
        with store_errors("Failed to create user"):
            try:
                result = self.store.users.insert_one(doc)
            except DuplicateKeyError:
                logger.info("Rejected duplicate email %s", data.email)
                raise DuplicateError()
        doc["_id"] = result.inserted_id
        logger.info("Created user %s", result.inserted_id)
        return UserRead.model_validate(doc)

    def get_user(self, user_id: str) -> UserRead:
        oid = parse_object_id(user_id, "Invalid user id")
        with store_errors("Failed to fetch user"):
            doc = self.store.users.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError("User not found")
        return UserRead.model_validate(doc)

    def update_user(self, user_id: str, data: UserUpdate) -> UserRead:
        """Apply the fields present in ``data`` and return the new document.

        Omitted fields are left untouched; ``age=None`` unsets the age.
        ``updatedAt`` is refreshed even when nothing else changes.
        """
        oid = parse_object_id(user_id, "Invalid user id")
        changes = data.changes()
        to_set = {key: value for key, value in changes.items() if value is not None}
        to_set["updatedAt"] = utcnow()
        update = {"$set": to_set}
        to_unset = {key: "" for key, value in changes.items() if value is None}
        if to_unset:
            update["$unset"] = to_unset

        with store_errors("Failed to update user"):
            try:
                doc = self.store.users.find_one_and_update(
                    {"_id": oid},
                    update,
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError:
                logger.info("Rejected duplicate email on update of %s", user_id)
                raise DuplicateError()
        if doc is None:
            raise NotFoundError("User not found")
        logger.info("Updated user %s", user_id)
        return UserRead.model_validate(doc)

    def delete_user(self, user_id: str) -> None:
        """Delete a user.  Posts written by the user are left in place."""
        oid = parse_object_id(user_id, "Invalid user id")
        with store_errors("Failed to delete user"):
            result = self.store.users.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError("User not found")
        logger.info("Deleted user %s", user_id)

    def find_author(self, author_id: ObjectId) -> Optional[Dict[str, Any]]:
        """Return ``{_id, name, email}`` for a user, or ``None``."""
        return self.store.users.find_one({"_id": author_id}, {"name": 1, "email": 1})
