"""
MongoDB integration.

``MongoStore`` wraps a single ``pymongo.MongoClient`` for the lifetime
of the process.  The client keeps its own connection pool and is safe
to share between concurrent requests, so one store instance is created
at startup, attached to ``app.state`` and handed to services through
the ``get_store`` dependency.
"""

import logging
from typing import Any, Optional

import pymongo
from bson import ObjectId
from fastapi import Request
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .errors import InvalidIdError

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
POSTS_COLLECTION = "posts"


class MongoStore:
    """Connection handle and collection accessors for the document store."""

    def __init__(self, client: Any, database_name: str) -> None:
        self.client = client
        self.database_name = database_name
        self.db = client[database_name]

    @classmethod
    def connect(cls, uri: str, database_name: str, timeout_ms: int = 5000) -> "MongoStore":
        """Create a client and verify the server answers.

        ``MongoClient`` connects lazily, so a ``ping`` is issued to fail
        fast when the server is unreachable.  Raises ``PyMongoError`` on
        failure; the caller decides whether that is fatal.
        """
        client: MongoClient = MongoClient(uri, serverSelectionTimeoutMS=timeout_ms)
        name = client.get_default_database(default=database_name).name
        store = cls(client, name)
        try:
            store.ping()
        except PyMongoError:
            client.close()
            raise
        logger.info("MongoDB connected successfully (database %s)", name)
        return store

    @property
    def users(self) -> Collection:
        return self.db[USERS_COLLECTION]

    @property
    def posts(self) -> Collection:
        return self.db[POSTS_COLLECTION]

    def ping(self, timeout_ms: Optional[int] = None) -> None:
        """Round-trip to the server.

        ``timeout_ms`` caps server selection plus the command itself;
        without it the client-wide ``serverSelectionTimeoutMS`` applies.
        """
        if timeout_ms is None:
            self.client.admin.command("ping")
            return
        with pymongo.timeout(timeout_ms / 1000):
            self.client.admin.command("ping")

    def is_connected(self, timeout_ms: Optional[int] = None) -> bool:
        try:
            self.ping(timeout_ms)
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    def ensure_indexes(self) -> None:
        """Create the indexes the service relies on.  Idempotent."""
        self.users.create_index([("email", ASCENDING)], unique=True)
        self.posts.create_index([("createdAt", DESCENDING)])
        self.posts.create_index([("author", ASCENDING)])

    def close(self) -> None:
        self.client.close()
        logger.info("Database connection closed")


def get_store(request: Request) -> MongoStore:
    """FastAPI dependency returning the store attached at startup."""
    return request.app.state.store


def parse_object_id(value: Optional[str], message: str = "Invalid id") -> ObjectId:
    """Convert a client supplied id into an ``ObjectId``.

    Raises ``InvalidIdError`` when ``value`` is not a 24 character hex
    string (or an ``ObjectId`` already).
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidIdError(message)
    return ObjectId(value)
