"""
Business logic for posts.

Posts reference their author by id.  The reference is checked with a
separate lookup before insert (there is no foreign key in the store)
and expanded at read time with one batched query per listing.
"""

import logging
from typing import Any, Dict, Iterable, List

from bson import ObjectId

from ..core.db import MongoStore, parse_object_id
from ..core.errors import InvalidIdError, MissingReferenceError, store_errors
from ..schemas.common import utcnow
from ..schemas.post import PostCreate, PostRead
from .user_service import NEWEST_FIRST, UserService

logger = logging.getLogger(__name__)

AUTHOR_FIELDS = {"name": 1, "email": 1}


class PostService:
    """Operations on posts."""

    def __init__(self, store: MongoStore) -> None:
        self.store = store
        self.users = UserService(store)

    def _load_authors(self, author_ids: Iterable[Any]) -> Dict[Any, Dict[str, Any]]:
        ids = list({author_id for author_id in author_ids if author_id is not None})
        if not ids:
            return {}
        cursor = self.store.users.find({"_id": {"$in": ids}}, AUTHOR_FIELDS)
        return {doc["_id"]: doc for doc in cursor}

    @staticmethod
    def _to_read(doc: Dict[str, Any], authors: Dict[Any, Dict[str, Any]]) -> PostRead:
        payload = dict(doc)
        payload["author"] = authors.get(doc.get("author"))
        return PostRead.model_validate(payload)

    def list_posts(self) -> List[PostRead]:
        """Return all posts, newest first, with their authors expanded."""
        with store_errors("Failed to fetch posts"):
            docs = list(self.store.posts.find().sort(NEWEST_FIRST))
            authors = self._load_authors(doc.get("author") for doc in docs)
        return [self._to_read(doc, authors) for doc in docs]

    def create_post(self, data: PostCreate) -> PostRead:
        """Insert a post after checking that its author exists.

        A malformed author id can never match a user, so it is reported
        the same way as an unknown one.
        """
        try:
            author_id: ObjectId = parse_object_id(data.author)
        except InvalidIdError:
            raise MissingReferenceError()

        with store_errors("Failed to create post"):
            author = self.users.find_author(author_id)
            if author is None:
                raise MissingReferenceError()
            now = utcnow()
            doc = {
                "title": data.title,
                "content": data.content,
                "author": author_id,
                "createdAt": now,
                "updatedAt": now,
            }
            result = self.store.posts.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created post %s by %s", result.inserted_id, author_id)
        return self._to_read(doc, {author_id: author})
