"""
Sample data loader.

Wipes both collections and inserts a fixed set of three users and
three posts.  Meant for development and demos only; the HTTP route is
not mounted when seeding is disabled in the settings.
"""

import logging

from ..core.db import MongoStore
from ..core.errors import store_errors
from ..schemas.common import SeedSummary, utcnow
from ..schemas.user import UserCreate

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"name": "John Doe", "email": "john@example.com", "age": 30},
    {"name": "Jane Smith", "email": "jane@example.com", "age": 25},
    {"name": "Bob Johnson", "email": "bob@example.com", "age": 35},
]

# (title, content, index into SAMPLE_USERS)
SAMPLE_POSTS = [
    ("First Post", "This is the first post content", 0),
    ("Second Post", "This is the second post content", 1),
    ("Third Post", "This is the third post content", 0),
]


class SeedService:
    def __init__(self, store: MongoStore) -> None:
        self.store = store

    def seed(self) -> SeedSummary:
        now = utcnow()
        user_docs = []
        for sample in SAMPLE_USERS:
            doc = UserCreate.model_validate(sample).model_dump(exclude_none=True)
            doc.update(createdAt=now, updatedAt=now)
            user_docs.append(doc)

        with store_errors("Failed to seed database"):
            self.store.users.delete_many({})
            self.store.posts.delete_many({})
            user_ids = self.store.users.insert_many(user_docs).inserted_ids
            post_docs = [
                {
                    "title": title,
                    "content": content,
                    "author": user_ids[author_index],
                    "createdAt": now,
                    "updatedAt": now,
                }
                for title, content, author_index in SAMPLE_POSTS
            ]
            post_ids = self.store.posts.insert_many(post_docs).inserted_ids

        logger.info("Database seeded with %d users and %d posts", len(user_ids), len(post_ids))
        return SeedSummary(users=len(user_ids), posts=len(post_ids))
