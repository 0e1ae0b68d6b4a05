#!/usr/bin/env python3
"""
Provision the Blog API database.

Creates the ``users`` and ``posts`` collections if they do not exist
and the indexes the service relies on (unique ``users.email``,
``posts.createdAt`` and ``posts.author``).  With ``--seed`` the sample
users and posts are loaded as well, replacing any existing data.

The API also ensures its indexes at startup; this script is meant for
provisioning a fresh database ahead of the first deployment.

Usage:
    python init_db.py --uri mongodb://localhost:27017/mernapp [--seed]
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv
from pymongo.errors import PyMongoError

from blog_api.app.core.db import POSTS_COLLECTION, USERS_COLLECTION, MongoStore
from blog_api.app.core.logging_config import setup_logging
from blog_api.app.services.seed_service import SeedService

logger = logging.getLogger("init_db")


def provision(store: MongoStore, seed: bool = False) -> List[str]:
    """Create missing collections and indexes; optionally seed.

    Returns the names of the collections that were created.
    """
    existing = set(store.db.list_collection_names())
    created = []
    for name in (USERS_COLLECTION, POSTS_COLLECTION):
        if name not in existing:
            store.db.create_collection(name)
            created.append(name)
    store.ensure_indexes()
    if seed:
        summary = SeedService(store).seed()
        logger.info("Seeded %d users and %d posts", summary.users, summary.posts)
    return created


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    ap = argparse.ArgumentParser(description="Create Blog API collections and indexes.")
    ap.add_argument("--uri", default=os.getenv("MONGODB_URI", "mongodb://localhost:27017/mernapp"), help="MongoDB connection string")
    ap.add_argument("--database", default=os.getenv("MONGODB_DATABASE", "mernapp"), help="Database name if the URI names none")
    ap.add_argument("--seed", action="store_true", help="Replace all data with the sample users and posts")
    args = ap.parse_args(argv)

    setup_logging("INFO")
    try:
        store = MongoStore.connect(args.uri, args.database)
    except PyMongoError as exc:
        print(f"[!] Cannot connect to MongoDB: {exc}", file=sys.stderr)
        return 1
    try:
        created = provision(store, seed=args.seed)
    except PyMongoError as exc:
        print(f"[!] Provisioning failed: {exc}", file=sys.stderr)
        return 2
    finally:
        store.close()

    for name in created:
        print(f"[+] Created collection {name}")
    print(f"[+] Database {store.database_name} initialized successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
