"""
Database initialization module for the contact API.

Ensures the contacts collection and its indexes exist when the backend
starts, and checks that the pre-seeded education collection is present.
Safe to run on every startup.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

from portfolio_api.core.errors import ConfigurationError

# Set up logger
logger = logging.getLogger(__name__)


def required_collections(store) -> List[Dict[str, Any]]:
    """Collections the application writes to, with their indexes"""
    return [
        {
            "name": store.contacts_collection,
            "description": "Stores contact form submissions",
            "indexes": [
                {"keys": [("createdAt", -1)], "unique": False},
                {"keys": [("email", 1)], "unique": False},
            ]
        }
    ]


async def collection_exists(db, collection_name):
    """
    Check if a collection exists in the database.

    Args:
        db: MongoDB database connection
        collection_name (str): Name of the collection to check

    Returns:
        bool: True if collection exists, False otherwise
    """
    collections = await db.list_collection_names()
    return collection_name in collections


async def create_collection_with_indexes(db, collection_config):
    """
    Create a collection with its required indexes if it doesn't exist.

    Args:
        db: MongoDB database connection
        collection_config (dict): Collection configuration with name, description, and indexes
    """
    collection_name = collection_config["name"]
    description = collection_config.get("description", "")

    if await collection_exists(db, collection_name):
        logger.info(f"✅ Collection '{collection_name}' already exists")
    else:
        logger.info(f"🔄 Creating collection '{collection_name}': {description}")
        await db.create_collection(collection_name)
        logger.info(f"✅ Collection '{collection_name}' created successfully")

    # Still try to create indexes in case they're missing
    collection = db[collection_name]
    for index_config in collection_config.get("indexes", []):
        keys = index_config["keys"]
        options = {k: v for k, v in index_config.items() if k != "keys"}
        try:
            await collection.create_index(keys, **options)
            logger.debug(f"✅ Index {keys} ensured for '{collection_name}'")
        except PyMongoError as e:
            logger.warning(f"Failed to create index {keys} for '{collection_name}': {str(e)}")


async def initialize_database(store):
    """
    Create the collections and indexes the application needs, then verify
    that the education collection exists.

    Raises:
        ConfigurationError: if the database cannot be reached or the
            configured education collection is missing
    """
    start_time = datetime.now(timezone.utc)
    db = store.db
    logger.info(f"🚀 Initializing database: {db.name}")

    try:
        for collection_config in required_collections(store):
            await create_collection_with_indexes(db, collection_config)

        if not await collection_exists(db, store.education_collection):
            raise ConfigurationError(
                f"Education collection '{store.education_collection}' not found in database '{db.name}'. "
                "Set EDUCATION_COLLECTION to the collection holding education records."
            )
    except PyMongoError as e:
        raise ConfigurationError(f"MongoDB error during database initialization: {str(e)}") from e

    duration = (datetime.now(timezone.utc) - start_time).total_seconds()
    logger.info(f"🎉 Database initialization completed in {duration:.2f}s")
