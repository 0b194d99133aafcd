"""MongoDB async client setup."""

import logging

from pymongo import DESCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase

from storyforge.config import Settings

logger = logging.getLogger(__name__)

STORIES_COLLECTION = "stories"


def create_client(settings: Settings) -> AsyncMongoClient:
    """Create a client with bounded connect and server selection timeouts."""
    timeout_ms = settings.database_connect_timeout_seconds * 1000
    return AsyncMongoClient(
        settings.database_url,
        tz_aware=True,
        connectTimeoutMS=timeout_ms,
        serverSelectionTimeoutMS=timeout_ms,
    )


async def connect_database(settings: Settings) -> tuple[AsyncMongoClient, AsyncDatabase]:
    """Connect and verify the server is reachable.

    Any failure propagates to the caller; at startup this aborts the process.
    """
    client = create_client(settings)
    try:
        await client.admin.command("ping")
    except Exception:
        await client.close()
        raise
    logger.info(f"Connected to document store, database: {settings.database_name}")
    return client, client[settings.database_name]


def get_stories_collection(database: AsyncDatabase) -> AsyncCollection:
    """Get the stories collection."""
    return database[STORIES_COLLECTION]


async def ensure_indexes(collection: AsyncCollection) -> None:
    """Create indexes used by story listing."""
    await collection.create_index([("created_at", DESCENDING)])
