"""
Catalog Backend: MongoDB Client Management
==========================================

What:  Creates the asyncio MongoDB client and resolves the products collection.
How:   pymongo's AsyncMongoClient owns a connection pool that is safe for
       concurrent use by every request; one client is created per process
       in the application lifespan and closed on shutdown.
Who:   Used by MongoProductStore; the lifespan calls `create_client()`.

Connection string handling:
    If MONGO_URI names a database (mongodb://host/shop) that database is used,
    otherwise `settings.mongo_database`.
"""

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from catalog.config import Settings
from catalog.exceptions import ConfigurationError, DatabaseError

logger = logging.getLogger(__name__)

# Same collection name a Mongoose "Product" model resolves to
PRODUCTS_COLLECTION = "products"


def create_client(settings: Settings) -> AsyncMongoClient:
    """
    Build the process-wide MongoDB client.

    The client connects lazily; `ping()` forces the first round trip.
    tz_aware=True makes `createdAt` come back as an aware UTC datetime.

    Raises:
        ConfigurationError: MONGO_URI is missing or malformed.
    """
    if not settings.mongo_uri:
        raise ConfigurationError("MONGO_URI is not set")
    try:
        return AsyncMongoClient(settings.mongo_uri, tz_aware=True)
    except PyMongoError as e:
        raise ConfigurationError(
            "MONGO_URI could not be parsed",
            context={"error": str(e)},
        ) from e


def get_products_collection(client: AsyncMongoClient, settings: Settings) -> AsyncCollection:
    """Resolve the products collection in the configured database."""
    database = client.get_default_database(default=settings.mongo_database)
    return database[PRODUCTS_COLLECTION]


async def ping(client: AsyncMongoClient) -> None:
    """
    Round-trip to the server.

    Raises:
        DatabaseError: the server is unreachable or rejected the command.
    """
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        raise DatabaseError(context={"error": str(e), "error_type": type(e).__name__}) from e


async def close_client(client: AsyncMongoClient) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await client.close()
    logger.info("MongoDB client closed")
