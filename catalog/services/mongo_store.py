"""
Catalog Backend: MongoDB Product Store
======================================

What:  ProductStore implementation backed by a MongoDB collection.
How:   Thin wrapper over pymongo's asyncio collection API. Every method is a
       single driver call; there is no locking and no transaction, so
       concurrent writes to the same document race at the server.
Who:   Created in the application lifespan from the shared client.

Query mapping:
    list_all      → find().sort(createdAt desc, _id desc)
    get_by_id     → find_one({_id})
    insert        → insert_one(document)
    update_by_id  → find_one_and_update({_id}, {$set: fields}, AFTER)
    delete_by_id  → delete_one({_id})
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pymongo import DESCENDING, AsyncMongoClient, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from catalog.database import close_client, ping
from catalog.models.product import parse_object_id
from catalog.services.store_base import ProductStore

logger = logging.getLogger(__name__)

# createdAt ties (same millisecond) fall back to _id, which grows with insertion
NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class MongoProductStore(ProductStore):
    """
    Product persistence in one MongoDB collection.

    Args:
        collection: The `products` collection.
        client:     Owning client; closed by `close()` when given.
    """

    def __init__(
        self,
        collection: AsyncCollection,
        client: Optional[AsyncMongoClient] = None,
    ):
        self.collection = collection
        self.client = client

    async def list_all(self) -> List[Dict[str, Any]]:
        cursor = self.collection.find().sort(NEWEST_FIRST)
        return await cursor.to_list()

    async def get_by_id(self, product_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(product_id)
        if oid is None:
            return None
        return await self.collection.find_one({"_id": oid})

    async def insert(self, document: Mapping[str, Any]) -> Dict[str, Any]:
        # insert_one adds _id to the dict it is given; keep the caller's intact
        stored = dict(document)
        result = await self.collection.insert_one(stored)
        stored["_id"] = result.inserted_id
        logger.info("Inserted product %s", result.inserted_id)
        return stored

    async def update_by_id(
        self, product_id: str, fields: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(product_id)
        if oid is None:
            return None
        if not fields:
            # MongoDB rejects an empty $set
            return await self.collection.find_one({"_id": oid})
        return await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": dict(fields)},
            return_document=ReturnDocument.AFTER,
        )

    async def delete_by_id(self, product_id: str) -> bool:
        oid = parse_object_id(product_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0

    async def ensure_indexes(self) -> None:
        """Index the listing sort. Idempotent; run once at startup."""
        await self.collection.create_index(
            NEWEST_FIRST,
            name="createdAt_desc",
        )

    async def ping(self) -> None:
        await ping(self.client or self.collection.database.client)

    async def close(self) -> None:
        if self.client is not None:
            await close_client(self.client)
