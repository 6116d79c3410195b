"""
MongoDB Document Store - DocumentStore implementation on top of motor.
"""

import logging
from typing import Optional, List, Dict, Any

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from .interface import DocumentStore
from ..core.exceptions import InvalidIdError, StoreError

logger = logging.getLogger(__name__)


def create_mongo_client(uri: str) -> AsyncIOMotorClient:
    """Create the shared client. Datetimes come back timezone-aware (UTC)."""
    return AsyncIOMotorClient(uri, tz_aware=True)


def parse_object_id(doc_id: str) -> ObjectId:
    """Convert a hex string id, raising InvalidIdError if it is malformed."""
    if not isinstance(doc_id, str) or not ObjectId.is_valid(doc_id):
        raise InvalidIdError(str(doc_id))
    return ObjectId(doc_id)


class MongoDocumentStore(DocumentStore):
    """
    One MongoDB collection exposed through the DocumentStore contract.
    Driver errors are re-raised as StoreError.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @classmethod
    def for_collection(cls, database: AsyncIOMotorDatabase, name: str) -> "MongoDocumentStore":
        return cls(database[name])

    def canonical_id(self, doc_id: str) -> str:
        """Lowercase hex form; raises InvalidIdError for malformed ids."""
        return str(parse_object_id(doc_id))

    async def insert_one(self, document: Dict[str, Any]) -> str:
        try:
            result = await self.collection.insert_one(dict(document))
        except PyMongoError as e:
            logger.error(f"insert into {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        return str(result.inserted_id)

    async def find_one(self, doc_id: str) -> Optional[Dict[str, Any]]:
        oid = parse_object_id(doc_id)
        try:
            return await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"find_one in {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e

    async def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sort_field: Optional[str] = None,
        descending: bool = True,
        limit: int = 50
    ) -> List[Dict[str, Any]]:
        cursor = self.collection.find(filter or {})
        if sort_field:
            cursor = cursor.sort(sort_field, DESCENDING if descending else ASCENDING)
        cursor = cursor.limit(limit)
        try:
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"find in {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e

    async def update_one(
        self,
        doc_id: str,
        set_fields: Optional[Dict[str, Any]] = None,
        push: Optional[Dict[str, Any]] = None
    ) -> bool:
        oid = parse_object_id(doc_id)
        update: Dict[str, Any] = {}
        if set_fields:
            update["$set"] = set_fields
        if push:
            update["$push"] = push
        if not update:
            return await self.count_documents({"_id": oid}) > 0

        try:
            result = await self.collection.update_one({"_id": oid}, update)
        except PyMongoError as e:
            logger.error(f"update in {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        return result.matched_count > 0

    async def delete_one(self, doc_id: str) -> bool:
        oid = parse_object_id(doc_id)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"delete in {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e
        return result.deleted_count > 0

    async def count_documents(self, filter: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await self.collection.count_documents(filter or {})
        except PyMongoError as e:
            logger.error(f"count in {self.collection.name} failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e
