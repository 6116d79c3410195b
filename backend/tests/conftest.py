"""
Shared test fixtures and configuration.
"""

import copy
import os
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId

# Set test environment variables before importing app modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("GROQ_API_KEY", "")
os.environ.setdefault("OPENROUTER_API_KEY", "")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_API_REQUESTS", "false")

from promptrelay.core.exceptions import CacheError, StoreError  # noqa: E402
from promptrelay.storage.interface import CacheStore, DocumentStore  # noqa: E402
from promptrelay.storage.mongo_store import parse_object_id  # noqa: E402


class InMemoryDocumentStore(DocumentStore):
    """DocumentStore double keeping documents in a dict. Ids follow the ObjectId format."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.fail = False

    def _check(self, doc_id: Optional[str] = None) -> Optional[str]:
        if self.fail:
            raise StoreError("document store unavailable")
        if doc_id is not None:
            return self.canonical_id(doc_id)
        return None

    def canonical_id(self, doc_id: str) -> str:
        return str(parse_object_id(doc_id))

    async def insert_one(self, document: Dict[str, Any]) -> str:
        self._check()
        doc_id = str(ObjectId())
        self.documents[doc_id] = {**copy.deepcopy(document), "_id": ObjectId(doc_id)}
        return doc_id

    async def find_one(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc_id = self._check(doc_id)
        document = self.documents.get(doc_id)
        return copy.deepcopy(document) if document is not None else None

    async def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sort_field: Optional[str] = None,
        descending: bool = True,
        limit: int = 50
    ) -> List[Dict[str, Any]]:
        self._check()
        matches = [
            d for d in self.documents.values()
            if all(d.get(k) == v for k, v in (filter or {}).items())
        ]
        if sort_field:
            matches.sort(key=lambda d: d[sort_field], reverse=descending)
        return copy.deepcopy(matches[:limit])

    async def update_one(
        self,
        doc_id: str,
        set_fields: Optional[Dict[str, Any]] = None,
        push: Optional[Dict[str, Any]] = None
    ) -> bool:
        doc_id = self._check(doc_id)
        document = self.documents.get(doc_id)
        if document is None:
            return False
        document.update(copy.deepcopy(set_fields or {}))
        for field, value in (push or {}).items():
            document.setdefault(field, []).append(copy.deepcopy(value))
        return True

    async def delete_one(self, doc_id: str) -> bool:
        doc_id = self._check(doc_id)
        return self.documents.pop(doc_id, None) is not None

    async def count_documents(self, filter: Optional[Dict[str, Any]] = None) -> int:
        return len(await self.find(filter=filter, limit=len(self.documents)))


class InMemoryCache(CacheStore):
    """CacheStore double. TTLs are recorded but never expire."""

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise CacheError("cache unavailable")

    async def get(self, key: str) -> Optional[str]:
        self._check()
        return self.values.get(key)

    async def set_ex(self, key: str, value: str, ttl_seconds: int) -> None:
        self._check()
        self.values[key] = value
        self.ttls[key] = ttl_seconds

    async def delete(self, key: str) -> None:
        self._check()
        self.values.pop(key, None)
        self.ttls.pop(key, None)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def documents():
    return InMemoryDocumentStore()


@pytest.fixture
def cache():
    return InMemoryCache()
