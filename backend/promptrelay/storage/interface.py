"""
Storage Interfaces - contracts for the document store and the cache.

The session store and the record stores only talk to these interfaces, so the
MongoDB and Redis adapters can be swapped (or replaced by in-memory doubles in
tests) without touching the caching logic.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class DocumentStore(ABC):
    """
    A durable collection of JSON-like documents keyed by an opaque string id.
    Implementations raise StoreError on backend failure and InvalidIdError
    when an id is not in the backend's format.
    """

    @abstractmethod
    async def insert_one(self, document: Dict[str, Any]) -> str:
        """
        Insert a document.

        Args:
            document: Document body (must not contain an id)

        Returns:
            str: Identifier assigned by the store
        """
        pass

    @abstractmethod
    async def find_one(self, doc_id: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a document by id.

        Returns:
            Optional[Dict]: The document including its ``_id``, or None if absent
        """
        pass

    @abstractmethod
    async def find(
        self,
        filter: Optional[Dict[str, Any]] = None,
        sort_field: Optional[str] = None,
        descending: bool = True,
        limit: int = 50
    ) -> List[Dict[str, Any]]:
        """
        Query documents.

        Args:
            filter: Equality filter on top-level fields (None matches everything)
            sort_field: Field to sort on
            descending: Sort direction
            limit: Maximum number of documents returned

        Returns:
            List[Dict]: Matching documents in sort order
        """
        pass

    @abstractmethod
    async def update_one(
        self,
        doc_id: str,
        set_fields: Optional[Dict[str, Any]] = None,
        push: Optional[Dict[str, Any]] = None
    ) -> bool:
        """
        Atomically update a single document.

        Args:
            doc_id: Document id
            set_fields: Fields to overwrite
            push: Values to append, keyed by array field name

        Returns:
            bool: True if a document with this id existed
        """
        pass

    @abstractmethod
    async def delete_one(self, doc_id: str) -> bool:
        """
        Delete a document.

        Returns:
            bool: True if a document was actually removed
        """
        pass

    @abstractmethod
    async def count_documents(self, filter: Optional[Dict[str, Any]] = None) -> int:
        """Number of documents matching ``filter``."""
        pass

    def canonical_id(self, doc_id: str) -> str:
        """
        The one spelling of ``doc_id`` that keys derived from it (cache keys)
        must use. Stores whose ids accept several spellings override this.
        """
        return doc_id


class CacheStore(ABC):
    """
    Key/value cache with per-key expiry. Implementations raise CacheError on
    backend failure; deleting an absent key is not an error.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Value for ``key`` or None on a miss."""
        pass

    @abstractmethod
    async def set_ex(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        pass
