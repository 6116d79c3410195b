"""
Session Store - cache-aside access to conversational sessions.

Reads go to the cache first and fall back to the document store, repopulating
the cache on the way out. Writes go to the document store only and then drop
the cached snapshot. The cache is never updated in place: message appends are
atomic in the document store, and copying them into a cached snapshot could
lose an append made concurrently by another request.

Cache failures are logged and otherwise ignored. They can slow a read down
but never change its answer; the document store is the source of truth.
"""

import logging
from typing import Optional, List

from .interface import DocumentStore, CacheStore
from ..core.exceptions import CacheError
from ..models.base import utc_now
from ..models.session import (
    Message,
    Session,
    message_document,
    session_from_cache,
    session_to_cache,
)

logger = logging.getLogger(__name__)

SESSION_COLLECTION = "sessions"
CACHE_KEY_PREFIX = "session:"
DEFAULT_CACHE_TTL = 3600  # 1 hour


class SessionStore:
    """
    Session CRUD with cache-aside reads and invalidate-on-write.
    """

    def __init__(self, documents: DocumentStore, cache: CacheStore,
                 cache_ttl: int = DEFAULT_CACHE_TTL):
        """
        Args:
            documents: Store of record for the ``sessions`` collection
            cache: Shared cache holding full session snapshots
            cache_ttl: Snapshot lifetime in seconds
        """
        self.documents = documents
        self.cache = cache
        self.cache_ttl = cache_ttl

    def cache_key(self, session_id: str) -> str:
        return f"{CACHE_KEY_PREFIX}{self.documents.canonical_id(session_id)}"

    async def create(self, session: Session) -> str:
        """
        Persist a new session. The cache is filled lazily on first read.

        Returns:
            str: Identifier assigned by the document store
        """
        session_id = await self.documents.insert_one(session.to_document())
        logger.info(
            f"Session created: {session_id}",
            extra={"extra_fields": {"session_id": session_id, "session_type": session.session_type}}
        )
        return session_id

    async def find_by_id(self, session_id: str) -> Optional[Session]:
        """
        Cache-aside read. A cached snapshot may lag concurrent writers by up to
        the TTL. Returns None only when the document store has no such session.
        """
        key = self.cache_key(session_id)

        cached = await self._cache_get(key)
        if cached is not None:
            try:
                return session_from_cache(cached)
            except ValueError as e:
                logger.warning(f"Discarding undecodable cache entry {key}: {e}")

        document = await self.documents.find_one(session_id)
        if document is None:
            return None

        session = Session.from_document(document)
        await self._cache_set(key, session_to_cache(session))
        return session

    async def find_all(self, limit: int = 50) -> List[Session]:
        """Most recently updated sessions first. Listings are never cached."""
        documents = await self.documents.find(sort_field="updated_at", descending=True, limit=limit)
        return [Session.from_document(d) for d in documents]

    async def count(self) -> int:
        return await self.documents.count_documents()

    async def add_message(self, session_id: str, message: Message) -> bool:
        """
        Append one message and touch ``updated_at`` in a single atomic update,
        then drop the cached snapshot.

        Returns:
            bool: False if no such session exists (nothing is written)
        """
        matched = await self.documents.update_one(
            session_id,
            set_fields={"updated_at": utc_now()},
            push={"messages": message_document(message)},
        )
        await self.invalidate(session_id)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Append to session {session_id}: role={message.role}, matched={matched}"
            )
        return matched

    async def update_title(self, session_id: str, title: str) -> bool:
        """Set the title and touch ``updated_at``, then drop the cached snapshot."""
        matched = await self.documents.update_one(
            session_id,
            set_fields={"title": title, "updated_at": utc_now()},
        )
        await self.invalidate(session_id)
        return matched

    async def delete(self, session_id: str) -> bool:
        """
        Remove a session. The cached snapshot is dropped whether or not the
        store held the session.
        """
        deleted = await self.documents.delete_one(session_id)
        await self.invalidate(session_id)
        if deleted:
            logger.info(f"Session deleted: {session_id}")
        return deleted

    async def invalidate(self, session_id: str) -> None:
        key = self.cache_key(session_id)
        try:
            await self.cache.delete(key)
        except CacheError as e:
            logger.warning(
                f"Cache invalidation failed for {key}: {e}",
                extra={"extra_fields": {"session_id": session_id, "error": str(e)}}
            )

    async def _cache_get(self, key: str) -> Optional[str]:
        try:
            return await self.cache.get(key)
        except CacheError as e:
            logger.warning(f"Cache read failed, falling back to store: {e}")
            return None

    async def _cache_set(self, key: str, value: str) -> None:
        try:
            await self.cache.set_ex(key, value, self.cache_ttl)
        except CacheError as e:
            logger.warning(f"Cache write failed for {key}: {e}")
