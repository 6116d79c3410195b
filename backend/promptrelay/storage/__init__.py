"""Storage module - store/cache interfaces, their MongoDB and Redis adapters, and the stores built on them."""

from .interface import DocumentStore, CacheStore
from .mongo_store import MongoDocumentStore, create_mongo_client, parse_object_id
from .redis_cache import RedisCache, create_redis_client
from .session_store import SessionStore
from .record_store import RecordStore, CompletionStore, TranscriptionStore, SttTranscriptionStore

__all__ = [
    'DocumentStore', 'CacheStore',
    'MongoDocumentStore', 'create_mongo_client', 'parse_object_id',
    'RedisCache', 'create_redis_client',
    'SessionStore',
    'RecordStore', 'CompletionStore', 'TranscriptionStore', 'SttTranscriptionStore',
]
