"""
Record Stores - plain create/read/list/delete façades over one collection.

Used for relayed AI completions and transcripts. Unlike sessions these
records are written once and never cached.
"""

from typing import ClassVar, Generic, List, Optional, Type, TypeVar

from .interface import DocumentStore
from ..models.ai import AICompletion
from ..models.base import DocumentModel
from ..models.transcription import SttTranscription, Transcription

RecordT = TypeVar("RecordT", bound=DocumentModel)


class RecordStore(Generic[RecordT]):
    """
    Generic record façade. Subclasses set ``model`` and ``collection_name``.
    """

    model: ClassVar[Type[DocumentModel]]
    collection_name: ClassVar[str]

    def __init__(self, documents: DocumentStore):
        self.documents = documents

    async def create(self, record: RecordT) -> str:
        return await self.documents.insert_one(record.to_document())

    async def find_by_id(self, record_id: str) -> Optional[RecordT]:
        document = await self.documents.find_one(record_id)
        if document is None:
            return None
        return self.model.from_document(document)

    async def find_recent(self, limit: int = 50) -> List[RecordT]:
        documents = await self.documents.find(sort_field="created_at", descending=True, limit=limit)
        return [self.model.from_document(d) for d in documents]

    async def count(self) -> int:
        return await self.documents.count_documents()

    async def delete(self, record_id: str) -> bool:
        return await self.documents.delete_one(record_id)


class CompletionStore(RecordStore[AICompletion]):
    model = AICompletion
    collection_name = "ai_completions"


class TranscriptionStore(RecordStore[Transcription]):
    model = Transcription
    collection_name = "transcriptions"


class SttTranscriptionStore(RecordStore[SttTranscription]):
    model = SttTranscription
    collection_name = "stt_transcriptions"

    async def find_by_session(self, session_id: str, limit: int = 50) -> List[SttTranscription]:
        documents = await self.documents.find(
            filter={"session_id": session_id},
            sort_field="created_at",
            descending=True,
            limit=limit,
        )
        return [SttTranscription.from_document(d) for d in documents]

    async def count_by_session(self, session_id: str) -> int:
        return await self.documents.count_documents({"session_id": session_id})
