"""
Document Model Base - shared mapping between pydantic models and stored documents.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type, TypeVar
from pydantic import BaseModel

DocumentT = TypeVar("DocumentT", bound="DocumentModel")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """
    A record persisted in a document collection.

    ``id`` is assigned by the store on insert and is never written into the
    document body; the store keeps it under its own key (``_id``).
    """
    id: Optional[str] = None

    def to_document(self) -> Dict[str, Any]:
        """Document body for insertion, without the id."""
        return self.model_dump(exclude={"id"})

    @classmethod
    def from_document(cls: Type[DocumentT], document: Dict[str, Any]) -> DocumentT:
        """Build a model from a stored document, mapping ``_id`` to ``id``."""
        data = dict(document)
        raw_id = data.pop("_id", None)
        if raw_id is not None:
            data["id"] = str(raw_id)
        return cls.model_validate(data)
