"""Document store interface over the backend's collections."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

JOBS = "jobs"
PRESSES = "presses"
COLORS = "colors"
USERS = "users"
SETTINGS = "settings"

COLLECTIONS = (JOBS, PRESSES, COLORS, USERS, SETTINGS)

Document = Dict[str, Any]


class DocumentNotFound(LookupError):
    """Raised when updating or deleting a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore(ABC):
    """Abstract interface for collection storage (Supabase or in-memory).

    Documents come back flattened as ``{"id": ..., **fields}``.
    """

    @abstractmethod
    def list(self, collection: str) -> List[Document]:
        ...

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document or None."""
        ...

    @abstractmethod
    def add(self, collection: str, data: Document) -> str:
        """Insert with a generated id. Returns the id."""
        ...

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Document) -> None:
        """Create or replace a document under a known id."""
        ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: Document) -> Document:
        """Merge fields into an existing document. Returns the merged document."""
        ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        ...

    def is_empty(self, collection: str) -> bool:
        return not self.list(collection)


def strip_id(data: Document) -> Document:
    return {k: v for k, v in data.items() if k != "id"}
