"""In-process document store for local development and tests.

Keeps every collection in a dict. No external dependencies needed.
"""

import copy
import uuid
from typing import Dict, List, Optional

from printqueue.store.base import Document, DocumentNotFound, DocumentStore, strip_id


class MemoryStore(DocumentStore):
    """Dict-backed store. Returns copies so callers can't mutate stored state."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}

    def _coll(self, collection: str) -> Dict[str, Document]:
        return self._collections.setdefault(collection, {})

    def list(self, collection: str) -> List[Document]:
        return [
            {"id": doc_id, **copy.deepcopy(data)}
            for doc_id, data in self._coll(collection).items()
        ]

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        data = self._coll(collection).get(doc_id)
        if data is None:
            return None
        return {"id": doc_id, **copy.deepcopy(data)}

    def add(self, collection: str, data: Document) -> str:
        doc_id = str(uuid.uuid4())
        self._coll(collection)[doc_id] = copy.deepcopy(strip_id(data))
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self._coll(collection)[doc_id] = copy.deepcopy(strip_id(data))

    def update(self, collection: str, doc_id: str, data: Document) -> Document:
        coll = self._coll(collection)
        if doc_id not in coll:
            raise DocumentNotFound(collection, doc_id)
        coll[doc_id].update(copy.deepcopy(strip_id(data)))
        return {"id": doc_id, **copy.deepcopy(coll[doc_id])}

    def delete(self, collection: str, doc_id: str) -> None:
        coll = self._coll(collection)
        if doc_id not in coll:
            raise DocumentNotFound(collection, doc_id)
        del coll[doc_id]
