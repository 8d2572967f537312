"""Supabase-backed document store.

Each collection is a table shaped ``(id text primary key, data jsonb)``, so
documents keep the free-form shape the front-end writes.
"""

import logging
import uuid
from typing import List, Optional

from supabase import Client

from printqueue.db.supabase_client import get_supabase
from printqueue.store.base import Document, DocumentNotFound, DocumentStore, strip_id

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000


def _flatten(row: dict) -> Document:
    return {"id": row["id"], **(row.get("data") or {})}


class SupabaseStore(DocumentStore):

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        # Resolved lazily so the app can start without credentials.
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def list(self, collection: str) -> List[Document]:
        # PostgREST caps rows per request, so read in id-ordered pages
        # until one comes back short.
        docs: List[Document] = []
        start = 0
        while True:
            response = (
                self.client.table(collection)
                .select("id, data")
                .order("id")
                .range(start, start + PAGE_SIZE - 1)
                .execute()
            )
            rows = response.data or []
            docs.extend(_flatten(row) for row in rows)
            if len(rows) < PAGE_SIZE:
                return docs
            start += PAGE_SIZE

    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        response = (
            self.client.table(collection)
            .select("id, data")
            .eq("id", doc_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _flatten(response.data[0])

    def add(self, collection: str, data: Document) -> str:
        doc_id = str(uuid.uuid4())
        self.client.table(collection).insert(
            {"id": doc_id, "data": strip_id(data)}
        ).execute()
        logger.debug("Inserted %s/%s", collection, doc_id)
        return doc_id

    def set(self, collection: str, doc_id: str, data: Document) -> None:
        self.client.table(collection).upsert(
            {"id": doc_id, "data": strip_id(data)}
        ).execute()

    def update(self, collection: str, doc_id: str, data: Document) -> Document:
        current = self.get(collection, doc_id)
        if current is None:
            raise DocumentNotFound(collection, doc_id)
        merged = {**strip_id(current), **strip_id(data)}
        self.client.table(collection).update({"data": merged}).eq("id", doc_id).execute()
        return {"id": doc_id, **merged}

    def delete(self, collection: str, doc_id: str) -> None:
        response = self.client.table(collection).delete().eq("id", doc_id).execute()
        if not response.data:
            raise DocumentNotFound(collection, doc_id)

    def is_empty(self, collection: str) -> bool:
        response = self.client.table(collection).select("id").limit(1).execute()
        return not response.data
