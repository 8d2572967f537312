"""Backends shared by the API routers.

Set by main.py during lifespan; tests swap in the in-memory versions.
"""

from fastapi import HTTPException

from printqueue.auth.identity import IdentityProvider
from printqueue.storage.blob_storage import BlobStorage
from printqueue.store.base import DocumentStore

_store: DocumentStore | None = None
_blobs: BlobStorage | None = None
_identity: IdentityProvider | None = None


def configure(
    store: DocumentStore | None,
    blobs: BlobStorage | None,
    identity: IdentityProvider | None,
) -> None:
    global _store, _blobs, _identity
    _store = store
    _blobs = blobs
    _identity = identity


def get_store() -> DocumentStore:
    if _store is None:
        raise HTTPException(status_code=503, detail="Document store not initialized")
    return _store


def get_blob_storage() -> BlobStorage:
    if _blobs is None:
        raise HTTPException(status_code=503, detail="Blob storage not initialized")
    return _blobs


def get_identity() -> IdentityProvider:
    if _identity is None:
        raise HTTPException(status_code=503, detail="Identity provider not initialized")
    return _identity
