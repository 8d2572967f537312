from __future__ import annotations

import io
import os
from typing import Callable, Dict, Iterator, Tuple

import pytest

os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("SUPABASE_URL", "")

from fastapi.testclient import TestClient
from PIL import Image

from printqueue import deps
from printqueue.auth.identity import MemoryIdentity
from printqueue.main import app
from printqueue.storage.blob_storage import MemoryBlobStorage
from printqueue.store.base import USERS
from printqueue.store.memory import MemoryStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def identity() -> MemoryIdentity:
    return MemoryIdentity()


@pytest.fixture
def blobs() -> MemoryBlobStorage:
    return MemoryBlobStorage()


@pytest.fixture
def client(store, identity, blobs) -> Iterator[TestClient]:
    """API client wired to in-memory backends (lifespan not run)."""
    deps.configure(store, blobs, identity)
    yield TestClient(app)
    deps.configure(None, None, None)


@pytest.fixture
def make_user(
    store: MemoryStore, identity: MemoryIdentity
) -> Callable[..., Tuple[str, Dict[str, str]]]:
    """Create an account with a profile. Returns (user id, auth headers)."""

    def _factory(role: str = "user", email: str | None = None) -> Tuple[str, Dict[str, str]]:
        email = email or f"{role}-{len(store.list(USERS))}@shop.test"
        account = identity.create_user(email, "secret-pass")
        store.set(USERS, account.id, {
            "firstName": role.title(),
            "lastName": "Tester",
            "email": email,
            "role": role,
        })
        session = identity.sign_in(email, "secret-pass")
        return account.id, {"Authorization": f"Bearer {session.access_token}"}

    return _factory


@pytest.fixture
def admin_headers(make_user) -> Dict[str, str]:
    _, headers = make_user("admin")
    return headers


@pytest.fixture
def user_headers(make_user) -> Dict[str, str]:
    _, headers = make_user("user")
    return headers


@pytest.fixture
def png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 3), (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()
