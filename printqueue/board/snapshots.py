"""Read current collection snapshots as typed records."""

from datetime import datetime, timezone
from typing import List

from printqueue.board.models import AppSettings, Job, Press
from printqueue.store.base import JOBS, PRESSES, SETTINGS, DocumentStore

APP_SETTINGS_ID = "app"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def load_jobs(store: DocumentStore) -> List[Job]:
    return [Job.model_validate(doc) for doc in store.list(JOBS)]


def load_presses(store: DocumentStore) -> List[Press]:
    return [Press.model_validate(doc) for doc in store.list(PRESSES)]


def load_settings(store: DocumentStore, create_missing: bool = False) -> AppSettings:
    """Read ``settings/app``, falling back to defaults.

    With ``create_missing`` the defaults are written back so admins edit a
    real document.
    """
    doc = store.get(SETTINGS, APP_SETTINGS_ID)
    if doc is not None:
        return AppSettings.model_validate({k: v for k, v in doc.items() if k != "id"})
    defaults = AppSettings()
    if create_missing:
        store.set(SETTINGS, APP_SETTINGS_ID, defaults.model_dump(by_alias=True))
    return defaults
