"""App-wide settings (the ``settings/app`` document)."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from printqueue.auth.supabase_auth import get_current_user, require_admin
from printqueue.board.models import AppSettings, UserProfile
from printqueue.board.snapshots import APP_SETTINGS_ID, load_settings
from printqueue.deps import get_store
from printqueue.store.base import SETTINGS, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/settings")
async def get_settings(
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    return load_settings(store, create_missing=True).model_dump(by_alias=True)


@router.patch("/settings")
async def update_settings(
    changes: Dict[str, Any],
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    """Merge the given keys into the settings document."""
    current = load_settings(store, create_missing=True).model_dump(by_alias=True)
    try:
        merged = AppSettings.model_validate({**current, **changes}).model_dump(by_alias=True)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))
    store.set(SETTINGS, APP_SETTINGS_ID, merged)
    logger.info("Settings updated by %s: %s", admin.id, sorted(changes))
    return merged
