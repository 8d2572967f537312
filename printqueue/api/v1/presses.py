"""Presses API. Anyone signed in can read; admins manage."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, ConfigDict, Field, field_validator

from printqueue.api.v1.uploads import store_image
from printqueue.auth.supabase_auth import get_current_user, require_admin
from printqueue.board.engine import press_sort_key
from printqueue.board.models import Press, UserProfile
from printqueue.board.snapshots import load_presses, utcnow
from printqueue.deps import get_blob_storage, get_store
from printqueue.storage.blob_storage import PRESS_IMAGES, BlobStorage
from printqueue.store.base import PRESSES, DocumentNotFound, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_PRESS_TYPE = "Jet Press"


class PressIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = ""
    press_type: str = Field(DEFAULT_PRESS_TYPE, alias="pressType")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Press name is required")
        return value

    @field_validator("description")
    @classmethod
    def _strip_description(cls, value: Optional[str]) -> str:
        return (value or "").strip()


@router.get("/presses")
async def list_presses(
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    presses = sorted(load_presses(store), key=press_sort_key)
    return {"presses": [p.to_document() for p in presses], "count": len(presses)}


@router.post("/presses", status_code=201)
async def create_press(
    payload: PressIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    now = utcnow().isoformat()
    data = {**payload.model_dump(by_alias=True), "imageUrl": None, "createdAt": now, "updatedAt": now}
    press_id = store.add(PRESSES, data)
    logger.info("Press %s (%s) created by %s", press_id, payload.name, admin.id)
    return Press.model_validate({"id": press_id, **data}).to_document()


@router.put("/presses/{press_id}")
async def update_press(
    press_id: str,
    payload: PressIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    data = {**payload.model_dump(by_alias=True), "updatedAt": utcnow().isoformat()}
    try:
        updated = store.update(PRESSES, press_id, data)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Press not found")
    logger.info("Press %s updated by %s", press_id, admin.id)
    return Press.model_validate(updated).to_document()


@router.delete("/presses/{press_id}", status_code=204)
async def delete_press(
    press_id: str,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    """Delete a press. Its jobs keep their pressId and show as Unassigned."""
    try:
        store.delete(PRESSES, press_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Press not found")
    logger.info("Press %s deleted by %s", press_id, admin.id)


@router.post("/presses/{press_id}/image")
async def upload_press_image(
    press_id: str,
    file: UploadFile = File(...),
    store: DocumentStore = Depends(get_store),
    blobs: BlobStorage = Depends(get_blob_storage),
    admin: UserProfile = Depends(require_admin),
):
    if store.get(PRESSES, press_id) is None:
        raise HTTPException(status_code=404, detail="Press not found")
    url = await store_image(blobs, PRESS_IMAGES, file)
    updated = store.update(PRESSES, press_id, {"imageUrl": url, "updatedAt": utcnow().isoformat()})
    return Press.model_validate(updated).to_document()
