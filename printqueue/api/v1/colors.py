"""Ink colors API."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from printqueue.auth.supabase_auth import get_current_user, require_admin
from printqueue.board.models import Color, UserProfile
from printqueue.board.snapshots import utcnow
from printqueue.deps import get_store
from printqueue.store.base import COLORS, DocumentNotFound, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


class ColorIn(BaseModel):
    name: str = Field(min_length=1)
    hex: str = Field(pattern=r"^#[0-9A-Fa-f]{6}$")


@router.get("/colors")
async def list_colors(
    store: DocumentStore = Depends(get_store),
    user: UserProfile = Depends(get_current_user),
):
    colors = [Color.model_validate(d) for d in store.list(COLORS)]
    colors.sort(key=lambda c: (c.name.casefold(), c.id))
    return {"colors": [c.to_document() for c in colors], "count": len(colors)}


@router.post("/colors", status_code=201)
async def create_color(
    payload: ColorIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    now = utcnow().isoformat()
    data = {**payload.model_dump(), "createdAt": now, "updatedAt": now}
    color_id = store.add(COLORS, data)
    logger.info("Color %s (%s) added by %s", color_id, payload.name, admin.id)
    return Color.model_validate({"id": color_id, **data}).to_document()


@router.put("/colors/{color_id}")
async def update_color(
    color_id: str,
    payload: ColorIn,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    try:
        updated = store.update(COLORS, color_id, {**payload.model_dump(), "updatedAt": utcnow().isoformat()})
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Color not found")
    return Color.model_validate(updated).to_document()


@router.delete("/colors/{color_id}", status_code=204)
async def delete_color(
    color_id: str,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    try:
        store.delete(COLORS, color_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="Color not found")
    logger.info("Color %s deleted by %s", color_id, admin.id)
