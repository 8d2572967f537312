"""First-run setup: create the initial admin and seed colors and presses."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from printqueue.api.v1.users import UserCreate, create_profile
from printqueue.auth.identity import IdentityProvider
from printqueue.board.models import UserRole
from printqueue.board.snapshots import utcnow
from printqueue.deps import get_identity, get_store
from printqueue.store.base import COLORS, PRESSES, USERS, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_COLORS = [
    {"name": "Black", "hex": "#000000"},
    {"name": "White", "hex": "#FFFFFF"},
    {"name": "Red", "hex": "#FF0000"},
    {"name": "Blue", "hex": "#0000FF"},
    {"name": "Yellow", "hex": "#FFFF00"},
    {"name": "Green", "hex": "#008000"},
]

DEFAULT_PRESSES = [
    {"name": "Press 1", "description": "Main printing press"},
    {"name": "Press 2", "description": "Secondary printing press"},
]


class SetupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, alias="firstName")
    last_name: str = Field(min_length=1, alias="lastName")


def seed_defaults(store: DocumentStore) -> None:
    now = utcnow().isoformat()
    for color in DEFAULT_COLORS:
        store.add(COLORS, {**color, "createdAt": now})
    for press in DEFAULT_PRESSES:
        store.add(PRESSES, {**press, "createdAt": now})


@router.get("/setup")
async def setup_status(store: DocumentStore = Depends(get_store)):
    return {"setupRequired": store.is_empty(USERS)}


@router.post("/setup", status_code=201)
async def run_setup(
    payload: SetupRequest,
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity),
):
    """Only allowed while no users exist."""
    if not store.is_empty(USERS):
        raise HTTPException(status_code=409, detail="Setup already completed")

    admin = create_profile(store, identity, UserCreate(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=UserRole.ADMIN,
    ))
    seed_defaults(store)
    logger.info("Setup complete: admin %s created, defaults seeded", admin.id)
    return {"admin": admin.to_document()}
