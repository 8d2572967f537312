"""User administration: accounts live in the identity provider, profiles in ``users``."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from printqueue.auth.identity import AuthError, IdentityProvider
from printqueue.auth.supabase_auth import require_admin
from printqueue.board.models import UserProfile, UserRole
from printqueue.board.snapshots import utcnow
from printqueue.deps import get_identity, get_store
from printqueue.store.base import USERS, DocumentNotFound, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    first_name: str = Field(min_length=1, alias="firstName")
    last_name: str = Field(min_length=1, alias="lastName")
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    role: Optional[UserRole] = None


def create_profile(
    store: DocumentStore,
    identity: IdentityProvider,
    payload: UserCreate,
) -> UserProfile:
    """Create the auth account and its profile document."""
    try:
        account = identity.create_user(payload.email, payload.password)
    except AuthError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    data = {
        "firstName": payload.first_name,
        "lastName": payload.last_name,
        "email": payload.email,
        "role": payload.role.value,
        "createdAt": utcnow().isoformat(),
    }
    store.set(USERS, account.id, data)
    return UserProfile.model_validate({"id": account.id, **data})


@router.get("/users")
async def list_users(
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    users = [UserProfile.model_validate(d) for d in store.list(USERS)]
    users.sort(key=lambda u: (u.last_name.casefold(), u.first_name.casefold(), u.id))
    return {"users": [u.to_document() for u in users], "count": len(users)}


@router.post("/users", status_code=201)
async def create_user(
    payload: UserCreate,
    store: DocumentStore = Depends(get_store),
    identity: IdentityProvider = Depends(get_identity),
    admin: UserProfile = Depends(require_admin),
):
    profile = create_profile(store, identity, payload)
    logger.info("User %s (%s) created by %s", profile.id, profile.role.value, admin.id)
    return profile.to_document()


@router.patch("/users/{user_id}")
async def update_user(
    user_id: str,
    payload: UserUpdate,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    changes = payload.model_dump(by_alias=True, exclude_none=True, mode="json")
    try:
        updated = store.update(USERS, user_id, changes)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("User %s updated by %s: %s", user_id, admin.id, sorted(changes))
    return UserProfile.model_validate(updated).to_document()


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    store: DocumentStore = Depends(get_store),
    admin: UserProfile = Depends(require_admin),
):
    """Remove the profile. The account can no longer get past sign-in."""
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")
    try:
        store.delete(USERS, user_id)
    except DocumentNotFound:
        raise HTTPException(status_code=404, detail="User not found")
    logger.info("User %s deleted by %s", user_id, admin.id)
