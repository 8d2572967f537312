"""Session endpoints: sign in, sign out, who am I."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from printqueue.auth.identity import AuthError, IdentityProvider
from printqueue.auth.supabase_auth import bearer_token, get_current_user
from printqueue.board.models import UserProfile
from printqueue.deps import get_identity, get_store
from printqueue.store.base import USERS, DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/auth/login")
async def login(
    request: LoginRequest,
    identity: IdentityProvider = Depends(get_identity),
    store: DocumentStore = Depends(get_store),
):
    try:
        session = identity.sign_in(request.email, request.password)
    except AuthError:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    profile = store.get(USERS, session.user.id)
    if profile is None:
        # Accounts without a profile are signed straight back out.
        identity.sign_out(session.access_token)
        raise HTTPException(status_code=403, detail="No profile for this account")

    user = UserProfile.model_validate(profile)
    logger.info("User %s signed in", user.id)
    return {
        "access_token": session.access_token,
        "token_type": "bearer",
        "user": user.to_document(),
    }


@router.post("/auth/logout", status_code=204)
async def logout(
    token: str = Depends(bearer_token),
    identity: IdentityProvider = Depends(get_identity),
):
    try:
        identity.sign_out(token)
    except AuthError:
        raise HTTPException(status_code=401, detail="Invalid token")


@router.get("/auth/me")
async def me(user: UserProfile = Depends(get_current_user)):
    return {**user.to_document(), "isAdmin": user.is_admin}
