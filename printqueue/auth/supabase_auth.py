"""Bearer-token auth dependencies for FastAPI."""

import logging

from fastapi import Depends, Header, HTTPException

from printqueue.auth.identity import AuthError, AuthUser, IdentityProvider
from printqueue.board.models import UserProfile
from printqueue.deps import get_identity, get_store
from printqueue.store.base import USERS, DocumentStore

logger = logging.getLogger(__name__)


def bearer_token(authorization: str = Header(None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid token")
    return authorization.replace("Bearer ", "", 1)


async def verify_jwt(
    token: str = Depends(bearer_token),
    identity: IdentityProvider = Depends(get_identity),
) -> AuthUser:
    """Validate the JWT from the Authorization header.

    Returns the authenticated user.
    """
    try:
        return identity.user_for_token(token)
    except AuthError:
        raise HTTPException(status_code=401, detail="Invalid token")


async def get_current_user(
    user: AuthUser = Depends(verify_jwt),
    store: DocumentStore = Depends(get_store),
) -> UserProfile:
    """Load the caller's profile. Accounts without one are not let in."""
    doc = store.get(USERS, user.id)
    if doc is None:
        logger.warning("Authenticated user %s has no profile", user.id)
        raise HTTPException(status_code=403, detail="No profile for this account")
    return UserProfile.model_validate(doc)


async def require_admin(user: UserProfile = Depends(get_current_user)) -> UserProfile:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
