"""Identity provider: Supabase Auth, or an in-memory stand-in for local runs."""

import logging
import secrets
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from printqueue.db.supabase_client import get_anon_supabase, get_supabase

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Credentials or token rejected by the identity provider."""


@dataclass
class AuthUser:
    id: str
    email: str = ""


@dataclass
class Session:
    access_token: str
    user: AuthUser


class IdentityProvider(ABC):

    @abstractmethod
    def user_for_token(self, token: str) -> AuthUser:
        """Resolve a bearer token. Raises AuthError when invalid."""
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> Session:
        ...

    @abstractmethod
    def sign_out(self, token: str) -> None:
        ...

    @abstractmethod
    def create_user(self, email: str, password: str) -> AuthUser:
        ...


class SupabaseIdentity(IdentityProvider):

    def user_for_token(self, token: str) -> AuthUser:
        try:
            response = get_anon_supabase().auth.get_user(token)
        except Exception as exc:
            raise AuthError("Invalid token") from exc
        if response is None or response.user is None:
            raise AuthError("Invalid token")
        return AuthUser(id=response.user.id, email=response.user.email or "")

    def sign_in(self, email: str, password: str) -> Session:
        try:
            response = get_anon_supabase().auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as exc:
            raise AuthError("Invalid email or password") from exc
        if response.session is None or response.user is None:
            raise AuthError("Invalid email or password")
        return Session(
            access_token=response.session.access_token,
            user=AuthUser(id=response.user.id, email=response.user.email or email),
        )

    def sign_out(self, token: str) -> None:
        try:
            get_supabase().auth.admin.sign_out(token)
        except Exception as exc:
            raise AuthError("Invalid token") from exc

    def create_user(self, email: str, password: str) -> AuthUser:
        try:
            response = get_supabase().auth.admin.create_user(
                {"email": email, "password": password, "email_confirm": True}
            )
        except Exception as exc:
            raise AuthError(f"Could not create user {email}: {exc}") from exc
        logger.info("Created auth user %s", response.user.id)
        return AuthUser(id=response.user.id, email=email)


class MemoryIdentity(IdentityProvider):
    """Plain-text credentials and random tokens, for local development and tests."""

    def __init__(self):
        self._users: Dict[str, Tuple[AuthUser, str]] = {}
        self._tokens: Dict[str, str] = {}

    def _by_email(self, email: str) -> Optional[Tuple[AuthUser, str]]:
        for user, password in self._users.values():
            if user.email.lower() == email.lower():
                return user, password
        return None

    def user_for_token(self, token: str) -> AuthUser:
        user_id = self._tokens.get(token)
        if user_id is None or user_id not in self._users:
            raise AuthError("Invalid token")
        return self._users[user_id][0]

    def sign_in(self, email: str, password: str) -> Session:
        found = self._by_email(email)
        if found is None or found[1] != password:
            raise AuthError("Invalid email or password")
        token = secrets.token_urlsafe(24)
        self._tokens[token] = found[0].id
        return Session(access_token=token, user=found[0])

    def sign_out(self, token: str) -> None:
        self._tokens.pop(token, None)

    def create_user(self, email: str, password: str) -> AuthUser:
        if self._by_email(email) is not None:
            raise AuthError(f"User {email} already exists")
        user = AuthUser(id=str(uuid.uuid4()), email=email)
        self._users[user.id] = (user, password)
        return user
