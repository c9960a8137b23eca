"""Credential checks and role lookup."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from research_assistant.models import User, UserRole

logger = logging.getLogger(__name__)

Role = Literal["guest", "user", "admin"]

GUEST_USERNAME = "Guest"
_HASH_ITERATIONS = 200_000


class AuthenticationError(RuntimeError):
    """Raised when a username/password pair does not match a stored user."""


@dataclass(frozen=True)
class Identity:
    """The caller on whose behalf a request runs."""

    id: Optional[str]
    username: str
    role: Role

    @property
    def is_guest(self) -> bool:
        return self.role == "guest"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


GUEST = Identity(id=None, username=GUEST_USERNAME, role="guest")


def hash_password(password: str, *, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _HASH_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition("$")
    if not expected:
        return False
    candidate = hash_password(password, salt=salt).partition("$")[2]
    return hmac.compare_digest(candidate, expected)


def is_admin(db: Session, user_id: str) -> bool:
    stmt = select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == "admin").limit(1)
    return db.execute(stmt).first() is not None


def identity_for(db: Session, user: User) -> Identity:
    role: Role = "admin" if is_admin(db, user.id) else "user"
    return Identity(id=user.id, username=user.username, role=role)


def authenticate(db: Session, username: str, password: str) -> Identity:
    """Return the identity for valid credentials or raise :class:`AuthenticationError`."""

    username = username.strip()
    if not username or not password:
        raise ValueError("Username and password are required")

    logger.info("Authenticating user: %s", username)
    user = db.execute(select(User).where(User.username == username)).scalar_one_or_none()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Authentication failed for %s", username)
        raise AuthenticationError("Invalid username or password")

    identity = identity_for(db, user)
    logger.info("User %s authenticated with role %s", user.id, identity.role)
    return identity


def resolve_identity(db: Session, user_id: Optional[str]) -> Identity:
    """Map a client supplied user id onto an identity; ``None`` means guest."""

    if not user_id:
        return GUEST
    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Unknown user")
    return identity_for(db, user)


def create_user(db: Session, username: str, password: str, *, roles: Iterable[str] = ()) -> User:
    """Store a new user with the given roles and return it."""

    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    db.flush()
    for role in roles:
        db.add(UserRole(user_id=user.id, role=role))
    db.commit()
    return user
