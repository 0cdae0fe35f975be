"""Username validation, availability and changes."""

import logging
import math
import re
from datetime import datetime, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devfeeds.config import get_settings
from devfeeds.errors import CooldownError, UsernameFormatError, UsernameTakenError
from devfeeds.models.mixins import as_utc, utcnow
from devfeeds.models.user import User
from devfeeds.services.users import get_or_create_user

logger = logging.getLogger(__name__)

# 3-20 characters, alphanumeric + dash/underscore
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{3,20}$")


def is_valid_username_format(username: str) -> bool:
    return bool(USERNAME_PATTERN.fullmatch(username or ""))


def normalize_username(username: str) -> str:
    return username.lower()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username, case-insensitively."""
    return db.query(User).filter(User.username == normalize_username(username)).first()


def is_username_available(db: Session, candidate: str, requester_id: str | None = None) -> bool:
    """Check whether a username can be claimed.

    A requester's own current username is always reported as available to them.
    """
    if not is_valid_username_format(candidate):
        return False

    holder = get_user_by_username(db, candidate)
    if holder is None:
        return True
    return requester_id is not None and holder.id == requester_id


def cooldown_remaining_days(
    last_change: datetime | None, now: datetime, cooldown_days: int
) -> int:
    """Whole days left before the username may change again (0 if allowed)."""
    if last_change is None:
        return 0
    remaining = as_utc(last_change) + timedelta(days=cooldown_days) - as_utc(now)
    if remaining <= timedelta(0):
        return 0
    return math.ceil(remaining / timedelta(days=1))


def set_username(
    db: Session,
    identity_id: str,
    candidate: str,
    now: datetime | None = None,
) -> User:
    """Change an identity's username.

    Raises:
        UsernameFormatError: candidate does not match USERNAME_PATTERN
        CooldownError: the username changed within the cooldown window
        UsernameTakenError: another identity holds the username
    """
    if not is_valid_username_format(candidate):
        raise UsernameFormatError(candidate)

    normalized = normalize_username(candidate)
    now = now or utcnow()
    user = get_or_create_user(db, identity_id)

    if user.username == normalized:
        return user

    remaining = cooldown_remaining_days(
        user.last_username_change, now, get_settings().username_cooldown_days
    )
    if remaining:
        raise CooldownError(remaining)

    if not is_username_available(db, normalized, requester_id=identity_id):
        raise UsernameTakenError(normalized)

    previous = user.username
    user.username = normalized
    user.last_username_change = now
    try:
        db.commit()
    except IntegrityError:
        # Claimed by someone else between the check and the write
        db.rollback()
        raise UsernameTakenError(normalized) from None

    db.refresh(user)
    logger.info(f"User {identity_id} changed username from {previous!r} to {normalized!r}")
    return user
