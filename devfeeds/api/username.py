"""Username API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from devfeeds.api.dependencies import get_current_user, get_optional_identity
from devfeeds.database import get_db
from devfeeds.models.user import User
from devfeeds.schemas.user import UsernameAvailability, UsernameUpdate, UserResponse
from devfeeds.services.credentials import ResolvedIdentity
from devfeeds.services.usernames import (
    is_username_available,
    is_valid_username_format,
    set_username,
)

router = APIRouter(prefix="/api/v1/username", tags=["username"])


@router.get("", response_model=UsernameAvailability)
def check_username(
    username: Annotated[str, Query(min_length=1, max_length=255)],
    identity: Annotated[ResolvedIdentity | None, Depends(get_optional_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Check whether a username is free (or already the caller's own)."""
    if not is_valid_username_format(username):
        return UsernameAvailability(username=username, available=False, reason="invalid_format")

    requester_id = identity.identity_id if identity else None
    available = is_username_available(db, username, requester_id=requester_id)
    return UsernameAvailability(
        username=username.lower(),
        available=available,
        reason=None if available else "taken",
    )


@router.patch("", response_model=UserResponse)
def update_username(
    body: UsernameUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Change the current user's username, subject to the change cooldown."""
    return set_username(db, current_user.id, body.username)
