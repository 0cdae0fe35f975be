"""FastAPI dependencies for authentication, ownership and services."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from devfeeds.config import get_settings
from devfeeds.database import get_db
from devfeeds.errors import ForbiddenError, NotFoundError
from devfeeds.models.feed import Feed
from devfeeds.models.post import Post
from devfeeds.models.user import User
from devfeeds.services.credentials import ResolvedIdentity, resolve_credentials
from devfeeds.services.identity import get_current_session_identity
from devfeeds.services.ownership import Access, authorize_feed, authorize_post
from devfeeds.services.users import get_or_create_user


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_optional_identity(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> ResolvedIdentity | None:
    """Resolve the request's identity, or None for anonymous requests."""
    return resolve_credentials(db, request.headers.get("authorization"), request.cookies)


def get_current_identity(
    identity: Annotated[ResolvedIdentity | None, Depends(get_optional_identity)],
) -> ResolvedIdentity:
    """Require an authenticated identity (API key or session)."""
    if identity is None:
        raise unauthorized()
    return identity


def get_current_user(
    identity: Annotated[ResolvedIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current user, creating the record on first access."""
    return get_or_create_user(db, identity.identity_id)


def get_session_user(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Require a browser session; API keys cannot manage themselves."""
    identity_id = get_current_session_identity(request.cookies)
    if identity_id is None:
        raise unauthorized()
    return get_or_create_user(db, identity_id)


def raise_for_access(access: Access, resource_name: str) -> None:
    """Translate a denied ownership check into an HTTP error."""
    if access == Access.ALLOWED:
        return
    if access == Access.NOT_FOUND or get_settings().hide_forbidden_resources:
        raise NotFoundError(f"{resource_name} not found")
    raise ForbiddenError(f"Forbidden: You don't own this {resource_name.lower()}")


def get_owned_feed(db: Session, feed_id: str, user: User) -> Feed:
    """Get a feed the user owns."""
    access, feed = authorize_feed(db, user.id, feed_id)
    raise_for_access(access, "Feed")
    return feed


def get_owned_post(db: Session, post_id: str, user: User) -> Post:
    """Get a post in a feed the user owns."""
    access, post = authorize_post(db, user.id, post_id)
    raise_for_access(access, "Post")
    return post

