"""Ownership checks for feeds and posts."""

from enum import Enum

from sqlalchemy.orm import Session

from devfeeds.models.feed import Feed
from devfeeds.models.post import Post


class Access(str, Enum):
    """Outcome of an ownership check."""

    ALLOWED = "allowed"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


def authorize(identity_id: str, resource: Feed | Post | None) -> Access:
    """Check whether an identity may mutate a feed or post.

    Posts have no owner of their own; they belong to whoever owns their feed.
    """
    if resource is None:
        return Access.NOT_FOUND

    if isinstance(resource, Post):
        owner_id = resource.feed.owner_id
    elif isinstance(resource, Feed):
        owner_id = resource.owner_id
    else:
        raise TypeError(f"Cannot authorize {type(resource).__name__}")

    return Access.ALLOWED if owner_id == identity_id else Access.FORBIDDEN


def authorize_feed(db: Session, identity_id: str, feed_id: str) -> tuple[Access, Feed | None]:
    """Load a feed and check ownership."""
    feed = db.query(Feed).filter(Feed.id == feed_id).first()
    return authorize(identity_id, feed), feed


def authorize_post(db: Session, identity_id: str, post_id: str) -> tuple[Access, Post | None]:
    """Load a post and check ownership through its feed."""
    post = db.query(Post).filter(Post.id == post_id).first()
    return authorize(identity_id, post), post
