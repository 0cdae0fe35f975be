"""Feed API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload

from devfeeds.api.dependencies import get_current_user, get_owned_feed
from devfeeds.database import get_db
from devfeeds.models.feed import STYLE_FIELDS, Feed
from devfeeds.models.user import User
from devfeeds.schemas.feed import (
    FeedCreate,
    FeedResponse,
    FeedStylesUpdate,
    FeedWithPostsResponse,
)
from devfeeds.services.slugs import create_feed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/feeds", tags=["feeds"])


def feed_response(feed: Feed, response_model=FeedResponse):
    """Build a feed response including the owner's username."""
    response = response_model.model_validate(feed)
    response.username = feed.owner.username if feed.owner else None
    return response


@router.get("", response_model=list[FeedWithPostsResponse])
def get_feeds(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all feeds owned by the current user, newest first, with their posts."""
    feeds = (
        db.query(Feed)
        .options(selectinload(Feed.posts))
        .filter(Feed.owner_id == current_user.id)
        .order_by(Feed.created_at.desc())
        .all()
    )
    return [feed_response(feed, FeedWithPostsResponse) for feed in feeds]


@router.post("", response_model=FeedResponse, status_code=status.HTTP_201_CREATED)
def create(
    feed_data: FeedCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new feed. The slug is derived from the title."""
    feed = create_feed(db, current_user.id, feed_data.title, feed_data.description)
    return feed_response(feed)


@router.get("/{feed_id}", response_model=FeedWithPostsResponse)
def get_feed(
    feed_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get one of the current user's feeds."""
    feed = get_owned_feed(db, feed_id, current_user)
    return feed_response(feed, FeedWithPostsResponse)


@router.patch("/{feed_id}/styles", response_model=FeedResponse)
def update_styles(
    feed_id: str,
    styles: FeedStylesUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace a feed's style settings."""
    feed = get_owned_feed(db, feed_id, current_user)

    for field in STYLE_FIELDS:
        setattr(feed, field, getattr(styles, field) or None)

    db.commit()
    db.refresh(feed)
    return feed_response(feed)


@router.delete("/{feed_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_feed(
    feed_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a feed and all of its posts."""
    feed = get_owned_feed(db, feed_id, current_user)

    db.delete(feed)
    db.commit()
    logger.info(f"Deleted feed {feed_id} for user {current_user.id}")
