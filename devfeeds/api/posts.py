"""Post API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from devfeeds.api.dependencies import get_current_user, get_owned_feed, get_owned_post
from devfeeds.database import get_db
from devfeeds.models.post import Post
from devfeeds.models.user import User
from devfeeds.schemas.post import PostCreate, PostResponse, PostUpdate
from devfeeds.services.post_body import apply_body, apply_changes, build_post_body

router = APIRouter(prefix="/api/v1/posts", tags=["posts"])


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a post in a feed the current user owns."""
    body = build_post_body(
        post_data.type,
        content=post_data.content,
        image_url=post_data.image_url,
        video_url=post_data.video_url,
        url=post_data.url,
    )
    feed = get_owned_feed(db, post_data.feed_id, current_user)

    post = Post(feed_id=feed.id)
    apply_body(post, body)
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


@router.patch("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Update a post. Omitted fields keep their current values."""
    post = get_owned_post(db, post_id, current_user)

    apply_changes(post, post_data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a post."""
    post = get_owned_post(db, post_id, current_user)

    db.delete(post)
    db.commit()
