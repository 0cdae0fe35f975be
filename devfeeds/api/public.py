"""Public feed pages, syndication formats, sitemap and service info."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session, joinedload

from devfeeds.config import get_settings
from devfeeds.database import get_db
from devfeeds.errors import NotFoundError
from devfeeds.models.enums import PostType
from devfeeds.models.feed import Feed
from devfeeds.models.post import Post
from devfeeds.schemas.embed import EmbedResponse
from devfeeds.schemas.feed import FeedResponse
from devfeeds.schemas.post import PublicPostResponse
from devfeeds.services.syndication import (
    FEED_CACHE_CONTROL,
    FeedFormat,
    SitemapEntry,
    feed_url,
    render_feed,
    render_sitemap,
)
from devfeeds.services.url_embed import classify_url
from devfeeds.services.usernames import get_user_by_username
from devfeeds.services.users import get_user

router = APIRouter(tags=["public"])

SITEMAP_FEED_LIMIT = 1000


def get_public_feed(db: Session, username: str, slug: str) -> tuple[Feed, list[Post]]:
    """Look up a feed by owner username (or identity id) and slug with its most recent posts."""
    # Owners without a username are addressed by identity id
    user = get_user_by_username(db, username) or get_user(db, username)
    feed = None
    if user:
        feed = db.query(Feed).filter(Feed.owner_id == user.id, Feed.slug == slug).first()
    if not feed:
        raise NotFoundError("Feed not found")

    posts = (
        db.query(Post)
        .filter(Post.feed_id == feed.id)
        .order_by(Post.created_at.desc())
        .limit(get_settings().feed_item_limit)
        .all()
    )
    return feed, posts


def public_post(post: Post) -> PublicPostResponse:
    response = PublicPostResponse.model_validate(post)
    if post.type == PostType.URL.value and post.url:
        response.embed = EmbedResponse(**classify_url(post.url).to_dict())
    return response


@router.get("/feeds/{username}/{slug}")
def get_feed_page(
    username: str,
    slug: str,
    db: Annotated[Session, Depends(get_db)],
):
    """Public view of a feed with embed details for link posts."""
    feed, posts = get_public_feed(db, username, slug)
    settings = get_settings()

    feed_data = FeedResponse.model_validate(feed)
    feed_data.username = feed.owner.username
    url = feed_url(feed, settings.public_base_url)
    return {
        "feed": feed_data,
        "posts": [public_post(post) for post in posts],
        "links": {"html": url, "rss": f"{url}/rss", "json": f"{url}/json"},
    }


@router.get("/feeds/{username}/{slug}/rss")
def get_rss_feed(
    username: str,
    slug: str,
    db: Annotated[Session, Depends(get_db)],
):
    """RSS 2.0 feed."""
    feed, posts = get_public_feed(db, username, slug)
    body = render_feed(feed, posts, FeedFormat.RSS, get_settings().public_base_url)
    return Response(
        content=body,
        media_type=FeedFormat.RSS.media_type,
        headers={"Cache-Control": FEED_CACHE_CONTROL},
    )


@router.get("/feeds/{username}/{slug}/json")
def get_json_feed(
    username: str,
    slug: str,
    db: Annotated[Session, Depends(get_db)],
):
    """JSON Feed 1.1."""
    feed, posts = get_public_feed(db, username, slug)
    body = render_feed(feed, posts, FeedFormat.JSON_FEED, get_settings().public_base_url)
    return Response(
        content=body,
        media_type=FeedFormat.JSON_FEED.media_type,
        headers={"Cache-Control": FEED_CACHE_CONTROL},
    )


@router.get("/sitemap.xml")
def get_sitemap(db: Annotated[Session, Depends(get_db)]):
    """Sitemap of the static pages and the most recently updated feeds."""
    base_url = get_settings().public_base_url
    feeds = (
        db.query(Feed)
        .options(joinedload(Feed.owner))
        .order_by(Feed.updated_at.desc())
        .limit(SITEMAP_FEED_LIMIT)
        .all()
    )

    entries = [
        SitemapEntry(url=base_url, last_modified=None, change_frequency="daily", priority=1.0),
        SitemapEntry(
            url=f"{base_url}/docs", last_modified=None, change_frequency="weekly", priority=0.8
        ),
    ]
    entries.extend(
        SitemapEntry(
            url=feed_url(feed, base_url),
            last_modified=feed.updated_at,
            change_frequency="daily",
            priority=0.8,
        )
        for feed in feeds
    )
    return Response(
        content=render_sitemap(entries),
        media_type="application/xml",
        headers={"Cache-Control": FEED_CACHE_CONTROL},
    )


@router.get("/api/v1/embed", response_model=EmbedResponse)
def classify(url: Annotated[str, Query(min_length=1, max_length=2048)]):
    """Classify a URL for embedding."""
    return EmbedResponse(**classify_url(url).to_dict())


@router.get("/api/v1/info")
def get_info(response: Response):
    """Describe the service and its feed URL formats."""
    base_url = get_settings().public_base_url
    response.headers["Cache-Control"] = FEED_CACHE_CONTROL
    return {
        "name": "Dev Feeds",
        "description": "Developer-friendly feed hosting platform for creating and sharing "
        "content feeds",
        "api": {
            "baseUrl": f"{base_url}/api/v1",
            "documentation": f"{base_url}/docs",
            "authentication": "Bearer token (API key)",
        },
        "features": [
            "Create and manage multiple feeds",
            "Post text, images, videos, and URLs",
            "RESTful API for programmatic access",
            "Customizable feed styling",
            "RSS and JSON Feed support",
            "Public feed sharing",
        ],
        "feedFormats": {
            "rss": "/feeds/{username}/{slug}/rss",
            "json": "/feeds/{username}/{slug}/json",
        },
    }
