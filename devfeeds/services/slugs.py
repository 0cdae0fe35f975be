"""Feed slug derivation and per-owner allocation."""

import logging
import re
import unicodedata

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devfeeds.config import get_settings
from devfeeds.errors import ConflictError, SlugExhaustedError, ValidationError
from devfeeds.models.feed import Feed

logger = logging.getLogger(__name__)

FALLBACK_SLUG = "feed"
MAX_INSERT_ATTEMPTS = 5
SLUG_MAX_LENGTH = Feed.__table__.c.slug.type.length

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Derive a URL-safe slug from a title.

    "My Feed!!" -> "my-feed", "Café Olé" -> "cafe-ole". Titles without any
    latin letters or digits fall back to "feed".
    """
    decomposed = unicodedata.normalize("NFKD", title)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", stripped.lower()).strip("-")
    return slug or FALLBACK_SLUG


def slug_exists(db: Session, owner_id: str, slug: str) -> bool:
    return (
        db.query(Feed.id).filter(Feed.owner_id == owner_id, Feed.slug == slug).first()
        is not None
    )


def allocate_feed_slug(
    db: Session,
    owner_id: str,
    title: str,
    max_attempts: int | None = None,
) -> str:
    """Find an unused slug for the owner: the base slug, then base-1, base-2, ...

    The base is shortened so every candidate fits the slug column.
    """
    if max_attempts is None:
        max_attempts = get_settings().slug_max_attempts

    # Leave room for the longest counter suffix
    room = SLUG_MAX_LENGTH - len(f"-{max_attempts}")
    base = slugify(title)[:room].rstrip("-") or FALLBACK_SLUG
    if not slug_exists(db, owner_id, base):
        return base

    for counter in range(1, max_attempts + 1):
        candidate = f"{base}-{counter}"
        if not slug_exists(db, owner_id, candidate):
            return candidate

    raise SlugExhaustedError(base, max_attempts)


def create_feed(
    db: Session,
    owner_id: str,
    title: str,
    description: str | None = None,
) -> Feed:
    """Create a feed with a slug unique to its owner.

    The slug probe is only a fast path; the (owner_id, slug) unique constraint
    decides, and a concurrent insert of the same slug triggers a re-probe.
    """
    if not title or not title.strip():
        raise ValidationError("Title is required")

    for _ in range(MAX_INSERT_ATTEMPTS):
        slug = allocate_feed_slug(db, owner_id, title)
        feed = Feed(
            owner_id=owner_id,
            title=title,
            description=description or None,
            slug=slug,
        )
        db.add(feed)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(f"Slug '{slug}' taken concurrently for user {owner_id}, retrying")
            continue
        db.refresh(feed)
        logger.info(f"Created feed '{slug}' for user {owner_id}")
        return feed

    raise ConflictError("Could not allocate a unique slug for this feed")
