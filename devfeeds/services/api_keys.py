"""API key lifecycle: issue, validate and rotate bearer credentials."""

import logging
import secrets

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from devfeeds.errors import ConflictError
from devfeeds.models.api_key import ApiKey
from devfeeds.models.mixins import utcnow

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "df_"
MAX_CREATE_ATTEMPTS = 3


def generate_api_key_token() -> str:
    """Generate a fresh opaque, URL-safe token."""
    return f"{API_KEY_PREFIX}{secrets.token_urlsafe(32)}"


def get_api_key_for_owner(db: Session, owner_id: str) -> ApiKey | None:
    """Get the live API key for an owner."""
    return db.query(ApiKey).filter(ApiKey.owner_id == owner_id).first()


def get_or_create_api_key(db: Session, owner_id: str) -> ApiKey:
    """Return the owner's API key, creating one if they have none."""
    api_key = get_api_key_for_owner(db, owner_id)
    if api_key:
        return api_key

    for _ in range(MAX_CREATE_ATTEMPTS):
        api_key = ApiKey(owner_id=owner_id, key=generate_api_key_token())
        db.add(api_key)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            # Either a concurrent request created the owner's key, or the token collided
            existing = get_api_key_for_owner(db, owner_id)
            if existing:
                return existing
            continue
        db.refresh(api_key)
        logger.info(f"Created API key for user {owner_id}")
        return api_key

    raise ConflictError("Could not generate a unique API key")


def validate_api_key(db: Session, token: str) -> ApiKey | None:
    """Look up an API key by token and record its use.

    Returns None for unknown tokens. Updating ``last_used_at`` is best effort:
    a failed write is logged and does not reject the request.
    """
    if not token:
        return None

    api_key = db.query(ApiKey).filter(ApiKey.key == token).first()
    if not api_key:
        return None

    api_key.last_used_at = utcnow()
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning(f"Failed to record API key usage for user {api_key.owner_id}: {e}")
    return api_key


def regenerate_api_key(db: Session, owner_id: str) -> ApiKey:
    """Replace the owner's API key with a new one.

    The delete and insert commit together, so the owner never ends up with
    zero or two keys. The previous token stops working immediately.
    """
    for _ in range(MAX_CREATE_ATTEMPTS):
        db.query(ApiKey).filter(ApiKey.owner_id == owner_id).delete()
        db.flush()

        api_key = ApiKey(owner_id=owner_id, key=generate_api_key_token())
        db.add(api_key)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            continue
        db.refresh(api_key)
        logger.info(f"Regenerated API key for user {owner_id}")
        return api_key

    raise ConflictError("Could not generate a unique API key")
