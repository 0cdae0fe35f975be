"""User lookup and get-or-create."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devfeeds.models.user import User

logger = logging.getLogger(__name__)


def get_user(db: Session, identity_id: str) -> User | None:
    """Get a user by identity id."""
    return db.query(User).filter(User.id == identity_id).first()


def get_or_create_user(db: Session, identity_id: str) -> User:
    """Get the user for an identity, creating the row on first access."""
    user = get_user(db, identity_id)
    if user:
        return user

    user = User(id=identity_id)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Created by a concurrent request
        db.rollback()
        return get_user(db, identity_id)

    db.refresh(user)
    logger.info(f"Created user record for identity {identity_id}")
    return user
