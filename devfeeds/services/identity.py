"""Session identity provider.

Browser sessions carry an HS256 JWT in a cookie whose ``sub`` claim is the
identity id. Tokens are minted by the hosted auth provider sharing
``JWT_SECRET``; ``create_session_token`` exists for development and tests.
"""

from collections.abc import Mapping
from datetime import timedelta

from jose import JWTError, jwt

from devfeeds.config import get_settings
from devfeeds.models.mixins import utcnow

settings = get_settings()


def create_session_token(identity_id: str) -> str:
    """Create a signed session token for an identity."""
    expire = utcnow() + timedelta(minutes=settings.session_expiration_minutes)
    to_encode = {
        "sub": identity_id,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> dict | None:
    """Decode and validate a session token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def get_current_session_identity(cookies: Mapping[str, str]) -> str | None:
    """Return the identity id bound to the request's session cookie, if any."""
    token = cookies.get(settings.session_cookie_name)
    if not token:
        return None

    payload = decode_session_token(token)
    if payload is None:
        return None

    identity_id = payload.get("sub")
    if not identity_id or not isinstance(identity_id, str):
        return None
    return identity_id
