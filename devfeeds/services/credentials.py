"""Resolve the acting identity of a request from an API key or session cookie."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from devfeeds.services.api_keys import validate_api_key
from devfeeds.services.identity import get_current_session_identity


class AuthMethod(str, Enum):
    """How a request was authenticated."""

    API_KEY = "api_key"
    SESSION = "session"


@dataclass(frozen=True)
class ResolvedIdentity:
    identity_id: str
    method: AuthMethod


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer":
        return None
    token = token.strip()
    return token or None


def resolve_credentials(
    db: Session,
    authorization: str | None,
    cookies: Mapping[str, str],
) -> ResolvedIdentity | None:
    """Determine who is making a request.

    API keys are checked first. A missing, malformed or unknown bearer token
    falls through to the session cookie rather than failing. Returns None when
    neither authenticates; callers answer 401.
    """
    token = parse_bearer_token(authorization)
    if token:
        api_key = validate_api_key(db, token)
        if api_key:
            return ResolvedIdentity(identity_id=api_key.owner_id, method=AuthMethod.API_KEY)

    identity_id = get_current_session_identity(cookies)
    if identity_id:
        return ResolvedIdentity(identity_id=identity_id, method=AuthMethod.SESSION)

    return None
