"""API key management endpoints (browser session only)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devfeeds.api.dependencies import get_session_user
from devfeeds.database import get_db
from devfeeds.errors import ValidationError
from devfeeds.models.user import User
from devfeeds.schemas.user import ApiKeyRegenerate, ApiKeyResponse
from devfeeds.services.api_keys import get_or_create_api_key, regenerate_api_key

router = APIRouter(prefix="/api/v1/api-key", tags=["api-key"])


@router.get("", response_model=ApiKeyResponse)
def get_api_key(
    current_user: Annotated[User, Depends(get_session_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current user's API key, creating it on first request."""
    return get_or_create_api_key(db, current_user.id)


@router.post("/regenerate", response_model=ApiKeyResponse)
def regenerate(
    body: ApiKeyRegenerate,
    current_user: Annotated[User, Depends(get_session_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace the API key. The old key stops working immediately."""
    if not body.confirm:
        raise ValidationError("Regenerating invalidates the current key; resend with confirm=true")
    return regenerate_api_key(db, current_user.id)
