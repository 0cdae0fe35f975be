"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devfeeds.api.dependencies import get_current_identity
from devfeeds.database import get_db
from devfeeds.schemas.user import MeResponse, UserResponse
from devfeeds.services.credentials import ResolvedIdentity
from devfeeds.services.users import get_or_create_user

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/me", response_model=MeResponse)
def get_me(
    identity: Annotated[ResolvedIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get the current user and how the request authenticated."""
    user = get_or_create_user(db, identity.identity_id)
    return MeResponse(user=UserResponse.model_validate(user), method=identity.method.value)
