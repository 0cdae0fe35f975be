"""User, username and API key schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str | None
    last_username_change: datetime | None


class MeResponse(BaseModel):
    """Current identity and how it authenticated."""

    user: UserResponse
    method: str


class UsernameUpdate(BaseModel):
    """Change the current user's username."""

    username: str = Field(..., min_length=1, max_length=255)


class UsernameAvailability(BaseModel):
    """Username availability check result."""

    username: str
    available: bool
    reason: str | None = None


class ApiKeyResponse(BaseModel):
    """API key response."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    created_at: datetime
    last_used_at: datetime | None


class ApiKeyRegenerate(BaseModel):
    """Confirmation that the current key may be destroyed."""

    confirm: bool = False


class UploadResponse(BaseModel):
    """Public URL of an uploaded file."""

    url: str
