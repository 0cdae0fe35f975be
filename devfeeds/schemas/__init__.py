"""Pydantic schemas for API requests and responses."""

from devfeeds.schemas.embed import EmbedResponse
from devfeeds.schemas.feed import (
    FeedCreate,
    FeedResponse,
    FeedStylesUpdate,
    FeedWithPostsResponse,
)
from devfeeds.schemas.post import PostCreate, PostResponse, PostUpdate, PublicPostResponse
from devfeeds.schemas.user import (
    ApiKeyRegenerate,
    ApiKeyResponse,
    MeResponse,
    UploadResponse,
    UserResponse,
    UsernameAvailability,
    UsernameUpdate,
)

__all__ = [
    "EmbedResponse",
    "FeedCreate",
    "FeedStylesUpdate",
    "FeedResponse",
    "FeedWithPostsResponse",
    "PostCreate",
    "PostUpdate",
    "PostResponse",
    "PublicPostResponse",
    "UserResponse",
    "MeResponse",
    "UsernameUpdate",
    "UsernameAvailability",
    "ApiKeyResponse",
    "ApiKeyRegenerate",
    "UploadResponse",
]
