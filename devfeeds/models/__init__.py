"""SQLAlchemy models."""

from devfeeds.models.api_key import ApiKey
from devfeeds.models.feed import Feed
from devfeeds.models.post import Post
from devfeeds.models.user import User

__all__ = [
    "User",
    "Feed",
    "Post",
    "ApiKey",
]
