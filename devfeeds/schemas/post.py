"""Post schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from devfeeds.schemas.embed import EmbedResponse


class PostCreate(BaseModel):
    """Create a post in a feed.

    Which fields are required depends on ``type``: text needs ``content``,
    image needs ``image_url``, video needs ``video_url``, url needs ``url``.
    """

    feed_id: str
    type: str = Field(..., max_length=10)  # 'text', 'image', 'video', 'url'
    content: str | None = Field(None, max_length=10000)
    image_url: str | None = Field(None, max_length=2048)
    video_url: str | None = Field(None, max_length=2048)
    url: str | None = Field(None, max_length=2048)


class PostUpdate(BaseModel):
    """Update a post. Only fields present in the request are changed."""

    type: str | None = Field(None, max_length=10)
    content: str | None = Field(None, max_length=10000)
    image_url: str | None = Field(None, max_length=2048)
    video_url: str | None = Field(None, max_length=2048)
    url: str | None = Field(None, max_length=2048)


class PostResponse(BaseModel):
    """Post response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    feed_id: str
    type: str
    content: str | None
    image_url: str | None
    video_url: str | None
    url: str | None
    created_at: datetime
    updated_at: datetime


class PublicPostResponse(PostResponse):
    """Post as shown on a public feed page."""

    embed: EmbedResponse | None = None
