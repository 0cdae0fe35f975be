"""Feed schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from devfeeds.schemas.post import PostResponse

HEX_COLOR_PATTERN = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


class FeedCreate(BaseModel):
    """Create a new feed."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)


class FeedStylesUpdate(BaseModel):
    """Replace a feed's style settings. Omitted fields are cleared."""

    font_family: str | None = Field(None, max_length=100)
    font_color: str | None = None
    secondary_text_color: str | None = None
    card_bg_color: str | None = None
    card_border_color: str | None = None
    feed_bg_color: str | None = None
    button_color: str | None = None
    button_secondary_color: str | None = None

    @field_validator(
        "font_color",
        "secondary_text_color",
        "card_bg_color",
        "card_border_color",
        "feed_bg_color",
        "button_color",
        "button_secondary_color",
    )
    @classmethod
    def validate_hex_color(cls, value: str | None, info: ValidationInfo) -> str | None:
        if not value:
            return None
        if not HEX_COLOR_PATTERN.match(value):
            name = info.field_name.replace("_", " ")
            raise ValueError(f"Invalid {name} format. Use hex format (e.g., #000000)")
        return value


class FeedResponse(BaseModel):
    """Feed response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    description: str | None
    slug: str
    font_family: str | None
    font_color: str | None
    secondary_text_color: str | None
    card_bg_color: str | None
    card_border_color: str | None
    feed_bg_color: str | None
    button_color: str | None
    button_secondary_color: str | None
    created_at: datetime
    updated_at: datetime
    username: str | None = None


class FeedWithPostsResponse(FeedResponse):
    """Feed response including its posts, newest first."""

    posts: list[PostResponse] = []
