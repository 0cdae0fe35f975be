"""URL embed schemas."""

from pydantic import BaseModel


class EmbedResponse(BaseModel):
    """How a URL should be embedded."""

    kind: str
    embed_url: str | None = None
    thumbnail_url: str | None = None
