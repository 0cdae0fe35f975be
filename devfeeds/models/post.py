"""Post model."""

import uuid

from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from devfeeds.database import Base
from devfeeds.models.mixins import TimestampMixin


class Post(Base, TimestampMixin):
    """A single content item inside a feed.

    Which of the nullable columns must be set depends on ``type``; see
    ``devfeeds.services.post_body``.
    """

    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    feed_id = Column(
        String(36), ForeignKey("feeds.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(10), nullable=False)  # 'text', 'image', 'video', 'url'
    content = Column(Text, nullable=True)
    image_url = Column(String(2048), nullable=True)
    video_url = Column(String(2048), nullable=True)
    url = Column(String(2048), nullable=True)

    # Relationships
    feed = relationship("Feed", back_populates="posts")
