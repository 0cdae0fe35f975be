"""Feed model."""

import uuid

from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from devfeeds.database import Base
from devfeeds.models.mixins import TimestampMixin

STYLE_FIELDS = (
    "font_family",
    "font_color",
    "secondary_text_color",
    "card_bg_color",
    "card_border_color",
    "feed_bg_color",
    "button_color",
    "button_secondary_color",
)


class Feed(Base, TimestampMixin):
    """Owned content stream, addressed publicly by owner username and slug."""

    __tablename__ = "feeds"
    __table_args__ = (UniqueConstraint("owner_id", "slug", name="uq_feeds_owner_slug"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(String, nullable=True)
    slug = Column(String(255), nullable=False)

    # Styling
    font_family = Column(String(100), nullable=True)
    font_color = Column(String(7), nullable=True)
    secondary_text_color = Column(String(7), nullable=True)
    card_bg_color = Column(String(7), nullable=True)
    card_border_color = Column(String(7), nullable=True)
    feed_bg_color = Column(String(7), nullable=True)
    button_color = Column(String(7), nullable=True)
    button_secondary_color = Column(String(7), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="feeds")
    posts = relationship(
        "Post",
        back_populates="feed",
        cascade="all, delete-orphan",
        order_by="Post.created_at.desc()",
    )
