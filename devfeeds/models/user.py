"""User model."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from devfeeds.database import Base
from devfeeds.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account holder, keyed by the identity provider's id."""

    __tablename__ = "users"

    id = Column(String(255), primary_key=True, index=True)
    # Stored lowercase; unique across all users
    username = Column(String(20), unique=True, nullable=True, index=True)
    last_username_change = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    feeds = relationship("Feed", back_populates="owner", cascade="all, delete-orphan")
    api_key = relationship(
        "ApiKey", back_populates="owner", uselist=False, cascade="all, delete-orphan"
    )
