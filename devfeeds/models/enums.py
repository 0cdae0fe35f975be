"""Enums for model fields."""

from enum import Enum


class PostType(str, Enum):
    """Kinds of post content."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    URL = "url"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
