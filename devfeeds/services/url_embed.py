"""Classify URLs for rich embedding.

Classification is purely pattern based: hosts and file extensions are
trusted and nothing is fetched.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from urllib.parse import parse_qs, urlsplit

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp")
VIDEO_EXTENSIONS = (".mp4", ".webm", ".ogg", ".mov", ".avi")


class EmbedKind(str, Enum):
    YOUTUBE = "youtube"
    VIDEO = "video"
    IMAGE = "image"
    LINK = "link"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class EmbedInfo:
    kind: EmbedKind
    embed_url: str | None = None
    thumbnail_url: str | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


def _youtube_video_id(hostname: str, path: str, query: str) -> str | None:
    if "youtu.be" in hostname:
        return path.lstrip("/") or None
    if path == "/watch":
        values = parse_qs(query).get("v")
        return values[0] if values and values[0] else None
    if path.startswith("/embed/"):
        return path.split("/embed/", 1)[1] or None
    return None


def classify_url(url: str) -> EmbedInfo:
    """Work out how a URL should be embedded. First matching rule wins."""
    try:
        parts = urlsplit(url)
        hostname = (parts.hostname or "").lower()
    except ValueError:
        return EmbedInfo(kind=EmbedKind.UNKNOWN)
    if not parts.scheme or not hostname:
        return EmbedInfo(kind=EmbedKind.UNKNOWN)

    if "youtube.com" in hostname or "youtu.be" in hostname:
        video_id = _youtube_video_id(hostname, parts.path, parts.query)
        if video_id:
            return EmbedInfo(
                kind=EmbedKind.YOUTUBE,
                embed_url=f"https://www.youtube.com/embed/{video_id}",
                thumbnail_url=f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg",
            )

    if "vimeo.com" in hostname:
        segments = [segment for segment in parts.path.split("/") if segment]
        if segments:
            return EmbedInfo(
                kind=EmbedKind.VIDEO,
                embed_url=f"https://player.vimeo.com/video/{segments[-1]}",
            )

    path = parts.path.lower()
    if path.endswith(IMAGE_EXTENSIONS):
        return EmbedInfo(kind=EmbedKind.IMAGE, embed_url=url)
    if path.endswith(VIDEO_EXTENSIONS):
        return EmbedInfo(kind=EmbedKind.VIDEO, embed_url=url)

    return EmbedInfo(kind=EmbedKind.LINK, embed_url=url)


def is_valid_url(url: str) -> bool:
    """Check that a string is an absolute http(s) URL."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)
