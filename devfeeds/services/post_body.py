"""Typed post bodies.

A post's columns are loose (every media field is nullable); these dataclasses
are the checked shape of each post type. ``build_post_body`` is the single
place the per-type required field is enforced, for creates and for updates
merged over the stored values.
"""

from dataclasses import dataclass

from devfeeds.errors import ValidationError
from devfeeds.models.enums import PostType
from devfeeds.models.post import Post
from devfeeds.services.url_embed import is_valid_url


@dataclass(frozen=True)
class TextBody:
    content: str


@dataclass(frozen=True)
class ImageBody:
    image_url: str
    caption: str | None = None


@dataclass(frozen=True)
class VideoBody:
    video_url: str
    caption: str | None = None


@dataclass(frozen=True)
class UrlBody:
    url: str
    caption: str | None = None


PostBody = TextBody | ImageBody | VideoBody | UrlBody


def _require_url(value: str | None, label: str, kind: PostType) -> str:
    if not value:
        raise ValidationError(f"{label} is required for {kind.value} posts")
    if not is_valid_url(value):
        raise ValidationError(f"{label} must be an absolute http(s) URL")
    return value


def build_post_body(
    post_type: str,
    content: str | None = None,
    image_url: str | None = None,
    video_url: str | None = None,
    url: str | None = None,
) -> PostBody:
    """Validate raw post fields into a typed body."""
    try:
        kind = PostType(post_type)
    except ValueError:
        allowed = ", ".join(f"'{value}'" for value in PostType.values())
        raise ValidationError(f"Type must be one of {allowed}") from None

    caption = content or None
    if kind == PostType.TEXT:
        if not content:
            raise ValidationError("Content is required for text posts")
        return TextBody(content=content)
    if kind == PostType.IMAGE:
        return ImageBody(image_url=_require_url(image_url, "Image URL", kind), caption=caption)
    if kind == PostType.VIDEO:
        return VideoBody(video_url=_require_url(video_url, "Video URL", kind), caption=caption)
    return UrlBody(url=_require_url(url, "URL", kind), caption=caption)


def body_from_post(post: Post, changes: dict) -> PostBody:
    """Merge requested changes over a stored post and validate the result.

    ``changes`` holds only the fields the caller sent; an explicit None clears
    a field.
    """
    merged = {
        "content": post.content,
        "image_url": post.image_url,
        "video_url": post.video_url,
        "url": post.url,
    }
    merged.update({key: value for key, value in changes.items() if key in merged})
    return build_post_body(changes.get("type") or post.type, **merged)


def apply_body(post: Post, body: PostBody) -> None:
    """Write a typed body onto a post's columns.

    Media fields belonging to other types are kept, so switching a post's type
    back and forth does not lose its uploads.
    """
    if isinstance(body, TextBody):
        post.type = PostType.TEXT.value
        post.content = body.content
    elif isinstance(body, ImageBody):
        post.type = PostType.IMAGE.value
        post.image_url = body.image_url
        post.content = body.caption
    elif isinstance(body, VideoBody):
        post.type = PostType.VIDEO.value
        post.video_url = body.video_url
        post.content = body.caption
    else:
        post.type = PostType.URL.value
        post.url = body.url
        post.content = body.caption


def apply_changes(post: Post, changes: dict) -> PostBody:
    """Validate and apply a partial update to a post.

    Nothing on the post is touched unless the merged result is valid.
    """
    body = body_from_post(post, changes)
    for field in ("image_url", "video_url", "url"):
        if field in changes:
            setattr(post, field, changes[field])
    apply_body(post, body)
    return body
