"""Render feeds as RSS 2.0, JSON Feed 1.1 and sitemaps.

Output depends only on its inputs, so identical data always renders to
identical bytes.
"""

import json
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from email.utils import format_datetime
from enum import Enum
from html import escape as escape_html

from devfeeds.models.feed import Feed
from devfeeds.models.mixins import as_utc
from devfeeds.models.post import Post

JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"
FEED_CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=86400"

TITLE_LENGTH = 100
SUMMARY_LENGTH = 500
DEFAULT_POST_TITLE = "Post"

# Uploaded media types are not tracked, so enclosures use fixed types
IMAGE_MIME_TYPE = "image/jpeg"
VIDEO_MIME_TYPE = "video/mp4"

# Characters outside the XML 1.0 Char production
_XML_INVALID_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")

_XML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


class FeedFormat(str, Enum):
    RSS = "rss"
    JSON_FEED = "jsonfeed"

    @property
    def media_type(self) -> str:
        if self is FeedFormat.RSS:
            return "application/rss+xml; charset=utf-8"
        return "application/json; charset=utf-8"


def escape_xml(value: str | None) -> str:
    """Escape text for XML element content and attribute values.

    Control characters XML cannot represent are dropped.
    """
    if not value:
        return ""
    return _XML_INVALID_CHARS.sub("", value).translate(_XML_ESCAPES)


def feed_url(feed: Feed, base_url: str) -> str:
    """Canonical public URL of a feed."""
    owner = feed.owner.username if feed.owner and feed.owner.username else feed.owner_id
    return f"{base_url.rstrip('/')}/feeds/{owner}/{feed.slug}"


def post_title(post: Post) -> str:
    return post.content[:TITLE_LENGTH] if post.content else DEFAULT_POST_TITLE


def _http_date(value: datetime) -> str:
    return format_datetime(as_utc(value), usegmt=True)


def _iso_date(value: datetime) -> str:
    return as_utc(value).isoformat()


def _summary(post: Post) -> str:
    # Caption-less link posts point readers at the link itself
    return (post.content or post.url or "")[:SUMMARY_LENGTH]


def _rss_item(post: Post, url: str) -> str:
    link = escape_xml(f"{url}#post-{post.id}")
    lines = [
        "    <item>",
        f"      <title>{escape_xml(post_title(post))}</title>",
        f"      <link>{link}</link>",
        f'      <guid isPermaLink="false">{link}</guid>',
        f"      <pubDate>{_http_date(post.created_at)}</pubDate>",
        f"      <description>{escape_xml(_summary(post))}</description>",
    ]
    if post.image_url:
        lines.append(
            f'      <enclosure url="{escape_xml(post.image_url)}" type="{IMAGE_MIME_TYPE}"/>'
        )
    if post.video_url:
        lines.append(
            f'      <enclosure url="{escape_xml(post.video_url)}" type="{VIDEO_MIME_TYPE}"/>'
        )
    lines.append("    </item>")
    return "\n".join(lines)


def render_rss(feed: Feed, posts: Sequence[Post], base_url: str) -> str:
    """Render a feed and its (already sorted and capped) posts as RSS 2.0."""
    url = feed_url(feed, base_url)
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/" '
        'xmlns:atom="http://www.w3.org/2005/Atom">',
        "  <channel>",
        f"    <title>{escape_xml(feed.title)}</title>",
        f"    <link>{escape_xml(url)}</link>",
        f"    <description>{escape_xml(feed.description or feed.title)}</description>",
        "    <language>en-us</language>",
        f"    <lastBuildDate>{_http_date(feed.updated_at)}</lastBuildDate>",
        f'    <atom:link href="{escape_xml(url)}/rss" rel="self" type="application/rss+xml"/>',
    ]
    lines.extend(_rss_item(post, url) for post in posts)
    lines.extend(["  </channel>", "</rss>", ""])
    return "\n".join(lines)


def _content_html(content: str) -> str:
    return f"<p>{escape_html(content).replace(chr(10), '<br>')}</p>"


def _json_item(post: Post, url: str) -> dict:
    item = {
        "id": post.id,
        "url": f"{url}#post-{post.id}",
        "title": post_title(post),
        "content_text": post.content or "",
    }
    if post.content:
        item["content_html"] = _content_html(post.content)
    item["date_published"] = _iso_date(post.created_at)
    item["date_modified"] = _iso_date(post.updated_at)

    attachments = []
    if post.image_url:
        item["image"] = post.image_url
        attachments.append(
            {"url": post.image_url, "mime_type": IMAGE_MIME_TYPE, "title": "Post image"}
        )
    if post.video_url:
        item["video"] = post.video_url
        attachments.append(
            {"url": post.video_url, "mime_type": VIDEO_MIME_TYPE, "title": "Post video"}
        )
    if post.url:
        item["external_url"] = post.url
    item["attachments"] = attachments
    return item


def build_json_feed(feed: Feed, posts: Sequence[Post], base_url: str) -> dict:
    """Build a JSON Feed 1.1 document as a dict."""
    url = feed_url(feed, base_url)
    author = feed.owner.username if feed.owner and feed.owner.username else feed.owner_id
    return {
        "version": JSON_FEED_VERSION,
        "title": feed.title,
        "description": feed.description or feed.title,
        "home_page_url": url,
        "feed_url": f"{url}/json",
        "language": "en",
        "author": {"name": author},
        "items": [_json_item(post, url) for post in posts],
    }


def render_json_feed(feed: Feed, posts: Sequence[Post], base_url: str) -> str:
    """Render a feed and its posts as a JSON Feed 1.1 document."""
    return json.dumps(build_json_feed(feed, posts, base_url), ensure_ascii=False, indent=2)


def render_feed(feed: Feed, posts: Sequence[Post], fmt: FeedFormat, base_url: str) -> str:
    """Render a feed in the requested syndication format."""
    if fmt is FeedFormat.RSS:
        return render_rss(feed, posts, base_url)
    return render_json_feed(feed, posts, base_url)


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime | None
    change_frequency: str
    priority: float


def render_sitemap(entries: Iterable[SitemapEntry]) -> str:
    """Render sitemap.xml."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
    ]
    for entry in entries:
        lines.append("  <url>")
        lines.append(f"    <loc>{escape_xml(entry.url)}</loc>")
        if entry.last_modified is not None:
            lines.append(f"    <lastmod>{_iso_date(entry.last_modified)}</lastmod>")
        lines.append(f"    <changefreq>{entry.change_frequency}</changefreq>")
        lines.append(f"    <priority>{entry.priority:.1f}</priority>")
        lines.append("  </url>")
    lines.extend(["</urlset>", ""])
    return "\n".join(lines)
