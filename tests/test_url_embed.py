"""URL embed classification tests."""

import pytest

from devfeeds.services.url_embed import EmbedKind, classify_url, is_valid_url

YOUTUBE_EMBED = "https://www.youtube.com/embed/dQw4w9WgXcQ"
YOUTUBE_THUMBNAIL = "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"


@pytest.mark.parametrize(
    "url",
    [
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42",
        "https://youtube.com/embed/dQw4w9WgXcQ",
    ],
)
def test_youtube(url):
    info = classify_url(url)
    assert info.kind == EmbedKind.YOUTUBE
    assert info.embed_url == YOUTUBE_EMBED
    assert info.thumbnail_url == YOUTUBE_THUMBNAIL


def test_youtube_without_video_id_is_link():
    info = classify_url("https://www.youtube.com/feed/subscriptions")
    assert info.kind == EmbedKind.LINK


def test_vimeo():
    info = classify_url("https://vimeo.com/76979871")
    assert info.kind == EmbedKind.VIDEO
    assert info.embed_url == "https://player.vimeo.com/video/76979871"
    assert info.thumbnail_url is None


@pytest.mark.parametrize(
    "url, kind",
    [
        ("https://cdn.example.com/cat.PNG", EmbedKind.IMAGE),
        ("https://cdn.example.com/a/b.webp?w=200", EmbedKind.IMAGE),
        ("https://cdn.example.com/clip.mp4", EmbedKind.VIDEO),
        ("https://cdn.example.com/clip.mov", EmbedKind.VIDEO),
        ("https://example.com/blog/post", EmbedKind.LINK),
    ],
)
def test_extensions_and_links(url, kind):
    info = classify_url(url)
    assert info.kind == kind
    assert info.embed_url == url


@pytest.mark.parametrize("url", ["not a url", "/relative/path.png", "", "http://[::1"])
def test_unknown(url):
    info = classify_url(url)
    assert info.kind == EmbedKind.UNKNOWN
    assert info.embed_url is None


def test_is_valid_url():
    assert is_valid_url("https://example.com")
    assert is_valid_url("http://example.com/a?b=c")
    assert not is_valid_url("ftp://example.com")
    assert not is_valid_url("example.com")
    assert not is_valid_url("javascript:alert(1)")


def test_embed_endpoint(client):
    response = client.get("/api/v1/embed", params={"url": "https://youtu.be/dQw4w9WgXcQ"})
    assert response.status_code == 200
    assert response.json() == {
        "kind": "youtube",
        "embed_url": YOUTUBE_EMBED,
        "thumbnail_url": YOUTUBE_THUMBNAIL,
    }
