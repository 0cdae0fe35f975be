"""Post API tests."""

import pytest


def create_post(client, headers, **fields):
    return client.post("/api/v1/posts", headers=headers, json=fields)


@pytest.mark.parametrize(
    "fields",
    [
        {"type": "text", "content": "Hello world"},
        {"type": "image", "image_url": "https://cdn.example.com/a.png", "content": "caption"},
        {"type": "video", "video_url": "https://cdn.example.com/a.mp4"},
        {"type": "url", "url": "https://example.com/article"},
    ],
)
def test_create_post_each_type(client, auth_headers, feed, fields):
    """Test creating each kind of post."""
    response = create_post(client, auth_headers, feed_id=feed["id"], **fields)
    assert response.status_code == 201
    data = response.json()
    assert data["type"] == fields["type"]
    assert data["feed_id"] == feed["id"]


@pytest.mark.parametrize(
    "fields",
    [
        {"type": "text"},
        {"type": "text", "content": ""},
        {"type": "image", "content": "caption only"},
        {"type": "video"},
        {"type": "url"},
    ],
)
def test_create_post_missing_required_field(client, auth_headers, feed, fields):
    """Test that each type requires its field."""
    response = create_post(client, auth_headers, feed_id=feed["id"], **fields)
    assert response.status_code == 400
    assert response.json()["kind"] == "validation_error"


def test_create_post_unknown_type(client, auth_headers, feed):
    """Test that unsupported types are rejected."""
    response = create_post(client, auth_headers, feed_id=feed["id"], type="audio", content="x")
    assert response.status_code == 400
    assert "Type must be one of" in response.json()["detail"]


def test_create_post_bad_url(client, auth_headers, feed):
    """Test that url posts need an absolute http(s) URL."""
    response = create_post(
        client, auth_headers, feed_id=feed["id"], type="url", url="javascript:alert(1)"
    )
    assert response.status_code == 400


def test_create_post_in_foreign_feed(client, other_headers, feed):
    """Test that posting into someone else's feed is forbidden."""
    response = create_post(client, other_headers, feed_id=feed["id"], type="text", content="hi")
    assert response.status_code == 403


def test_create_post_in_missing_feed(client, auth_headers):
    """Test posting to a feed that does not exist."""
    response = create_post(client, auth_headers, feed_id="nope", type="text", content="hi")
    assert response.status_code == 404


def test_update_post_content(client, auth_headers, feed):
    """Test updating a post's text."""
    post = create_post(client, auth_headers, feed_id=feed["id"], type="text", content="v1").json()

    response = client.patch(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"content": "v2"}
    )
    assert response.status_code == 200
    assert response.json()["content"] == "v2"


def test_update_keeps_existing_media(client, auth_headers, feed):
    """Test that an image post keeps its stored image when only the caption changes."""
    post = create_post(
        client,
        auth_headers,
        feed_id=feed["id"],
        type="image",
        image_url="https://cdn.example.com/a.png",
    ).json()

    response = client.patch(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"content": "new caption"}
    )
    assert response.status_code == 200
    assert response.json()["image_url"] == "https://cdn.example.com/a.png"
    assert response.json()["content"] == "new caption"


def test_update_to_image_without_image_url(client, auth_headers, feed):
    """Test switching to image without any image URL fails."""
    post = create_post(client, auth_headers, feed_id=feed["id"], type="text", content="x").json()

    response = client.patch(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"type": "image"}
    )
    assert response.status_code == 400

    # Post is unchanged
    response = client.get(f"/api/v1/feeds/{feed['id']}", headers=auth_headers)
    assert response.json()["posts"][0]["type"] == "text"


def test_update_clearing_required_field_fails(client, auth_headers, feed):
    """Test that clearing the required field is rejected."""
    post = create_post(
        client, auth_headers, feed_id=feed["id"], type="url", url="https://example.com"
    ).json()

    response = client.patch(f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"url": None})
    assert response.status_code == 400


def test_update_switch_type(client, auth_headers, feed):
    """Test changing a text post into a video post."""
    post = create_post(client, auth_headers, feed_id=feed["id"], type="text", content="x").json()

    response = client.patch(
        f"/api/v1/posts/{post['id']}",
        headers=auth_headers,
        json={"type": "video", "video_url": "https://cdn.example.com/v.webm"},
    )
    assert response.status_code == 200
    assert response.json()["type"] == "video"
    assert response.json()["video_url"] == "https://cdn.example.com/v.webm"


def test_update_post_forbidden(client, auth_headers, other_headers, feed):
    """Test ownership of posts follows the feed."""
    post = create_post(client, auth_headers, feed_id=feed["id"], type="text", content="x").json()

    response = client.patch(
        f"/api/v1/posts/{post['id']}", headers=other_headers, json={"content": "hijack"}
    )
    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden: You don't own this post"


def test_delete_post(client, auth_headers, other_headers, feed):
    """Test deleting a post."""
    post = create_post(client, auth_headers, feed_id=feed["id"], type="text", content="x").json()

    assert client.delete(f"/api/v1/posts/{post['id']}", headers=other_headers).status_code == 403
    assert client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers).status_code == 404
