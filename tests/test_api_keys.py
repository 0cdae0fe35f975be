"""Tests for the API key lifecycle."""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from devfeeds.models.api_key import ApiKey
from devfeeds.models.user import User
from devfeeds.services.api_keys import (
    API_KEY_PREFIX,
    generate_api_key_token,
    get_or_create_api_key,
    regenerate_api_key,
    validate_api_key,
)


def make_user(db, identity_id="key-owner"):
    user = User(id=identity_id)
    db.add(user)
    db.commit()
    return user


def test_generated_tokens_are_prefixed_and_unique():
    """Test token format."""
    tokens = {generate_api_key_token() for _ in range(50)}
    assert len(tokens) == 50
    for token in tokens:
        assert token.startswith(API_KEY_PREFIX)
        assert " " not in token and "/" not in token and "+" not in token


def test_get_or_create_is_idempotent(db):
    """Test that repeated requests return the same key."""
    user = make_user(db)

    first = get_or_create_api_key(db, user.id)
    second = get_or_create_api_key(db, user.id)

    assert first.key == second.key
    assert db.query(ApiKey).filter(ApiKey.owner_id == user.id).count() == 1


def test_validate_unknown_token_returns_none(db):
    """Test that unknown tokens are not an error."""
    assert validate_api_key(db, "df_does-not-exist") is None
    assert validate_api_key(db, "") is None


def test_validate_records_last_used(db):
    """Test that validation stamps last_used_at."""
    user = make_user(db)
    api_key = get_or_create_api_key(db, user.id)
    assert api_key.last_used_at is None

    validated = validate_api_key(db, api_key.key)

    assert validated.owner_id == user.id
    assert validated.last_used_at is not None


def test_validate_survives_last_used_write_failure():
    """Test that a failed last_used_at write still authenticates."""
    api_key = ApiKey(owner_id="owner", key="df_token")
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = api_key
    db.commit.side_effect = OperationalError("UPDATE", {}, Exception("db down"))

    result = validate_api_key(db, "df_token")

    assert result is api_key
    db.rollback.assert_called_once()


def test_regenerate_invalidates_old_token(db):
    """Test that rotation revokes the previous token immediately."""
    user = make_user(db)
    old_token = get_or_create_api_key(db, user.id).key

    new_key = regenerate_api_key(db, user.id)
    new_token = new_key.key

    assert new_token != old_token
    assert validate_api_key(db, old_token) is None
    assert validate_api_key(db, new_token) is not None


def test_regenerate_twice_leaves_one_key(db):
    """Test that an owner never holds more than one key."""
    user = make_user(db)

    regenerate_api_key(db, user.id)
    assert db.query(ApiKey).filter(ApiKey.owner_id == user.id).count() == 1
    regenerate_api_key(db, user.id)
    assert db.query(ApiKey).filter(ApiKey.owner_id == user.id).count() == 1


def test_regenerate_without_existing_key(db):
    """Test that regenerating with no prior key creates one."""
    user = make_user(db)

    api_key = regenerate_api_key(db, user.id)

    assert api_key.key.startswith(API_KEY_PREFIX)


def test_get_api_key_endpoint(client, auth_headers):
    """Test fetching the API key over a session."""
    first = client.get("/api/v1/api-key", headers=auth_headers)
    second = client.get("/api/v1/api-key", headers=auth_headers)

    assert first.status_code == 200
    assert first.json()["key"] == second.json()["key"]


def test_api_key_cannot_manage_itself(client, api_key_headers):
    """Test that API key routes require a browser session."""
    assert client.get("/api/v1/api-key", headers=api_key_headers).status_code == 401
    response = client.post(
        "/api/v1/api-key/regenerate", headers=api_key_headers, json={"confirm": True}
    )
    assert response.status_code == 401


def test_regenerate_requires_confirmation(client, auth_headers, api_key_headers):
    """Test that rotation needs an explicit confirm flag."""
    response = client.post("/api/v1/api-key/regenerate", headers=auth_headers, json={})
    assert response.status_code == 400

    # Old key still works
    assert client.get("/api/v1/auth/me", headers=api_key_headers).status_code == 200


def test_regenerate_endpoint(client, auth_headers, api_key_headers):
    """Test rotating the key over HTTP."""
    response = client.post(
        "/api/v1/api-key/regenerate", headers=auth_headers, json={"confirm": True}
    )
    assert response.status_code == 200
    new_key = response.json()["key"]
    assert f"Bearer {new_key}" != api_key_headers["Authorization"]

    assert client.get("/api/v1/auth/me", headers=api_key_headers).status_code == 401
    response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {new_key}"})
    assert response.status_code == 200
