"""Slug tests."""

import pytest

from devfeeds.errors import SlugExhaustedError, ValidationError
from devfeeds.services.slugs import (
    SLUG_MAX_LENGTH,
    allocate_feed_slug,
    create_feed,
    slugify,
)

pytestmark = pytest.mark.usefixtures("users")


@pytest.mark.parametrize(
    "title, expected",
    [
        ("My Feed!!", "my-feed"),
        ("  Hello   World  ", "hello-world"),
        ("Café Olé", "cafe-ole"),
        ("release_notes v2.0", "release-notes-v2-0"),
        ("!!!", "feed"),
        ("日本語", "feed"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_allocate_increments_counter(db):
    """Test that collisions append -1, -2, ..."""
    assert create_feed(db, "user-1", "Notes").slug == "notes"
    assert create_feed(db, "user-1", "Notes").slug == "notes-1"
    assert create_feed(db, "user-1", "notes").slug == "notes-2"
    assert create_feed(db, "user-2", "Notes").slug == "notes"


def test_allocate_exhausted(db):
    """Test that allocation gives up after the configured number of attempts."""
    create_feed(db, "user-1", "Notes")
    create_feed(db, "user-1", "Notes")
    create_feed(db, "user-1", "Notes")

    assert allocate_feed_slug(db, "user-1", "Notes", max_attempts=3) == "notes-3"
    with pytest.raises(SlugExhaustedError):
        allocate_feed_slug(db, "user-1", "Notes", max_attempts=2)


def test_create_feed_requires_title(db):
    with pytest.raises(ValidationError):
        create_feed(db, "user-1", "")


@pytest.mark.parametrize("title", ["a" * 255, "ﬃ" * 255, "x" * 241 + " y" * 7])
def test_long_titles_fit_slug_column(db, title):
    """Test that base and suffixed slugs never exceed the column length."""
    first = create_feed(db, "user-1", title)
    second = create_feed(db, "user-1", title)

    assert len(first.slug) <= SLUG_MAX_LENGTH
    assert len(second.slug) <= SLUG_MAX_LENGTH
    assert second.slug == f"{first.slug}-1"
    assert not first.slug.endswith("-")


def test_long_slug_leaves_room_for_counter(db):
    slug = allocate_feed_slug(db, "user-1", "b" * 300, max_attempts=1000)
    assert slug == "b" * (SLUG_MAX_LENGTH - len("-1000"))
