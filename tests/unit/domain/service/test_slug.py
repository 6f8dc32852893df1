"""Unit tests for slug derivation."""

from uuid import UUID

import pytest

from quill.domain.service.slug import post_slug, slugify
from quill.domain.value import PostId


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Hello World", "hello-world"),
        ("  Hello   World  ", "hello-world"),
        ("Don't Panic!", "dont-panic"),
        ("Crème Brûlée", "creme-brulee"),
        ("UI/UX Design", "uiux-design"),
        ("multiple---hyphens", "multiple-hyphens"),
        ("-leading and trailing-", "leading-and-trailing"),
        ("!!!", ""),
    ],
)
def test_slugify(text, expected):
    """Slugify lowercases, strips punctuation and collapses separators."""
    assert slugify(text) == expected


def test_slugify_truncates_to_100_characters():
    """Long titles are cut to 100 characters without a trailing hyphen."""
    slug = slugify("word " * 40)

    assert len(slug) <= 100
    assert not slug.endswith("-")


def test_post_slug_uses_title():
    post_id = PostId(UUID("12345678-1234-5678-1234-567812345678"))

    assert str(post_slug("Hello World", post_id)) == "hello-world"


def test_post_slug_falls_back_to_id_prefix():
    """Titles without usable characters fall back to the post id."""
    post_id = PostId(UUID("12345678-1234-5678-1234-567812345678"))

    assert str(post_slug("???", post_id)) == "post-12345678"
