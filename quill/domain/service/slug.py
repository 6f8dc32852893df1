"""Slug derivation."""

import re
import unicodedata

from quill.domain.value import PostId, Slug

MAX_SLUG_LENGTH = 100


def slugify(text: str) -> str:
    """Convert text to URL-safe slug format.

    - Strips diacritics ("Crème Brûlée" -> "creme brulee")
    - Converts to lowercase
    - Drops punctuation ("don't" -> "dont")
    - Collapses whitespace and hyphen runs into single hyphens
    - Strips leading/trailing hyphens and truncates to 100 characters

    Args:
        text: Text to slugify

    Returns:
        Slug string (may be empty if text has no usable characters)
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    slug = re.sub(r"[^a-z0-9\s-]", "", ascii_text.lower())
    slug = re.sub(r"[\s-]+", "-", slug)
    return slug.strip("-")[:MAX_SLUG_LENGTH].strip("-")


def post_slug(title: str, post_id: PostId) -> Slug:
    """Derive a post slug from its title.

    Titles without any usable characters fall back to `post-<id prefix>`.
    """
    slug = slugify(title)
    if not slug:
        slug = f"post-{post_id.hex[:8]}"
    return Slug(slug)
