"""Normalization of loosely-typed post submissions.

Browsers and API clients submit posts as multipart forms or JSON, so the
same field can arrive in several shapes:

- categories/tags: a real list, a JSON-encoded array string, a bare id
  string, or nothing at all
- isPremium/published: a native bool or the text "true"/"false"
- content/markdown: either one, both, or neither

Everything here is a pure function so the rules can be tested without HTTP.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from quill.domain.error import ValidationError

# Wire field name -> submission attribute
FIELD_ALIASES: dict[str, str] = {
    "title": "title",
    "content": "content",
    "markdown": "markdown",
    "categories": "categories",
    "tags": "tags",
    "isPremium": "is_premium",
    "is_premium": "is_premium",
    "published": "published",
    "postType": "post_type",
    "post_type": "post_type",
    "coverImage": "cover_image",
    "cover_image": "cover_image",
}


class NormalizedSubmission(BaseModel):
    """Canonical form of a post submission.

    Attributes left as None were not supplied. Create fills them with
    defaults; update leaves the stored value untouched.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    markdown: Optional[str] = None
    category_ids: Optional[list[UUID]] = None
    tag_ids: Optional[list[UUID]] = None
    is_premium: Optional[bool] = None
    published: Optional[bool] = None
    post_type: Optional[str] = None
    cover_image: Optional[str] = None  # "" asks to remove the cover


def _as_sequence(raw: Any) -> list[Any]:
    if raw is None:
        return []
    if isinstance(raw, str):
        if not raw.strip():
            return []
        try:
            parsed = json.loads(raw)
        except ValueError:
            return [raw]
        if isinstance(parsed, list):
            return parsed
        return [parsed]
    if isinstance(raw, Sequence) and not isinstance(raw, (bytes, bytearray)):
        return list(raw)
    return [raw]


def _as_uuid(value: Any) -> Optional[UUID]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value).strip())
    except ValueError:
        return None


def normalize_reference_list(raw: Any) -> list[UUID]:
    """Turn any supported shape of a multi-valued reference field into ids.

    - list/tuple: used as-is
    - string holding a JSON array: the parsed array
    - string holding a JSON scalar, or failing to parse: one element
    - None or blank string: empty

    Elements that are not valid identifiers are dropped silently and
    duplicates are collapsed, keeping first-seen order.

    Args:
        raw: Field value exactly as submitted

    Returns:
        Ordered, de-duplicated identifiers
    """
    seen: set[UUID] = set()
    ids: list[UUID] = []
    for element in _as_sequence(raw):
        ref = _as_uuid(element)
        if ref is None or ref in seen:
            continue
        seen.add(ref)
        ids.append(ref)
    return ids


def normalize_flag(raw: Any) -> bool:
    """Normalize a boolean-ish field.

    Only a native True or the text "true" (any case, surrounding whitespace
    ignored) yields True.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() == "true"
    return False


def normalize_text(raw: Any) -> Optional[str]:
    """Normalize a free-text field; None when absent."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    return str(raw)


def normalize_submission(
    fields: Mapping[str, Any], partial: bool = False
) -> NormalizedSubmission:
    """Normalize raw submitted fields into a canonical submission.

    Args:
        fields: Raw field values keyed by wire or attribute name
        partial: True for updates, where absent fields stay None

    Returns:
        Normalized submission
    """
    values: dict[str, Any] = {}
    for key, value in fields.items():
        attr = FIELD_ALIASES.get(key)
        if attr is not None and value is not None:
            values[attr] = value

    def supplied(attr: str) -> bool:
        return attr in values

    submission = NormalizedSubmission(
        title=normalize_text(values.get("title")),
        content=normalize_text(values.get("content")),
        markdown=normalize_text(values.get("markdown")),
        post_type=normalize_text(values.get("post_type")),
        cover_image=normalize_text(values.get("cover_image")),
    )

    if supplied("categories") or not partial:
        submission.category_ids = normalize_reference_list(values.get("categories"))
    if supplied("tags") or not partial:
        submission.tag_ids = normalize_reference_list(values.get("tags"))
    if supplied("is_premium") or not partial:
        submission.is_premium = normalize_flag(values.get("is_premium"))
    if supplied("published") or not partial:
        submission.published = normalize_flag(values.get("published"))

    if not partial:
        submission.content, submission.markdown = resolve_body(
            submission.content, submission.markdown
        )
        submission.post_type = submission.post_type or "article"

    return submission


def resolve_body(
    content: Optional[str], markdown: Optional[str]
) -> tuple[Optional[str], Optional[str]]:
    """Back-fill each body field from the other when one is empty.

    Whitespace-only bodies count as empty.
    """
    content = content if content and content.strip() else None
    markdown = markdown if markdown and markdown.strip() else None
    return (content or markdown, markdown or content)


def require_fields(submission: NormalizedSubmission) -> None:
    """Check the fields a new post cannot do without.

    Raises:
        ValidationError: Listing every missing field
    """
    missing = [
        name
        for name in ("title", "content", "markdown")
        if not (getattr(submission, name) or "").strip()
    ]
    if missing:
        raise ValidationError.missing_fields(missing)


def reject_blank_updates(submission: NormalizedSubmission) -> None:
    """Check that an update does not blank out a required field.

    Raises:
        ValidationError: Listing every supplied-but-empty field
    """
    blank = [
        name
        for name in ("title", "content", "markdown")
        if getattr(submission, name) is not None
        and not getattr(submission, name).strip()
    ]
    if blank:
        raise ValidationError(
            f"Fields cannot be empty: {', '.join(blank)}", fields=blank
        )
