"""Unit tests for post submission normalization."""

from uuid import uuid4

import pytest

from quill.domain.error import ValidationError
from quill.domain.service.normalization import (
    normalize_flag,
    normalize_reference_list,
    normalize_submission,
    reject_blank_updates,
    require_fields,
    resolve_body,
)


class TestNormalizeReferenceList:
    """Tests for normalize_reference_list."""

    def test_list_is_used_as_is(self):
        """A real list keeps its elements and order."""
        a, b = uuid4(), uuid4()

        assert normalize_reference_list([str(a), str(b)]) == [a, b]

    def test_json_array_string_is_parsed(self):
        """A JSON-encoded array, as sent by multipart clients, is parsed."""
        a, b = uuid4(), uuid4()

        assert normalize_reference_list(f'["{a}", "{b}"]') == [a, b]

    def test_bare_id_string_becomes_single_element(self):
        """A plain id string is a one-element list."""
        a = uuid4()

        assert normalize_reference_list(str(a)) == [a]

    @pytest.mark.parametrize("raw", [None, "", "   ", [], "[]"])
    def test_absent_or_blank_is_empty(self, raw):
        """Missing and blank values normalize to an empty list."""
        assert normalize_reference_list(raw) == []

    def test_invalid_ids_are_dropped(self):
        """Elements that are not identifiers are dropped silently."""
        a = uuid4()

        assert normalize_reference_list(["not-an-id", str(a), 42, None]) == [a]

    def test_duplicates_collapse_keeping_first_order(self):
        """Duplicate ids appear once, in first-seen order."""
        a, b = uuid4(), uuid4()

        result = normalize_reference_list([str(b), str(a), str(b)])

        assert result == [b, a]


class TestNormalizeFlag:
    """Tests for normalize_flag."""

    @pytest.mark.parametrize("raw", [True, "true", "TRUE", " True "])
    def test_truthy_values(self, raw):
        """Native True and the text "true" in any case are true."""
        assert normalize_flag(raw) is True

    @pytest.mark.parametrize("raw", [False, "false", "yes", "1", "", None, 1])
    def test_everything_else_is_false(self, raw):
        """Only True and "true" count; everything else is false."""
        assert normalize_flag(raw) is False


class TestResolveBody:
    """Tests for resolve_body."""

    def test_markdown_fills_missing_content(self):
        assert resolve_body(None, "# Hi") == ("# Hi", "# Hi")

    def test_content_fills_missing_markdown(self):
        assert resolve_body("<p>Hi</p>", "") == ("<p>Hi</p>", "<p>Hi</p>")

    def test_both_supplied_are_kept(self):
        assert resolve_body("<p>Hi</p>", "Hi") == ("<p>Hi</p>", "Hi")

    def test_neither_supplied(self):
        assert resolve_body(None, None) == (None, None)

    def test_whitespace_content_is_filled_from_markdown(self):
        assert resolve_body("   ", "Hi") == ("Hi", "Hi")

    def test_whitespace_markdown_is_filled_from_content(self):
        assert resolve_body("<p>Hi</p>", "\n\t") == ("<p>Hi</p>", "<p>Hi</p>")

    def test_both_whitespace_count_as_missing(self):
        assert resolve_body(" ", " ") == (None, None)


class TestNormalizeSubmission:
    """Tests for normalize_submission."""

    def test_create_fills_defaults(self):
        """A create submission gets defaults for everything not supplied."""
        # Act
        submission = normalize_submission({"title": "Hello", "markdown": "# Hello"})

        # Assert
        assert submission.title == "Hello"
        assert submission.content == "# Hello"
        assert submission.markdown == "# Hello"
        assert submission.category_ids == []

    def test_create_with_blank_content_uses_markdown(self):
        submission = normalize_submission(
            {"title": "Blank Body", "content": "   ", "markdown": "Hi"}
        )

        require_fields(submission)
        assert submission.content == "Hi"
        assert submission.markdown == "Hi"

    def test_partial_empty_cover_image_is_kept(self):
        """An empty coverImage on update asks to remove the cover."""
        submission = normalize_submission({"coverImage": ""}, partial=True)

        assert submission.cover_image == ""
        assert submission.tag_ids == []
        assert submission.is_premium is False
        assert submission.published is False
        assert submission.post_type == "article"

    def test_wire_names_are_mapped(self):
        """camelCase wire names map onto submission attributes."""
        # Act
        submission = normalize_submission(
            {
                "title": "Hello",
                "content": "Body",
                "isPremium": "true",
                "published": "true",
                "postType": "tutorial",
            }
        )

        # Assert
        assert submission.is_premium is True
        assert submission.published is True
        assert submission.post_type == "tutorial"

    def test_unknown_fields_are_ignored(self):
        """Fields outside the post shape never reach the submission."""
        submission = normalize_submission(
            {"title": "Hello", "content": "Body", "views": 1000, "author": "x"}
        )

        assert "views" not in submission.model_dump()

    def test_partial_leaves_absent_fields_unset(self):
        """An update submission only carries what was supplied."""
        # Act
        submission = normalize_submission({"published": "true"}, partial=True)

        # Assert
        assert submission.published is True
        assert submission.title is None
        assert submission.content is None
        assert submission.category_ids is None
        assert submission.tag_ids is None
        assert submission.is_premium is None
        assert submission.post_type is None

    def test_partial_supplied_empty_list_clears(self):
        """Supplying an empty list on update means "no categories"."""
        submission = normalize_submission({"categories": "[]"}, partial=True)

        assert submission.category_ids == []


class TestRequireFields:
    """Tests for require_fields."""

    def test_reports_every_missing_field(self):
        """All missing required fields are reported together."""
        # Arrange
        submission = normalize_submission({"title": "   "})

        # Act & Assert
        with pytest.raises(ValidationError) as exc_info:
            require_fields(submission)
        assert exc_info.value.fields == ["title", "content", "markdown"]

    def test_passes_when_body_backfilled(self):
        """One body field is enough once the other is back-filled."""
        submission = normalize_submission({"title": "Hello", "content": "Body"})

        require_fields(submission)


class TestRejectBlankUpdates:
    """Tests for reject_blank_updates."""

    def test_blank_supplied_field_is_rejected(self):
        submission = normalize_submission({"title": "  "}, partial=True)

        with pytest.raises(ValidationError) as exc_info:
            reject_blank_updates(submission)
        assert exc_info.value.fields == ["title"]

    def test_absent_fields_are_fine(self):
        submission = normalize_submission({"published": "false"}, partial=True)

        reject_blank_updates(submission)
