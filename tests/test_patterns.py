"""Tests for issue key and marker extraction."""

import pytest

from clockify_youtrack_sync.sync.patterns import (
    embed_marker,
    extract_issue_id,
    extract_marker,
    has_marker,
)

from tests.fakes import ENTRY_ID, OTHER_ENTRY_ID


class TestExtractIssueId:
    """Test issue key extraction from task names."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("ABC-123", "ABC-123"),
            ("ABC-123 Login page", "ABC-123"),
            ("  PRJ2-7: fix", "PRJ2-7"),
            ("A1-99-100", "A1-99"),
        ],
    )
    def test_matches_leading_key(self, text: str, expected: str) -> None:
        """Test keys at the start of the trimmed text."""
        assert extract_issue_id(text) == expected

    @pytest.mark.parametrize(
        "text",
        [None, "", "Login page ABC-123", "abc-123", "ABC-", "ABC 123", "-123"],
    )
    def test_no_match(self, text: str | None) -> None:
        """Test texts that do not start with an issue key."""
        assert extract_issue_id(text) is None


class TestExtractMarker:
    """Test sync marker extraction from work item texts."""

    def test_marker_at_end(self) -> None:
        """Test the format written by the synchronizer."""
        assert extract_marker(f"Implement login [{ENTRY_ID}]") == ENTRY_ID

    def test_no_brackets(self) -> None:
        """Test plain text without a marker."""
        assert extract_marker("Manually logged time") is None
        assert extract_marker(None) is None

    def test_wrong_length_or_case_ignored(self) -> None:
        """Test brackets that do not hold a 24 char lowercase id."""
        assert extract_marker(f"[{ENTRY_ID[:-1]}]") is None
        assert extract_marker(f"[{ENTRY_ID}0]") is None
        assert extract_marker(f"[{ENTRY_ID.upper()}]") is None

    def test_last_marker_wins(self) -> None:
        """Test text with several bracketed tokens."""
        text = f"[draft] Review [{OTHER_ENTRY_ID}] and [{ENTRY_ID}]"
        assert extract_marker(text) == ENTRY_ID

    def test_round_trip(self) -> None:
        """Test that an embedded id is extracted back unchanged."""
        description = embed_marker("Work [notes] on ABC-1", ENTRY_ID)

        assert description == f"Work [notes] on ABC-1 [{ENTRY_ID}]"
        assert extract_marker(description) == ENTRY_ID
        assert has_marker(description) is True

    def test_round_trip_with_bracketed_id_in_description(self) -> None:
        """Test a description that already references another entry id."""
        description = embed_marker(f"Follow-up of [{OTHER_ENTRY_ID}]", ENTRY_ID)

        assert description == f"Follow-up of [{OTHER_ENTRY_ID}] [{ENTRY_ID}]"
        assert extract_marker(description) == ENTRY_ID

    def test_has_marker_false(self) -> None:
        """Test has_marker without a marker."""
        assert has_marker("Implement login [abc]") is False
