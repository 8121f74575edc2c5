"""Issue key and sync marker extraction.

A work item created by the synchronizer carries the Clockify entry id in
square brackets at the end of its text, e.g. ``Fix login [65f0c2a1b3d4e5f6a7b8c9d0]``.
Finding that marker on a later run is what marks the entry as already synced.
"""

import re

# Conventional issue key at the start of a task name: ``ABC-123 Fix login``.
ISSUE_ID_PATTERN = re.compile(r"^([A-Z0-9]+-\d+)")

# Bracketed 24 character lowercase alphanumeric Clockify id.
MARKER_PATTERN = re.compile(r"\[([a-z\d]{24})\]")


def extract_issue_id(text: str | None) -> str | None:
    """Extract the issue key a task name starts with.

    Args:
        text: Task name, possibly with trailing text after the key.

    Returns:
        The issue key, or None if the trimmed text does not start with one.
    """
    if not text:
        return None
    match = ISSUE_ID_PATTERN.match(text.strip())
    return match.group(1) if match else None


def extract_marker(text: str | None) -> str | None:
    """Extract the sync marker from a work item text.

    The marker is the last bracketed id, the slot embed_marker appends to.
    Earlier bracketed ids belong to the description itself. Brackets holding
    anything other than exactly 24 lowercase letters and digits are ignored.

    Args:
        text: Work item text.

    Returns:
        The marker without brackets, or None if there is none.
    """
    if not text:
        return None
    matches = MARKER_PATTERN.findall(text)
    return matches[-1] if matches else None


def has_marker(text: str | None) -> bool:
    """Check whether a text carries a sync marker."""
    return extract_marker(text) is not None


def embed_marker(description: str, entry_id: str) -> str:
    """Append the entry id marker to a work item description."""
    return f"{description} [{entry_id}]"
