"""Whitespace word counting and the feedback length gate."""

from __future__ import annotations

from enum import Enum

DEFAULT_WORD_LIMIT = 250


class FeedbackIssue(str, Enum):
    """Why a section's feedback cannot be sent for generation."""

    EMPTY = "empty"
    OVER_LIMIT = "over_limit"
    IN_PROGRESS = "in_progress"


def word_count(text: str) -> int:
    """Count whitespace-delimited words. Blank text counts as 0."""
    return len(text.split())


def check_feedback(text: str, word_limit: int = DEFAULT_WORD_LIMIT) -> FeedbackIssue | None:
    """Return the issue blocking generation for this text, or None if it may be sent."""
    if not text.strip():
        return FeedbackIssue.EMPTY
    if word_count(text) > word_limit:
        return FeedbackIssue.OVER_LIMIT
    return None
