"""Data models for the peer review form."""

from peer_review.models.section import (
    TONE_SCALE,
    FeedbackSection,
    GenerationResult,
    GenerationState,
    Tone,
)
from peer_review.models.snapshot import DEFAULT_QUESTIONS, FormSnapshot
from peer_review.models.subject import Gender, ReviewSubject

__all__ = [
    "DEFAULT_QUESTIONS",
    "FeedbackSection",
    "FormSnapshot",
    "Gender",
    "GenerationResult",
    "GenerationState",
    "ReviewSubject",
    "TONE_SCALE",
    "Tone",
]
