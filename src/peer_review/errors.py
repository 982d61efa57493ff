"""Exception types shared across the form core."""

from __future__ import annotations


class PeerReviewError(Exception):
    """Base class for errors raised by peer_review."""


class PreconditionError(PeerReviewError, ValueError):
    """Raised when a form operation is rejected and the snapshot is left unchanged.

    Covers removing the last remaining section, out-of-range indices,
    unknown field names and values outside an enumeration.
    """


class GenerationError(PeerReviewError):
    """Raised when the text-generation service fails to produce a response."""
