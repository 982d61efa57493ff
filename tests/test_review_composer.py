"""Tests for compose_review."""

from __future__ import annotations

from peer_review.export.review_composer import compose_review
from peer_review.models.section import FeedbackSection
from peer_review.models.snapshot import FormSnapshot


def _with_sections(snapshot: FormSnapshot, *sections: FeedbackSection) -> FormSnapshot:
    return snapshot.model_copy(update={"sections": sections})


class TestComposeReview:
    def test_header_and_topics(self, filled_snapshot):
        text = compose_review(filled_snapshot)
        assert text.startswith("# Peer Review: Jordan\n")
        assert "_Senior Backend Engineer | Peer_" in text
        assert "**Topics:** Leadership, Communication" in text

    def test_refined_text_used(self, filled_snapshot):
        snapshot = _with_sections(
            filled_snapshot,
            FeedbackSection(question="Impact of {name}?", initial_feedback="raw", refined_feedback="Polished."),
        )
        text = compose_review(snapshot)
        assert "## 1. Impact of Jordan?" in text
        assert "Polished." in text
        assert "raw" not in text

    def test_unrefined_marked(self, filled_snapshot):
        snapshot = _with_sections(
            filled_snapshot, FeedbackSection(question="Q", initial_feedback="Draft only")
        )
        text = compose_review(snapshot)
        assert "Draft only" in text
        assert "_(not yet refined)_" in text

    def test_empty_sections_skipped_and_numbering_continuous(self, filled_snapshot):
        snapshot = _with_sections(
            filled_snapshot,
            FeedbackSection(question="Empty"),
            FeedbackSection(question="Second", refined_feedback="Text"),
        )
        text = compose_review(snapshot)
        assert "Empty" not in text
        assert "## 1. Second" in text

    def test_anonymous_form(self):
        text = compose_review(FormSnapshot())
        assert text == "# Peer Review\n"
