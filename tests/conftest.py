"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from peer_review.clients.llm_client import LLMClient, LLMResponse
from peer_review.models.section import FeedbackSection, Tone
from peer_review.models.snapshot import FormSnapshot
from peer_review.models.subject import Gender, ReviewSubject
from peer_review.store.section_store import SectionStore


@pytest.fixture
def sample_subject() -> ReviewSubject:
    return ReviewSubject(
        name="Jordan",
        gender=Gender.OTHER,
        position="Senior Backend Engineer",
        relationship="Peer",
    )


@pytest.fixture
def sample_feedback() -> str:
    return (
        "Jordan led the payments migration and kept everyone updated. "
        "Sometimes the design docs came late, which slowed down reviews."
    )


@pytest.fixture
def filled_snapshot(sample_subject, sample_feedback) -> FormSnapshot:
    """Two sections with feedback ready to generate."""
    return FormSnapshot(
        subject=sample_subject,
        topics=("Leadership", "Communication"),
        sections=(
            FeedbackSection(
                question="What impact did {name}'s actions have?",
                initial_feedback=sample_feedback,
                tone=Tone.POSITIVE,
            ),
            FeedbackSection(
                question="What should {name} work on?",
                initial_feedback="Share design docs earlier.",
                tone=Tone.NEUTRAL,
            ),
        ),
    )


@pytest.fixture
def store(filled_snapshot) -> SectionStore:
    return SectionStore(filled_snapshot)


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="Refined feedback.", input_tokens=100, output_tokens=50)
    )
    return client
