"""Immutable state of the whole review form at one instant."""

from __future__ import annotations

from pydantic import BaseModel, Field

from peer_review.models.section import FeedbackSection
from peer_review.models.subject import ReviewSubject

DEFAULT_QUESTIONS: tuple[str, ...] = (
    "Describe examples of the topic selected. What was the context? What actions did they take?",
    "In your opinion, what impact did {name}'s actions have?",
    "What recommendation do you have for {name}'s growth and development? "
    "Your feedback can be about any area of their work.",
)


def default_sections() -> tuple[FeedbackSection, ...]:
    return tuple(FeedbackSection(question=q) for q in DEFAULT_QUESTIONS)


class FormSnapshot(BaseModel):
    subject: ReviewSubject = Field(default_factory=ReviewSubject)
    topics: tuple[str, ...] = ()
    sections: tuple[FeedbackSection, ...] = Field(default_factory=default_sections)

    model_config = {"frozen": True}

    def index_of(self, section_id: str) -> int | None:
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                return i
        return None

    def find_section(self, section_id: str) -> FeedbackSection | None:
        i = self.index_of(section_id)
        return None if i is None else self.sections[i]

    @property
    def any_loading(self) -> bool:
        return any(s.is_loading for s in self.sections)
