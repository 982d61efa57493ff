"""Form state: immutable snapshots and the pure transitions between them.

Every transition takes a ``FormSnapshot`` and returns a new one. Sections
that a transition does not target are carried over as the same objects, so
consumers can key on identity. ``SectionStore`` holds the current snapshot,
applies transitions and notifies subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from peer_review.errors import PreconditionError
from peer_review.models.section import (
    FeedbackSection,
    GenerationResult,
    GenerationState,
    Tone,
)
from peer_review.models.snapshot import FormSnapshot
from peer_review.models.subject import Gender

logger = logging.getLogger(__name__)

SUBJECT_FIELDS = ("name", "gender", "position", "relationship")
SECTION_FIELDS = ("question", "initial_feedback", "tone")

Listener = Callable[[FormSnapshot], None]


def _check_index(index: int, size: int, what: str) -> None:
    if not 0 <= index < size:
        raise PreconditionError(f"{what} index {index} out of range (size {size})")


def _replace_section(
    snapshot: FormSnapshot, index: int, section: FeedbackSection
) -> FormSnapshot:
    sections = snapshot.sections[:index] + (section,) + snapshot.sections[index + 1:]
    return snapshot.model_copy(update={"sections": sections})


# --- Pure transitions ---


def update_subject_field(snapshot: FormSnapshot, field: str, value: str) -> FormSnapshot:
    if field not in SUBJECT_FIELDS:
        raise PreconditionError(f"Unknown subject field: {field!r}")
    if not isinstance(value, str):
        raise PreconditionError(f"{field} must be a string, got {type(value).__name__}")
    if field == "gender":
        try:
            value = Gender(value or Gender.UNSET)
        except ValueError:
            raise PreconditionError(f"Invalid gender: {value!r}") from None
    subject = snapshot.subject.model_copy(update={field: value})
    return snapshot.model_copy(update={"subject": subject})


def add_topic(snapshot: FormSnapshot, value: str) -> FormSnapshot:
    topic = value.strip()
    if not topic:
        raise PreconditionError("Topic must not be blank")
    return snapshot.model_copy(update={"topics": snapshot.topics + (topic,)})


def remove_topic(snapshot: FormSnapshot, index: int) -> FormSnapshot:
    _check_index(index, len(snapshot.topics), "Topic")
    topics = snapshot.topics[:index] + snapshot.topics[index + 1:]
    return snapshot.model_copy(update={"topics": topics})


def add_section(snapshot: FormSnapshot) -> FormSnapshot:
    return snapshot.model_copy(update={"sections": snapshot.sections + (FeedbackSection(),)})


def remove_section(snapshot: FormSnapshot, index: int) -> FormSnapshot:
    if len(snapshot.sections) <= 1:
        raise PreconditionError("Cannot remove the last remaining section")
    _check_index(index, len(snapshot.sections), "Section")
    sections = snapshot.sections[:index] + snapshot.sections[index + 1:]
    return snapshot.model_copy(update={"sections": sections})


def update_section_field(
    snapshot: FormSnapshot, index: int, field: str, value: str | Tone | None
) -> FormSnapshot:
    if field not in SECTION_FIELDS:
        raise PreconditionError(f"Unknown section field: {field!r}")
    _check_index(index, len(snapshot.sections), "Section")
    if field != "tone" and not isinstance(value, str):
        raise PreconditionError(f"{field} must be a string, got {type(value).__name__}")
    if field == "tone" and value is not None:
        try:
            value = Tone(value)
        except ValueError:
            raise PreconditionError(f"Invalid tone: {value!r}") from None
    section = snapshot.sections[index].model_copy(update={field: value})
    return _replace_section(snapshot, index, section)


def apply_generation_result(
    snapshot: FormSnapshot, section_id: str, result: GenerationResult
) -> FormSnapshot:
    """Write a generation transition into the section with this id.

    Returns the snapshot unchanged if the section has since been removed.
    """
    index = snapshot.index_of(section_id)
    if index is None:
        logger.debug("Dropping %s result for removed section %s", result.state.value, section_id)
        return snapshot

    update: dict = {"generation_state": result.state}
    if result.state is GenerationState.SUCCESS:
        update["refined_feedback"] = result.refined_feedback
        update["last_error"] = None
    elif result.state is GenerationState.ERROR:
        update["last_error"] = result.error
    section = snapshot.sections[index].model_copy(update=update)
    return _replace_section(snapshot, index, section)


# --- Store ---


class SectionStore:
    """Owner of the current form snapshot."""

    def __init__(self, snapshot: FormSnapshot | None = None):
        self._snapshot = snapshot if snapshot is not None else FormSnapshot()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> FormSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: FormSnapshot) -> FormSnapshot:
        if snapshot is self._snapshot:
            return snapshot
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def update_subject_field(self, field: str, value: str) -> FormSnapshot:
        return self._commit(update_subject_field(self._snapshot, field, value))

    def add_topic(self, value: str) -> FormSnapshot:
        return self._commit(add_topic(self._snapshot, value))

    def remove_topic(self, index: int) -> FormSnapshot:
        return self._commit(remove_topic(self._snapshot, index))

    def add_section(self) -> FormSnapshot:
        return self._commit(add_section(self._snapshot))

    def remove_section(self, index: int) -> FormSnapshot:
        return self._commit(remove_section(self._snapshot, index))

    def update_section_field(
        self, index: int, field: str, value: str | Tone | None
    ) -> FormSnapshot:
        return self._commit(update_section_field(self._snapshot, index, field, value))

    def apply_generation_result(self, section_id: str, result: GenerationResult) -> FormSnapshot:
        return self._commit(apply_generation_result(self._snapshot, section_id, result))
