"""Top-level form: the store and the orchestrator behind one interface."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from peer_review.clients.llm_client import LLMClient
from peer_review.config import AppConfig
from peer_review.errors import PreconditionError
from peer_review.models.section import Tone
from peer_review.models.snapshot import FormSnapshot
from peer_review.pipeline.orchestrator import GenerationOrchestrator
from peer_review.store.section_store import Listener, SectionStore
from peer_review.utils.word_counter import FeedbackIssue

logger = logging.getLogger(__name__)

SubmitSink = Callable[[FormSnapshot], None]


def _log_submission(snapshot: FormSnapshot) -> None:
    logger.info(
        "Form submitted: subject=%s, %d topics, %d sections",
        snapshot.subject.name,
        len(snapshot.topics),
        len(snapshot.sections),
    )


class FormController:
    """Entry point for a presentation layer.

    Edits are applied synchronously. A rejected edit is logged and leaves the
    snapshot as it was; the returned snapshot is always the current one.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        store: SectionStore | None = None,
        config: AppConfig | None = None,
        on_submit: SubmitSink = _log_submission,
    ):
        config = config or AppConfig()
        self.store = store or SectionStore()
        self.orchestrator = GenerationOrchestrator(
            self.store,
            llm,
            model=config.llm.model,
            temperature=config.llm.temperature,
            max_tokens=config.llm.max_tokens,
            word_limit=config.feedback.word_limit,
            recommended_words=config.feedback.recommended_words,
            max_words=config.feedback.max_words,
        )
        self._on_submit = on_submit

    @property
    def snapshot(self) -> FormSnapshot:
        return self.store.snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def _apply(self, operation: Callable[[], FormSnapshot]) -> FormSnapshot:
        try:
            return operation()
        except PreconditionError as e:
            logger.warning("Rejected form edit: %s", e)
            return self.store.snapshot

    # --- Edits ---

    def set_subject_field(self, field: str, value: str) -> FormSnapshot:
        return self._apply(lambda: self.store.update_subject_field(field, value))

    def add_topic(self, value: str) -> FormSnapshot:
        return self._apply(lambda: self.store.add_topic(value))

    def remove_topic(self, index: int) -> FormSnapshot:
        return self._apply(lambda: self.store.remove_topic(index))

    def add_question(self) -> FormSnapshot:
        return self._apply(self.store.add_section)

    def remove_question(self, index: int) -> FormSnapshot:
        return self._apply(lambda: self.store.remove_section(index))

    def set_question(self, index: int, question: str) -> FormSnapshot:
        return self._apply(lambda: self.store.update_section_field(index, "question", question))

    def set_feedback(self, index: int, feedback: str) -> FormSnapshot:
        return self._apply(
            lambda: self.store.update_section_field(index, "initial_feedback", feedback)
        )

    def set_tone(self, index: int, tone: str | Tone | None) -> FormSnapshot:
        return self._apply(lambda: self.store.update_section_field(index, "tone", tone))

    # --- Generation ---

    def section_issues(self) -> list[FeedbackIssue | None]:
        """Inline validation state for every section, in display order."""
        return [
            self.orchestrator.can_regenerate(i) for i in range(len(self.snapshot.sections))
        ]

    def start_regenerate(self, index: int) -> asyncio.Task | None:
        return self.orchestrator.start_regenerate(index)

    async def regenerate(self, index: int) -> bool:
        return await self.orchestrator.regenerate(index)

    async def regenerate_all(self) -> list[int]:
        """Regenerate every eligible section concurrently. Returns the indices started."""
        started = [
            i
            for i in range(len(self.snapshot.sections))
            if self.orchestrator.start_regenerate(i) is not None
        ]
        await self.orchestrator.wait_all()
        return started

    # --- Submission ---

    def missing_fields(self) -> list[str]:
        return self.snapshot.subject.missing_fields()

    def submit(self) -> bool:
        """Hand the final snapshot to the submit sink.

        Returns False, without calling the sink, while subject fields are
        missing or a generation is still running.
        """
        snapshot = self.snapshot
        missing = snapshot.subject.missing_fields()
        if missing:
            logger.warning("Cannot submit, missing fields: %s", ", ".join(missing))
            return False
        if snapshot.any_loading:
            logger.warning("Cannot submit while generation is in progress")
            return False
        self._on_submit(snapshot)
        return True
