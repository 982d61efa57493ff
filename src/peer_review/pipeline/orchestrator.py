"""Per-section regeneration: guard, prompt, LLM call, write-back."""

from __future__ import annotations

import asyncio
import logging

from peer_review.clients.llm_client import DEFAULT_MODEL, LLMClient
from peer_review.errors import PreconditionError
from peer_review.models.section import GenerationResult
from peer_review.pipeline.prompt_builder import REFINE_SYSTEM, build_prompt
from peer_review.store.section_store import SectionStore
from peer_review.utils.word_counter import DEFAULT_WORD_LIMIT, FeedbackIssue, check_feedback

logger = logging.getLogger(__name__)


class GenerationOrchestrator:
    """Runs regenerations for any number of sections at once, at most one per section.

    Each accepted request becomes an ``asyncio.Task`` bound to the section's
    id. The guard check, the task and the switch to loading all happen in one
    synchronous step, so a section cannot be regenerated again until its
    request resolves. Every request ends in success or error, including
    cancelled ones. Results go back through ``SectionStore.apply_generation_result``.
    """

    def __init__(
        self,
        store: SectionStore,
        llm: LLMClient,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.3,
        max_tokens: int = 1024,
        word_limit: int = DEFAULT_WORD_LIMIT,
        recommended_words: int = 200,
        max_words: int = 300,
    ):
        self.store = store
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.word_limit = word_limit
        self.recommended_words = recommended_words
        self.max_words = max_words
        self._tasks: dict[str, asyncio.Task] = {}

    @property
    def in_flight(self) -> frozenset[str]:
        return frozenset(self._tasks)

    def can_regenerate(self, index: int) -> FeedbackIssue | None:
        """Return why section ``index`` cannot be regenerated now, or None."""
        sections = self.store.snapshot.sections
        if not 0 <= index < len(sections):
            raise PreconditionError(f"Section index {index} out of range (size {len(sections)})")
        section = sections[index]
        if section.is_loading:
            return FeedbackIssue.IN_PROGRESS
        return check_feedback(section.initial_feedback, self.word_limit)

    def start_regenerate(self, index: int) -> asyncio.Task | None:
        """Begin regenerating section ``index``.

        Returns the running task, or None if the request was rejected.

        Raises:
            RuntimeError: No event loop is running. The section is left as it was.
        """
        loop = asyncio.get_running_loop()
        issue = self.can_regenerate(index)
        if issue is not None:
            logger.info("Regenerate rejected for section %d: %s", index, issue.value)
            return None

        snapshot = self.store.snapshot
        section = snapshot.sections[index]
        prompt = build_prompt(
            snapshot.subject,
            snapshot.topics,
            section,
            recommended_words=self.recommended_words,
            max_words=self.max_words,
        )
        # Scheduled before the loading write so the task always resolves the
        # section, even if a subscriber raises during that write.
        task = loop.create_task(
            self._generate(section.id, prompt, section.initial_feedback),
            name=f"regenerate-{section.id}",
        )
        self._tasks[section.id] = task
        task.add_done_callback(lambda t, sid=section.id: self._on_done(sid, t))
        self.store.apply_generation_result(section.id, GenerationResult.loading())
        return task

    def _on_done(self, section_id: str, task: asyncio.Task) -> None:
        if self._tasks.get(section_id) is task:
            del self._tasks[section_id]
        # A task cancelled before its first step never reaches _generate.
        if task.cancelled():
            section = self.store.snapshot.find_section(section_id)
            if section is not None and section.is_loading:
                self.store.apply_generation_result(section_id, GenerationResult.failed("cancelled"))

    async def regenerate(self, index: int) -> bool:
        """Regenerate section ``index`` and wait for it. False if rejected."""
        task = self.start_regenerate(index)
        if task is None:
            return False
        await task
        return True

    async def wait_all(self) -> None:
        """Wait for every in-flight regeneration to resolve."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks.values()))

    async def _generate(self, section_id: str, prompt: str, source_feedback: str) -> None:
        try:
            response = await self.llm.generate(
                prompt=prompt,
                system=REFINE_SYSTEM,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except asyncio.CancelledError:
            logger.warning("Generation cancelled for section %s", section_id)
            self.store.apply_generation_result(section_id, GenerationResult.failed("cancelled"))
            raise
        except Exception as e:
            logger.exception("Generation failed for section %s", section_id)
            self.store.apply_generation_result(
                section_id, GenerationResult.failed(str(e) or type(e).__name__)
            )
            return

        current = self.store.snapshot.find_section(section_id)
        if current is not None and current.initial_feedback != source_feedback:
            logger.warning(
                "Section %s feedback changed while generating; applying result anyway",
                section_id,
            )
        self.store.apply_generation_result(section_id, GenerationResult.succeeded(response.text))
