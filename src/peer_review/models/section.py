"""Pydantic models for feedback sections and their generation state."""

from __future__ import annotations

import uuid
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, Field


class Tone(str, Enum):
    EXTREMELY_NEGATIVE = "Extremely Negative"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    POSITIVE = "Positive"
    EXTREMELY_POSITIVE = "Extremely Positive"


# Ordinal 1-5, lowest to highest
TONE_SCALE = MappingProxyType({i: tone for i, tone in enumerate(Tone, start=1)})


class GenerationState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


def new_section_id() -> str:
    return uuid.uuid4().hex


class FeedbackSection(BaseModel):
    """One question with the reviewer's draft and the generated rewrite."""

    id: str = Field(default_factory=new_section_id)
    question: str = ""  # may contain the literal "{name}" placeholder
    initial_feedback: str = ""
    tone: Tone | None = None
    refined_feedback: str | None = None  # None until a generation succeeds
    generation_state: GenerationState = GenerationState.IDLE
    last_error: str | None = None

    model_config = {"frozen": True}

    @property
    def is_loading(self) -> bool:
        return self.generation_state is GenerationState.LOADING


class GenerationResult(BaseModel):
    """Payload written back into the store for one generation transition."""

    state: GenerationState
    refined_feedback: str | None = None
    error: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def loading(cls) -> GenerationResult:
        return cls(state=GenerationState.LOADING)

    @classmethod
    def succeeded(cls, text: str) -> GenerationResult:
        return cls(state=GenerationState.SUCCESS, refined_feedback=text)

    @classmethod
    def failed(cls, message: str) -> GenerationResult:
        return cls(state=GenerationState.ERROR, error=message)
