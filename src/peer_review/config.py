"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _check_range(name: str, value: float, low: float, high: float) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} must be between {low} and {high}, got {value}")


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    timeout: int = 60
    temperature: float = 0.3
    max_tokens: int = 1024

    def __post_init__(self) -> None:
        _check_range("timeout", self.timeout, 1, 600)
        _check_range("temperature", self.temperature, 0.0, 1.0)
        _check_range("max_tokens", self.max_tokens, 1, 8192)


@dataclass(frozen=True)
class FeedbackConfig:
    word_limit: int = 250  # regenerate is blocked above this many input words
    recommended_words: int = 200
    max_words: int = 300

    def __post_init__(self) -> None:
        _check_range("word_limit", self.word_limit, 1, 1000)
        _check_range("max_words", self.max_words, 1, 1000)
        if self.recommended_words > self.max_words:
            raise ValueError(
                f"recommended_words ({self.recommended_words}) "
                f"must not exceed max_words ({self.max_words})"
            )


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    feedback: FeedbackConfig = field(default_factory=FeedbackConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        feedback=FeedbackConfig(**raw.get("feedback", {})),
    )
