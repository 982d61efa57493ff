"""Load a review form from a YAML file.

Expected layout::

    subject:
      name: Alex
      gender: female
      position: Backend Engineer
      relationship: Peer
    topics: [Leadership, Code quality]
    sections:
      - question: "What impact did {name}'s actions have?"
        feedback: "..."
        tone: Positive        # label or ordinal 1-5

``sections`` may be omitted to keep the default questions.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from peer_review.errors import PreconditionError
from peer_review.models.section import TONE_SCALE, FeedbackSection, Tone
from peer_review.models.snapshot import FormSnapshot
from peer_review.store.section_store import SectionStore


def _text(value) -> str:
    return "" if value is None else str(value)


def _parse_tone(value) -> Tone | None:
    if value is None or value == "":
        return None
    # YAML reads yes/no/true/false as booleans, which are ints in Python.
    if isinstance(value, bool):
        raise PreconditionError(f"Tone must be a label or an ordinal 1-5, got {value}")
    if isinstance(value, int):
        if value not in TONE_SCALE:
            raise PreconditionError(f"Tone ordinal must be 1-5, got {value}")
        return TONE_SCALE[value]
    return value


def build_form(data: dict) -> FormSnapshot:
    """Build a snapshot from parsed form data using the store's own operations.

    Raises:
        ValueError: ``subject``, ``topics`` or ``sections`` has the wrong shape.
        PreconditionError: A value is rejected by the store.
    """
    subject = data.get("subject") or {}
    if not isinstance(subject, dict):
        raise ValueError(f"'subject' must be a mapping, got {type(subject).__name__}")
    topics = data.get("topics") or []
    if not isinstance(topics, list):
        raise ValueError(f"'topics' must be a list, got {type(topics).__name__}")
    raw_sections = data.get("sections") or []
    if not isinstance(raw_sections, list):
        raise ValueError(f"'sections' must be a list, got {type(raw_sections).__name__}")
    for i, item in enumerate(raw_sections):
        if not isinstance(item, dict):
            raise ValueError(f"Section {i + 1} must be a mapping, got {type(item).__name__}")

    if raw_sections:
        store = SectionStore(FormSnapshot(sections=(FeedbackSection(),)))
    else:
        store = SectionStore()

    for field, value in subject.items():
        store.update_subject_field(field, _text(value))

    for topic in topics:
        store.add_topic(_text(topic))

    for i, item in enumerate(raw_sections):
        if i > 0:
            store.add_section()
        store.update_section_field(i, "question", _text(item.get("question")))
        store.update_section_field(i, "initial_feedback", _text(item.get("feedback")))
        store.update_section_field(i, "tone", _parse_tone(item.get("tone")))

    return store.snapshot


def load_form(path: str | Path) -> FormSnapshot:
    """Load a review form from a YAML file."""
    raw = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Form file must contain a mapping, got {type(raw).__name__}")
    return build_form(raw)
