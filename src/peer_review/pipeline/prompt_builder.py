"""Prompt construction for rewriting one feedback section."""

from __future__ import annotations

from collections.abc import Sequence

from peer_review.models.section import FeedbackSection, Tone
from peer_review.models.subject import Gender, ReviewSubject

NAME_PLACEHOLDER = "{name}"

REFINE_SYSTEM = """\
You are a professional software engineering manager with over 15 years of \
experience in crafting performance reviews that effectively highlight an \
employee's strengths and areas for improvement. You understand the importance \
of providing constructive feedback that fosters growth and motivation while \
maintaining professionalism and clarity."""

_TONE_LABELS = ", ".join(f"'{t.value}'" for t in Tone)


def resolve_question(question: str, name: str) -> str:
    """Substitute the subject's name into a question; keep the placeholder if no name yet."""
    if not name.strip():
        return question
    return question.replace(NAME_PLACEHOLDER, name)


def build_prompt(
    subject: ReviewSubject,
    topics: Sequence[str],
    section: FeedbackSection,
    *,
    recommended_words: int = 200,
    max_words: int = 300,
) -> str:
    """Assemble the rewrite request for one section.

    Output depends only on the arguments, so identical inputs always give
    identical prompts. The initial feedback is embedded verbatim.
    """
    topic_text = ", ".join(topics) if topics else "None specified"
    gender = "Unspecified" if subject.gender is Gender.UNSET else subject.gender.value
    tone = section.tone.value if section.tone is not None else "Unspecified"
    question = resolve_question(section.question, subject.name)
    word_limit = f"Recommended {recommended_words}, Max {max_words} words."

    return f"""Your task is to write a performance review for my peer. Here is the peer's basic info:
- Peer's Name: {subject.name}
- Peer's Position: {subject.position}
- Peer's Gender: {gender}
- Peer's Relationship with me: {subject.relationship}

The question asked is:
- Topics: {topic_text}
- {question}

And my initial feedback is:
<initial_feedback>
{section.initial_feedback}
</initial_feedback>

Given a scale of 5 tones from {_TONE_LABELS}.
My initial feedback has a tone of: {tone}

Rewrite my initial feedback into a well-structured and professional performance review.
Rules:
- Provide constructive feedback that maintains professionalism and clarity and fosters growth.
- Use tone and wording suited to my relationship with the peer (manager, report, peer, etc.).
- Base the review solely on the initial feedback above. Do not introduce facts or details it does not state.
- Output only the rewritten feedback, with no preamble or commentary.
- Focus mainly on the topics: {topic_text}
- Strictly follow the word limit: {word_limit}

Rewritten feedback:"""
