"""Assemble the finished review as markdown."""

from __future__ import annotations

from peer_review.models.snapshot import FormSnapshot
from peer_review.pipeline.prompt_builder import resolve_question


def compose_review(snapshot: FormSnapshot) -> str:
    """Render all sections as one markdown document.

    Sections without a refined rewrite fall back to the initial feedback,
    marked as unrefined. Sections with neither are skipped.
    """
    subject = snapshot.subject
    title = f"# Peer Review: {subject.name}" if subject.name else "# Peer Review"
    lines = [title, ""]
    if subject.position or subject.relationship:
        details = " | ".join(p for p in (subject.position, subject.relationship) if p)
        lines += [f"_{details}_", ""]
    if snapshot.topics:
        lines += [f"**Topics:** {', '.join(snapshot.topics)}", ""]

    number = 0
    for section in snapshot.sections:
        if section.refined_feedback:
            body = section.refined_feedback.strip()
        elif section.initial_feedback.strip():
            body = f"{section.initial_feedback.strip()}\n\n_(not yet refined)_"
        else:
            continue
        number += 1
        question = resolve_question(section.question, subject.name) or "(untitled question)"
        lines += [f"## {number}. {question}", "", body, ""]

    return "\n".join(lines).rstrip() + "\n"
