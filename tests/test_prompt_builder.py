"""Tests for prompt construction."""

from __future__ import annotations

from peer_review.models.section import FeedbackSection, Tone
from peer_review.models.subject import Gender, ReviewSubject
from peer_review.pipeline.prompt_builder import build_prompt, resolve_question


class TestResolveQuestion:
    def test_substitutes_name(self):
        assert resolve_question("What did {name} do?", "Sam") == "What did Sam do?"

    def test_substitutes_every_occurrence(self):
        result = resolve_question("{name} and {name}'s team", "Sam")
        assert result == "Sam and Sam's team"

    def test_keeps_placeholder_without_name(self):
        assert resolve_question("What did {name} do?", "") == "What did {name} do?"
        assert resolve_question("What did {name} do?", "   ") == "What did {name} do?"


class TestBuildPrompt:
    def test_deterministic(self, filled_snapshot):
        s = filled_snapshot
        first = build_prompt(s.subject, s.topics, s.sections[0])
        second = build_prompt(s.subject, s.topics, s.sections[0])
        assert first == second

    def test_contains_subject_details(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "Jordan" in prompt
        assert "Senior Backend Engineer" in prompt
        assert "Peer" in prompt
        assert "other" in prompt

    def test_contains_topics_in_order(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "Leadership, Communication" in prompt

    def test_feedback_verbatim(self, filled_snapshot, sample_feedback):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert sample_feedback in prompt

    def test_feedback_whitespace_preserved(self, sample_subject):
        feedback = "  line one\n\n   line two  "
        section = FeedbackSection(question="Q", initial_feedback=feedback)
        assert feedback in build_prompt(sample_subject, [], section)

    def test_tone_label(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "My initial feedback has a tone of: Positive" in prompt

    def test_unset_tone(self, sample_subject):
        section = FeedbackSection(question="Q", initial_feedback="ok")
        prompt = build_prompt(sample_subject, [], section)
        assert "tone of: Unspecified" in prompt

    def test_question_name_resolved(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "What impact did Jordan's actions have?" in prompt
        assert "{name}" not in prompt

    def test_question_placeholder_kept_without_name(self):
        subject = ReviewSubject(gender=Gender.MALE, position="PM", relationship="Manager")
        section = FeedbackSection(question="How did {name} do?", initial_feedback="fine")
        assert "How did {name} do?" in build_prompt(subject, [], section)

    def test_word_limit_instruction(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "Recommended 200, Max 300 words." in prompt

    def test_custom_word_limit(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(
            s.subject, s.topics, s.sections[0], recommended_words=100, max_words=150
        )
        assert "Recommended 100, Max 150 words." in prompt

    def test_grounding_instruction(self, filled_snapshot):
        s = filled_snapshot
        prompt = build_prompt(s.subject, s.topics, s.sections[0])
        assert "Do not introduce facts" in prompt

    def test_different_sections_differ(self, filled_snapshot):
        s = filled_snapshot
        assert build_prompt(s.subject, s.topics, s.sections[0]) != build_prompt(
            s.subject, s.topics, s.sections[1]
        )

    def test_lists_all_tones(self, sample_subject):
        section = FeedbackSection(question="Q", initial_feedback="ok", tone=Tone.NEGATIVE)
        prompt = build_prompt(sample_subject, [], section)
        for tone in Tone:
            assert f"'{tone.value}'" in prompt
