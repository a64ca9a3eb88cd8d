from __future__ import annotations

from agents.types import InterviewAction, InterviewQuestion, Progress, ResumeReference
from interview_session import RENDERERS, renderer_for
from interview_session import voice_mode


def _question(**overrides) -> InterviewQuestion:
    data = dict(id="q-1", type="technical", text="How would you shard this table?", category="Databases", difficulty=6)
    data.update(overrides)
    return InterviewQuestion(**data)


def test_questions_use_spoken_lead_ins():
    assert voice_mode.format_question(_question(), 2) == (
        "Question 2. Here's a technical question: How would you shard this table?"
    )
    behavioral = _question(type="behavioral", text="Tell me about a conflict on your team.")
    assert voice_mode.format_question(behavioral).startswith("Let me ask you a behavioral question:")
    follow_up = _question(id="q-2", parent_question_id="q-1", text="Which shard key would you pick?")
    assert voice_mode.format_question(follow_up, 2) == "Let me follow up on that. Which shard key would you pick?"
    anchored = _question(resume_context=ResumeReference(section="skills", content="PostgreSQL"))
    assert voice_mode.format_question(anchored).endswith("I noticed on your resume you mentioned PostgreSQL.")


def test_speakable_strips_markup():
    assert voice_mode.speakable("**Overall:** 72/100\n----\n- item") == "Overall: 72 out of 100 item"


def test_progress_is_conversational():
    progress = Progress(
        total_questions=8,
        answered_questions=3,
        current_question_index=3,
        percent_complete=37.5,
        estimated_time_remaining=900,
    )
    assert voice_mode.format_progress(progress) == "You've answered 3 of 8 questions, with about 15 minutes to go."


def test_redirect_does_not_repeat_question_twice():
    question = _question()
    action = InterviewAction(type="redirect", question=question, message=f"Please focus on: {question.text}")
    assert voice_mode.format_action(action).count(question.text) == 1


def test_report_is_spoken(controller, started):
    action = controller.end_interview_early(started)
    spoken = voice_mode.format_action(action)
    assert "This feedback only covers the questions you answered." in spoken
    assert "Your overall score is 0 out of 100, which is a grade F." in spoken
    assert not any(mark in spoken for mark in ("(", "/", "---", "["))


def test_renderer_lookup():
    assert renderer_for("voice").question is voice_mode.format_question
    assert renderer_for(None) is RENDERERS["text"]
    assert renderer_for("braille") is RENDERERS["text"]
