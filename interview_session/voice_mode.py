"""Speech-friendly rendering of questions, actions, progress and reports.

Output is meant to be read aloud by a text-to-speech engine: no markup, no
decorative rules, scores spoken as "x out of y" and short conversational
lead-ins instead of bracketed labels.
"""
from __future__ import annotations

import re
from typing import List, Optional, Sequence

from agents.types import FeedbackReport, InterviewAction, InterviewQuestion, Progress

_MARKUP = re.compile(r"[*_#`>\[\]{}()|]+")
_RULES = re.compile(r"[-=─═]{3,}")
_BULLET = re.compile(r"(?m)^\s*(?:[-+•]|\d+\.)\s+")
_RATIO = re.compile(r"(\d+(?:\.\d+)?)\s*/\s*(\d+)")


def speakable(text: str) -> str:
    """Strip visual formatting so the text reads naturally when spoken."""

    out = _RULES.sub(" ", text or "")
    out = _BULLET.sub("", out)
    out = _RATIO.sub(r"\1 out of \2", out)
    out = _MARKUP.sub("", out)
    return " ".join(out.split())


def _spoken_list(items: Sequence[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + f" and {items[-1]}"


def _number(value: float) -> str:
    return f"{value:.0f}" if float(value).is_integer() else f"{value:.1f}"


def format_question(question: InterviewQuestion, number: Optional[int] = None) -> str:
    if question.is_follow_up:
        parts = ["Let me follow up on that.", question.text]
    else:
        if question.type == "technical":
            lead = "Here's a technical question:"
        else:
            lead = "Let me ask you a behavioral question:"
        if number:
            lead = f"Question {number}. {lead}"
        parts = [lead, question.text]
    if question.resume_context is not None:
        parts.append(f"I noticed on your resume you mentioned {question.resume_context.content}.")
    return speakable(" ".join(parts))


def format_progress(progress: Progress) -> str:
    minutes = progress.estimated_time_remaining // 60
    unit = "minute" if minutes == 1 else "minutes"
    return (
        f"You've answered {progress.answered_questions} of {progress.total_questions} questions, "
        f"with about {minutes} {unit} to go."
    )


def format_action(action: InterviewAction, number: Optional[int] = None) -> str:
    if action.type == "complete" and action.feedback is not None:
        return speakable(action.message) + "\n\n" + format_report(action.feedback)
    parts: List[str] = []
    if action.message:
        parts.append(speakable(action.message))
    if action.question is not None and action.question.text not in action.message:
        parts.append(format_question(action.question, number))
    return " ".join(parts)


def format_report(report: FeedbackReport) -> str:
    """Spoken summary of the feedback report, one idea per sentence."""

    sentences = [
        "Here is your feedback.",
        f"Your overall score is {_number(report.overall_score)} out of 100, which is a grade {report.overall_grade}.",
        f"Communication scored {_number(report.communication.total)} out of 40, "
        f"and technical skills scored {_number(report.technical.total)} out of 40.",
    ]
    if report.ended_early:
        sentences.insert(1, "This feedback only covers the questions you answered.")
    if report.strengths:
        names = [item.split(" (")[0] for item in report.strengths]
        sentences.append(f"Your strengths include {_spoken_list(names)}.")
    for item in report.improvements[:3]:
        tip = item.suggestion.rstrip(".")
        sentences.append(f"A tip for {item.category}: {tip}.")
    if report.resume_alignment is not None:
        sentences.append(
            f"Your resume aligns with the role at {_number(report.resume_alignment.alignment_score)} out of 100."
        )
    sentences.append(report.summary)
    return " ".join(speakable(sentence) for sentence in sentences)


__all__ = ["format_action", "format_progress", "format_question", "format_report", "speakable"]
