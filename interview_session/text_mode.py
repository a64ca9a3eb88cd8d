"""Plain-text rendering of questions, actions, progress and reports."""
from __future__ import annotations

from typing import List, Optional

from agents.types import FeedbackReport, InterviewAction, InterviewQuestion, Progress

RULE = "-" * 60


def format_question(question: InterviewQuestion, number: Optional[int] = None) -> str:
    label = "Follow-up" if question.is_follow_up else f"Question {number}" if number else "Question"
    header = f"{label} [{question.category}, {question.type}]"
    lines = [header, question.text]
    if question.resume_context is not None:
        lines.append(f"(From your resume: {question.resume_context.content})")
    return "\n".join(lines)


def format_progress(progress: Progress) -> str:
    minutes = progress.estimated_time_remaining // 60
    return (
        f"Progress: {progress.answered_questions}/{progress.total_questions} questions "
        f"({progress.percent_complete:.1f}%), about {minutes} min remaining"
    )


def format_action(action: InterviewAction, number: Optional[int] = None) -> str:
    parts: List[str] = []
    if action.message:
        parts.append(action.message)
    if action.type == "complete" and action.feedback is not None:
        parts.append(format_report(action.feedback))
    elif action.question is not None:
        parts.append(format_question(action.question, number))
    return "\n\n".join(parts)


def format_report(report: FeedbackReport) -> str:
    """Render the feedback report as a readable block."""

    comm = report.communication
    tech = report.technical
    lines = [
        RULE,
        "Interview Feedback" + (" (partial)" if report.ended_early else ""),
        RULE,
        f"Overall: {report.overall_score:.1f}/100 (grade {report.overall_grade})",
        f"Communication: {comm.total:.1f}/40 (grade {comm.grade})",
        f"  clarity {comm.clarity:.1f}, articulation {comm.articulation:.1f}, "
        f"structure {comm.structure:.1f}, professionalism {comm.professionalism:.1f}",
        f"Technical: {tech.total:.1f}/40 (grade {tech.grade})",
        f"  depth {tech.depth:.1f}, accuracy {tech.accuracy:.1f}, "
        f"relevance {tech.relevance:.1f}, problem solving {tech.problem_solving:.1f}",
    ]
    if report.strengths:
        lines.append("Strengths:")
        lines.extend(f"  + {item}" for item in report.strengths)
    if report.improvements:
        lines.append("Areas to improve:")
        lines.extend(
            f"  - [{item.priority}] {item.category}: {item.suggestion}" for item in report.improvements
        )
    if report.resume_alignment is not None:
        alignment = report.resume_alignment
        lines.append(f"Resume alignment: {alignment.alignment_score:.0f}/100")
        if alignment.missing_skills:
            lines.append("  Missing skills: " + ", ".join(alignment.missing_skills))
    lines.append(RULE)
    lines.append(report.summary)
    return "\n".join(lines)


__all__ = ["format_action", "format_progress", "format_question", "format_report"]
