"""Feedback report generation from a finished or interrupted session."""
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, List, Optional, Tuple

from agents.response_evaluator import mentioned_terms, role_terms, sentences, word_count
from agents.types import (
    AlignmentFeedback,
    CommunicationScores,
    FeedbackReport,
    Improvement,
    InterviewQuestion,
    JobRole,
    QuestionFeedback,
    ResponseEvaluation,
    ResumeAnalysis,
    Session,
    TechnicalScores,
)
from config.markers import marker_engine
from config.settings import settings
from services.scoring import average, clamp, grade_for, overall_score, percent_of_40, priority_for, total_of

_WORD = re.compile(r"[a-z']+")

DIMENSION_SUGGESTIONS: Dict[str, str] = {
    "Clarity": "Lead with a one-sentence answer, then support it with two or three short points.",
    "Articulation": "Use precise verbs for your own actions and cut filler words such as 'basically'.",
    "Structure": "Frame answers with the STAR method: situation, task, action, result.",
    "Professionalism": "Keep a concise, professional register and stay on the question asked.",
    "Technical Depth": "Explain why you chose an approach and which alternatives you rejected.",
    "Technical Accuracy": "Name the specific technologies, patterns and trade-offs involved.",
    "Technical Relevance": "Tie each answer back to the skills the role calls for.",
    "Problem-Solving Completeness": "Cover every part of the question before moving to details.",
}

REASON_HINTS: Dict[str, str] = {
    "no_response": "No answer was given.",
    "too_short": "The answer was too brief to assess.",
    "insufficient_depth": "Add more detail on how and why.",
    "unclear": "Organize the answer into clear steps.",
    "incomplete": "Some expected points were not covered.",
}


# ----------------------------------------------------------------------
# Per-response communication signals
# ----------------------------------------------------------------------
def articulation_score(text: str) -> float:
    words = _WORD.findall((text or "").lower())
    if not words:
        return 0.0
    engine = marker_engine()
    variety = len(set(words)) / len(words)
    score = 4.0 + 4.0 * variety
    score += min(2.0, 0.5 * engine.count(text, "action_verb"))
    score -= min(3.0, 0.5 * engine.count(text, "filler"))
    return clamp(score)


def structure_score(text: str) -> float:
    if not word_count(text):
        return 0.0
    score = 4.0 + min(4.0, float(marker_engine().count(text, "connector")))
    parts = len(sentences(text))
    if parts >= 3:
        score += 2.0
    elif parts == 2:
        score += 1.0
    return clamp(score)


def professionalism_score(text: str) -> float:
    words = word_count(text)
    if not words:
        return 0.0
    score = 8.0 - min(4.0, float(marker_engine().count(text, "casual")))
    if words < 15:
        score -= 2.0
    return clamp(score)


def relevance_score(text: str, question: InterviewQuestion, role: JobRole) -> float:
    if not word_count(text):
        return 0.0
    skill_hits = len(mentioned_terms(text, role_terms(role)))
    category_hits = len(mentioned_terms(text, set(marker_engine().category_keywords(question.category))))
    return clamp(3.0 + min(4.0, 1.5 * skill_hits) + min(3.0, 1.5 * category_hits))


# ----------------------------------------------------------------------
# Aggregation
# ----------------------------------------------------------------------
def answered(session: Session) -> List[Tuple[InterviewQuestion, str, ResponseEvaluation]]:
    rows = []
    for question in session.questions:
        response = session.responses.get(question.id)
        evaluation = session.evaluations.get(question.id)
        if response is not None and evaluation is not None:
            rows.append((question, response.text, evaluation))
    return rows


def behavior_shares(session: Session) -> Dict[str, float]:
    history = session.behavior_history
    if not history:
        return {}
    counts = Counter(history)
    return {behavior: counts[behavior] / len(history) for behavior in counts}


def communication_scores(session: Session) -> CommunicationScores:
    rows = answered(session)
    if not rows:
        return CommunicationScores()
    shares = behavior_shares(session)
    chatty = shares.get("chatty", 0.0)
    confused = shares.get("confused", 0.0)
    edge = shares.get("edge-case", 0.0)

    clarity = average(evaluation.clarity_score for _, _, evaluation in rows)
    articulation = average(articulation_score(text) for _, text, _ in rows)
    structure = clamp(average(structure_score(text) for _, text, _ in rows) - 3.0 * chatty - 2.0 * confused)
    professionalism = clamp(
        average(professionalism_score(text) for _, text, _ in rows) - 3.0 * edge - 1.5 * chatty
    )
    total = total_of(clarity, articulation, structure, professionalism)
    return CommunicationScores(
        clarity=clarity,
        articulation=articulation,
        structure=structure,
        professionalism=professionalism,
        total=total,
        grade=grade_for(percent_of_40(total)),
    )


def technical_scores(session: Session) -> TechnicalScores:
    rows = [row for row in answered(session) if row[0].type == "technical"]
    if not rows:
        return TechnicalScores()
    depth = average(evaluation.depth_score for _, _, evaluation in rows)
    accuracy = average(evaluation.technical_accuracy or 0.0 for _, _, evaluation in rows)
    relevance = average(relevance_score(text, question, session.role) for question, text, _ in rows)
    problem_solving = average(evaluation.completeness_score for _, _, evaluation in rows)
    total = total_of(depth, accuracy, relevance, problem_solving)
    return TechnicalScores(
        depth=depth,
        accuracy=accuracy,
        relevance=relevance,
        problem_solving=problem_solving,
        total=total,
        grade=grade_for(percent_of_40(total)),
    )


def category_averages(session: Session) -> Dict[str, float]:
    buckets: Dict[str, List[float]] = {}
    for question, _, evaluation in answered(session):
        buckets.setdefault(question.category, []).append(evaluation.average)
    return {category: average(values) for category, values in buckets.items()}


def _areas(
    session: Session, communication: CommunicationScores, technical: TechnicalScores
) -> Dict[str, float]:
    rows = answered(session)
    areas: Dict[str, float] = dict(category_averages(session))
    if rows:
        areas.update(
            {
                "Clarity": communication.clarity,
                "Articulation": communication.articulation,
                "Structure": communication.structure,
                "Professionalism": communication.professionalism,
            }
        )
    if any(question.type == "technical" for question, _, _ in rows):
        areas.update(
            {
                "Technical Depth": technical.depth,
                "Technical Accuracy": technical.accuracy,
                "Technical Relevance": technical.relevance,
                "Problem-Solving Completeness": technical.problem_solving,
            }
        )
    return areas


def strengths_from(areas: Dict[str, float]) -> List[str]:
    threshold = settings.STRENGTH_THRESHOLD
    strong = sorted(
        ((name, score) for name, score in areas.items() if score >= threshold),
        key=lambda pair: pair[1],
        reverse=True,
    )
    return [f"{name} ({score:.1f}/10)" for name, score in strong]


def _completeness_gap(session: Session) -> Optional[Tuple[float, Improvement]]:
    primaries = [question for question in session.primary_questions() if question.id in session.evaluations]
    if not primaries:
        return None
    needed = sum(1 for question in primaries if session.evaluations[question.id].needs_follow_up)
    ratio = needed / len(primaries)
    if ratio <= 0.5:
        return None
    return (
        10.0 * (1.0 - ratio),
        Improvement(
            category="Response Completeness",
            priority="high" if ratio >= 0.75 else "medium",
            observation=f"{needed} of {len(primaries)} answers needed a follow-up question.",
            suggestion=(
                "Aim to answer fully the first time: give the context, your specific actions "
                "and the measurable outcome."
            ),
        ),
    )


def improvements_from(session: Session, areas: Dict[str, float]) -> List[Improvement]:
    threshold = settings.STRENGTH_THRESHOLD
    ranked: List[Tuple[float, Improvement]] = []
    for name, score in areas.items():
        if score >= threshold:
            continue
        suggestion = DIMENSION_SUGGESTIONS.get(
            name,
            f"Practice {name} questions: state the problem, outline your approach, then quantify the result.",
        )
        ranked.append(
            (
                score,
                Improvement(
                    category=name,
                    priority=priority_for(score, threshold),
                    observation=f"{name} averaged {score:.1f}/10, below the {threshold:.0f}/10 target.",
                    suggestion=suggestion,
                ),
            )
        )
    gap = _completeness_gap(session)
    if gap is not None:
        ranked.append(gap)
    ranked.sort(key=lambda pair: pair[0])
    return [item for _, item in ranked]


def alignment_from(analysis: Optional[ResumeAnalysis]) -> Optional[AlignmentFeedback]:
    if analysis is None:
        return None
    suggestions = [
        f"Prepare a concrete example that demonstrates {skill}." for skill in analysis.missing_skills[:3]
    ]
    if analysis.alignment_score.overall < 60:
        suggestions.append("Highlight role-relevant projects and quantify their outcomes on your resume.")
    return AlignmentFeedback(
        alignment_score=analysis.alignment_score.overall,
        matched_skills=list(analysis.matched_skills),
        missing_skills=list(analysis.missing_skills),
        experience_gaps=list(analysis.gaps),
        suggestions=suggestions,
    )


def question_feedback(evaluation: ResponseEvaluation) -> str:
    score = evaluation.average
    if score >= 8:
        line = "Strong response."
    elif score >= 6:
        line = "Good response."
    else:
        line = "Response needs improvement."
    if evaluation.follow_up_reason:
        line = f"{line} {REASON_HINTS[evaluation.follow_up_reason]}"
    return line


def breakdown(session: Session) -> List[QuestionFeedback]:
    return [
        QuestionFeedback(
            question_id=question.id,
            question=question.text,
            category=question.category,
            type=question.type,
            is_follow_up=question.is_follow_up,
            response=text,
            evaluation=evaluation,
            feedback=question_feedback(evaluation),
        )
        for question, text, evaluation in answered(session)
    ]


def summarize(
    grade: str,
    score: float,
    strengths: List[str],
    improvements: List[Improvement],
    answered_count: int,
    ended_early: bool,
) -> str:
    parts = [f"Overall grade {grade} ({score:.1f}/100)."]
    parts.append(f"Top strength: {strengths[0]}." if strengths else "No standout strengths yet.")
    parts.append(
        f"Top improvement: {improvements[0].category}." if improvements else "No major gaps identified."
    )
    if ended_early:
        parts.append(f"Partial report based on {answered_count} answered question(s).")
    return " ".join(parts)


def generate_feedback(session: Session, ended_early: bool = False) -> FeedbackReport:
    """Aggregate every stored evaluation into a ``FeedbackReport``."""

    communication = communication_scores(session)
    technical = technical_scores(session)
    score = overall_score(communication.total, technical.total)
    grade = grade_for(score)
    areas = _areas(session, communication, technical)
    strengths = strengths_from(areas)
    improvements = improvements_from(session, areas)
    items = breakdown(session)
    return FeedbackReport(
        communication=communication,
        technical=technical,
        overall_score=score,
        overall_grade=grade,
        strengths=strengths,
        improvements=improvements,
        resume_alignment=alignment_from(session.resume_analysis),
        question_breakdown=items,
        summary=summarize(grade, score, strengths, improvements, len(items), ended_early),
        ended_early=ended_early,
    )


__all__ = [
    "articulation_score",
    "behavior_shares",
    "breakdown",
    "category_averages",
    "communication_scores",
    "generate_feedback",
    "professionalism_score",
    "relevance_score",
    "structure_score",
    "technical_scores",
]
