"""Interview controller driving the per-turn protocol."""
from __future__ import annotations

import re
from datetime import datetime
from typing import List, Optional, Union

from agents.behavior_classifier import classify_behavior, is_off_topic
from agents.communication_adapter import acknowledgment, adapt_response, transition
from agents.feedback_generator import category_averages, generate_feedback
from agents.qg.generator import QuestionGenerator
from agents.response_evaluator import evaluate_response, word_count
from agents.types import (
    AdaptedResponse,
    BehaviorType,
    CandidateResponse,
    ContinuationOption,
    ContinuationParameters,
    ContinuationPrompt,
    InteractionMode,
    InterviewAction,
    InterviewQuestion,
    Progress,
    ResponseEvaluation,
    ResumeAnalysis,
    ResumeDocument,
    Session,
    utcnow,
)
from config.settings import settings
from observability.logger import log_event
from services.scoring import clamp
from services.sessions import (
    COMPLETE_INTERVIEW,
    CONTINUATION,
    END_EARLY,
    START_INTERVIEW,
    SUBMIT_RESPONSE,
    SessionManager,
)
from services.turn_policy import next_edge_case_streak, remaining_follow_ups, should_redirect

from .rendering import Renderer, renderer_for

CONTINUATION_MESSAGE = "Would you like to continue practicing?"
LEVEL_ORDER = ("entry", "mid", "senior", "lead")
MAX_DRILL_OPTIONS = 3


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")


class InterviewController:
    """Top-level orchestrator tying sessions, questions, evaluation and feedback together."""

    def __init__(
        self,
        manager: Optional[SessionManager] = None,
        generator: Optional[QuestionGenerator] = None,
    ):
        self.manager = manager or SessionManager()
        self.generator = generator or QuestionGenerator()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def create_session(
        self,
        role_id_or_name: str,
        level: str,
        interaction_mode: InteractionMode = "text",
    ) -> str:
        return self.manager.create_session(role_id_or_name, level, interaction_mode).id

    def upload_resume(self, session_id: str, document: Union[ResumeDocument, str]) -> ResumeAnalysis:
        if isinstance(document, str):
            document = ResumeDocument(content=document)
        return self.manager.upload_resume(session_id, document)

    def start_interview(self, session_id: str) -> InterviewQuestion:
        session = self.manager.get_session(session_id)
        self.manager.require(session, START_INTERVIEW)
        questions = self.generator.generate_question_set(
            session.role,
            session.experience_level,
            session.resume_analysis,
            drill_category=session.drill_topic,
        )
        session.questions = questions
        session.next_primary_index = 1
        self._ask(session, questions[0])
        self.manager.transition(session, START_INTERVIEW)
        log_event("interview_started", session.id, question_id=questions[0].id, total=len(questions))
        return questions[0]

    def current_question(self, session_id: str) -> Optional[InterviewQuestion]:
        session = self.manager.get_session(session_id)
        return session.question(session.current_question_id)

    def submit_response(
        self, session_id: str, payload: Union[str, CandidateResponse]
    ) -> InterviewAction:
        """Evaluate, classify, then decide between follow-up, next question, completion or redirect."""

        session = self.manager.get_session(session_id)
        self.manager.require(session, SUBMIT_RESPONSE)

        response = self._build_response(session, payload)
        question = session.question(response.question_id)
        if question is None or question.id not in session.question_asked_at:
            reason = "unknown_question" if question is None else "not_asked"
            log_event("redirect", session.id, reason=reason, question_id=response.question_id)
            return InterviewAction(
                type="redirect",
                question=session.question(session.current_question_id),
                message=(
                    "That question is not part of this interview. Please answer the current question."
                    if question is None
                    else "That question has not been asked yet. Please answer the current question."
                ),
            )

        evaluation = evaluate_response(question, response, session.role)
        session.record_response(response)
        session.record_evaluation(evaluation)

        behavior = classify_behavior(response.text)
        session.behavior_type = behavior
        session.behavior_history.append(behavior)
        session.edge_case_streak = next_edge_case_streak(session.edge_case_streak, behavior)
        log_event(
            "response_evaluated",
            session.id,
            question_id=question.id,
            behavior=behavior,
            reason=evaluation.follow_up_reason,
            score=round(evaluation.average, 1),
        )

        action = self._decide(session, question, evaluation, response.text)
        self.manager.save(session)
        return action

    def end_interview_early(self, session_id: str) -> InterviewAction:
        session = self.manager.get_session(session_id)
        self.manager.require(session, END_EARLY)
        return self._finish(session, ended_early=True)

    def cleanup_session(self, session_id: str) -> None:
        self.manager.get_session(session_id)
        self.manager.delete_session(session_id)

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------
    def get_progress(self, session_id: str) -> Progress:
        session = self.manager.get_session(session_id)
        primaries = session.primary_questions()
        total = len(primaries)
        answered = sum(1 for question in primaries if question.id in session.responses)
        current = session.question(session.current_question_id)
        if current is None:
            index = total if session.status in ("completed", "ended-early") else 0
        else:
            root = session.root_of(current)
            index = next((i for i, question in enumerate(primaries) if question.id == root.id), 0)
        percent = clamp(round(100.0 * answered / total, 1), 0.0, 100.0) if total else 0.0
        return Progress(
            total_questions=total,
            answered_questions=min(answered, total),
            current_question_index=index,
            percent_complete=percent,
            estimated_time_remaining=max(0, total - answered) * settings.AVERAGE_QUESTION_SECONDS,
        )

    def get_expected_duration(self, session_id: str) -> int:
        """Expected interview length in seconds."""

        session = self.manager.get_session(session_id)
        total = len(session.primary_questions()) or self.generator.question_count(session.experience_level)
        return total * settings.AVERAGE_QUESTION_SECONDS

    # ------------------------------------------------------------------
    # Continuation
    # ------------------------------------------------------------------
    def get_continuation_options(self, session_id: str) -> ContinuationPrompt:
        session = self.manager.get_session(session_id)
        self.manager.require(session, CONTINUATION)
        role_id = session.role.id
        level = session.experience_level.level
        mode = session.interaction_mode
        options: List[ContinuationOption] = [
            ContinuationOption(
                id="new-round-same",
                label="New round",
                description=f"Another {session.role.name} interview at the {level} level with fresh questions.",
                parameters=ContinuationParameters(
                    type="new-round", role_id=role_id, level=level, interaction_mode=mode
                ),
            )
        ]
        position = LEVEL_ORDER.index(level)
        if position + 1 < len(LEVEL_ORDER):
            harder = LEVEL_ORDER[position + 1]
            options.append(
                ContinuationOption(
                    id="new-round-harder",
                    label="Step up a level",
                    description=f"A {session.role.name} interview pitched at the {harder} level.",
                    parameters=ContinuationParameters(
                        type="new-round", role_id=role_id, level=harder, interaction_mode=mode
                    ),
                )
            )
        weak = sorted(
            (
                (score, category)
                for category, score in category_averages(session).items()
                if score < settings.STRENGTH_THRESHOLD
            ),
        )
        for score, category in weak[:MAX_DRILL_OPTIONS]:
            options.append(
                ContinuationOption(
                    id=f"drill-{_slug(category)}",
                    label=f"Drill {category}",
                    description=f"Focus on {category}, where your answers averaged {score:.1f}/10.",
                    parameters=ContinuationParameters(
                        type="topic-drill",
                        role_id=role_id,
                        level=level,
                        interaction_mode=mode,
                        drill_category=category,
                    ),
                )
            )
        return ContinuationPrompt(message=CONTINUATION_MESSAGE, options=options)

    def continue_with_new_session(
        self, options: Union[ContinuationParameters, ContinuationOption]
    ) -> str:
        """Create a fresh session from a continuation choice; the old session is untouched."""

        parameters = options.parameters if isinstance(options, ContinuationOption) else options
        session = self.manager.create_session(
            parameters.role_id, parameters.level, parameters.interaction_mode
        )
        if parameters.type == "topic-drill" and parameters.drill_category:
            session.drill_topic = parameters.drill_category
            self.manager.save(session)
        log_event("session_continued", session.id, action=parameters.type, drill=parameters.drill_category)
        return session.id

    # ------------------------------------------------------------------
    # Communication
    # ------------------------------------------------------------------
    def current_behavior(self, session_id: str) -> BehaviorType:
        return self.manager.get_session(session_id).behavior_type

    def acknowledgment(self, session_id: str) -> str:
        return acknowledgment(self.current_behavior(session_id))

    def transition(self, session_id: str) -> str:
        return transition(self.current_behavior(session_id))

    def adapted_response(self, session_id: str, content: str) -> AdaptedResponse:
        return adapt_response(content, self.current_behavior(session_id))

    def renderer(self, session_id: str) -> Renderer:
        """Text or voice renderer matching the session's interaction mode."""

        return renderer_for(self.manager.get_session(session_id).interaction_mode)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _ask(self, session: Session, question: InterviewQuestion) -> None:
        session.current_question_id = question.id
        session.question_asked_at[question.id] = utcnow()

    def _build_response(self, session: Session, payload: Union[str, CandidateResponse]) -> CandidateResponse:
        if isinstance(payload, CandidateResponse):
            return payload
        question_id = session.current_question_id or ""
        asked: Optional[datetime] = session.question_asked_at.get(question_id)
        now = utcnow()
        text = payload or ""
        return CandidateResponse(
            question_id=question_id,
            text=text,
            timestamp=now,
            word_count=word_count(text),
            response_time=(now - asked).total_seconds() if asked else 0.0,
        )

    def _turn_message(self, behavior: BehaviorType) -> str:
        if behavior == "edge-case":
            return adapt_response(transition(behavior), behavior).content
        return adapt_response(f"{acknowledgment(behavior)} {transition(behavior)}", behavior).content

    def _decide(
        self,
        session: Session,
        question: InterviewQuestion,
        evaluation: ResponseEvaluation,
        response_text: str,
    ) -> InterviewAction:
        behavior = session.behavior_type
        current = session.question(session.current_question_id) or question
        if session.root_of(question).id != session.root_of(current).id:
            # Revised answer to an earlier question; the cursor stays where it is.
            log_event("answer_revised", session.id, question_id=question.id)
            return InterviewAction(
                type="redirect",
                question=current,
                message=f"Your earlier answer has been updated. Let's continue with the current question: {current.text}",
            )

        if should_redirect(session.edge_case_streak):
            log_event("redirect", session.id, reason="edge_case_streak", question_id=current.id)
            return InterviewAction(
                type="redirect",
                question=current,
                message=adapt_response(f"Let's return to the current question: {current.text}", behavior).content,
            )

        if is_off_topic(response_text, current.text):
            log_event("redirect", session.id, reason="off_topic", question_id=current.id)
            return InterviewAction(
                type="redirect",
                question=current,
                message=(
                    "Your answer seems to have drifted away from the question. "
                    f"Please focus on what was asked: {current.text}"
                ),
            )

        root = session.root_of(question)
        if evaluation.needs_follow_up and remaining_follow_ups(root) > 0:
            follow_up = self.generator.generate_follow_up(root, evaluation, response_text)
            if follow_up is not None:
                session.questions.append(follow_up)
                self._ask(session, follow_up)
                log_event("follow_up", session.id, question_id=follow_up.id, reason=evaluation.follow_up_reason)
                return InterviewAction(type="follow-up", question=follow_up, message=self._turn_message(behavior))

        primaries = session.primary_questions()
        if session.next_primary_index < len(primaries):
            upcoming = primaries[session.next_primary_index]
            session.next_primary_index += 1
            self._ask(session, upcoming)
            return InterviewAction(type="next-question", question=upcoming, message=self._turn_message(behavior))

        return self._finish(session, ended_early=False)

    def _finish(self, session: Session, ended_early: bool) -> InterviewAction:
        report = generate_feedback(session, ended_early=ended_early)
        session.feedback = report
        session.current_question_id = None
        self.manager.transition(session, END_EARLY if ended_early else COMPLETE_INTERVIEW)
        log_event(
            "interview_ended_early" if ended_early else "interview_completed",
            session.id,
            status=session.status,
            score=report.overall_score,
            grade=report.overall_grade,
        )
        message = (
            "The interview has ended early. Here is feedback on the questions you answered."
            if ended_early
            else "Thank you for completing the interview. Your feedback report is ready."
        )
        return InterviewAction(type="complete", feedback=report, message=message)


__all__ = ["CONTINUATION_MESSAGE", "InterviewController"]
