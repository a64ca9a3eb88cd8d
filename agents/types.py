"""Shared type definitions for the interview engine."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

QuestionType = Literal["technical", "behavioral"]
BehaviorType = Literal["confused", "efficient", "chatty", "edge-case", "standard"]
SessionStatus = Literal["initialized", "in-progress", "completed", "ended-early"]
LevelName = Literal["entry", "mid", "senior", "lead"]
InteractionMode = Literal["text", "voice"]
ActionType = Literal["next-question", "follow-up", "complete", "redirect"]
FollowUpReason = Literal["no_response", "too_short", "insufficient_depth", "unclear", "incomplete"]
Priority = Literal["high", "medium", "low"]
Grade = Literal["A", "B", "C", "D", "F"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------------------------------------------------
# Catalog
# ----------------------------------------------------------------------
class QuestionCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    weight: float = Field(gt=0, le=1)
    technical_focus: bool


class JobRole(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    technical_skills: List[str]
    behavioral_competencies: List[str]
    question_categories: List[QuestionCategory]


class ExperienceLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: LevelName
    years_min: int
    years_max: int
    expected_depth: float = Field(gt=0, le=10)

    @model_validator(mode="after")
    def _check_years(self) -> "ExperienceLevel":
        if self.years_max <= self.years_min:
            raise ValueError("years_max must exceed years_min")
        return self


# ----------------------------------------------------------------------
# Resume analysis
# ----------------------------------------------------------------------
class ResumeDocument(BaseModel):
    content: str
    format: Literal["text", "pdf", "docx"] = "text"
    filename: str = "resume.txt"


class ResumeSkill(BaseModel):
    name: str
    category: str


class AlignmentScore(BaseModel):
    overall: float = 0.0
    technical: float = 0.0
    experience: float = 0.0
    cultural: float = 0.0


class ResumeAnalysis(BaseModel):
    technical_skills: List[ResumeSkill] = Field(default_factory=list)
    experience: List[str] = Field(default_factory=list)
    projects: List[str] = Field(default_factory=list)
    achievements: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    alignment_score: AlignmentScore = Field(default_factory=AlignmentScore)
    summary: str = ""


# ----------------------------------------------------------------------
# Questions, responses, evaluations
# ----------------------------------------------------------------------
class ResumeReference(BaseModel):
    section: Literal["skills", "experience", "projects", "achievements"]
    content: str
    relevance: float = Field(default=1.0, ge=0, le=1)


class InterviewQuestion(BaseModel):
    id: str
    type: QuestionType
    text: str
    category: str
    difficulty: int = Field(ge=1, le=10)
    resume_context: Optional[ResumeReference] = None
    expected_elements: List[str] = Field(default_factory=list)
    parent_question_id: Optional[str] = None
    follow_up_count: int = 0

    @property
    def is_follow_up(self) -> bool:
        return self.parent_question_id is not None


class CandidateResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    text: str
    timestamp: datetime = Field(default_factory=utcnow)
    word_count: int = 0
    response_time: float = 0.0  # seconds


class ResponseEvaluation(BaseModel):
    question_id: str
    depth_score: float = Field(ge=0, le=10)
    clarity_score: float = Field(ge=0, le=10)
    completeness_score: float = Field(ge=0, le=10)
    needs_follow_up: bool
    follow_up_reason: Optional[FollowUpReason] = None
    technical_accuracy: Optional[float] = Field(default=None, ge=0, le=10)

    @property
    def average(self) -> float:
        return (self.depth_score + self.clarity_score + self.completeness_score) / 3


class AdaptedResponse(BaseModel):
    content: str
    style: BehaviorType
    adjustments: List[str] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Feedback
# ----------------------------------------------------------------------
class CommunicationScores(BaseModel):
    clarity: float = 0.0
    articulation: float = 0.0
    structure: float = 0.0
    professionalism: float = 0.0
    total: float = Field(default=0.0, ge=0, le=40)
    grade: Grade = "F"


class TechnicalScores(BaseModel):
    depth: float = 0.0
    accuracy: float = 0.0
    relevance: float = 0.0
    problem_solving: float = 0.0
    total: float = Field(default=0.0, ge=0, le=40)
    grade: Grade = "F"


class Improvement(BaseModel):
    category: str
    priority: Priority
    observation: str
    suggestion: str


class AlignmentFeedback(BaseModel):
    alignment_score: float
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    experience_gaps: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class QuestionFeedback(BaseModel):
    question_id: str
    question: str
    category: str
    type: QuestionType
    is_follow_up: bool = False
    response: str
    evaluation: ResponseEvaluation
    feedback: str


class FeedbackReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    communication: CommunicationScores
    technical: TechnicalScores
    overall_score: float = Field(ge=0, le=100)
    overall_grade: Grade
    strengths: List[str] = Field(default_factory=list)
    improvements: List[Improvement] = Field(default_factory=list)
    resume_alignment: Optional[AlignmentFeedback] = None
    question_breakdown: List[QuestionFeedback] = Field(default_factory=list)
    summary: str
    ended_early: bool = False
    generated_at: datetime = Field(default_factory=utcnow)


# ----------------------------------------------------------------------
# Controller outputs
# ----------------------------------------------------------------------
class InterviewAction(BaseModel):
    type: ActionType
    question: Optional[InterviewQuestion] = None
    feedback: Optional[FeedbackReport] = None
    message: str = ""


class Progress(BaseModel):
    total_questions: int
    answered_questions: int
    current_question_index: int
    percent_complete: float = Field(ge=0, le=100)
    estimated_time_remaining: int  # seconds


class ContinuationParameters(BaseModel):
    type: Literal["new-round", "topic-drill"]
    role_id: str
    level: LevelName
    interaction_mode: InteractionMode = "text"
    drill_category: Optional[str] = None


class ContinuationOption(BaseModel):
    id: str
    label: str
    description: str
    parameters: ContinuationParameters


class ContinuationPrompt(BaseModel):
    message: str
    options: List[ContinuationOption] = Field(default_factory=list)


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------
class Session(BaseModel):
    """Mutable state for one interview attempt."""

    id: str
    role: JobRole
    experience_level: ExperienceLevel
    resume_analysis: Optional[ResumeAnalysis] = None
    questions: List[InterviewQuestion] = Field(default_factory=list)
    responses: Dict[str, CandidateResponse] = Field(default_factory=dict)
    evaluations: Dict[str, ResponseEvaluation] = Field(default_factory=dict)
    behavior_type: BehaviorType = "standard"
    behavior_history: List[BehaviorType] = Field(default_factory=list)
    interaction_mode: InteractionMode = "text"
    start_time: datetime = Field(default_factory=utcnow)
    end_time: Optional[datetime] = None
    status: SessionStatus = "initialized"
    current_question_id: Optional[str] = None
    next_primary_index: int = 0
    question_asked_at: Dict[str, datetime] = Field(default_factory=dict)
    edge_case_streak: int = 0
    drill_topic: Optional[str] = None
    feedback: Optional[FeedbackReport] = None

    def question(self, question_id: Optional[str]) -> Optional[InterviewQuestion]:
        for item in self.questions:
            if item.id == question_id:
                return item
        return None

    def primary_questions(self) -> List[InterviewQuestion]:
        return [item for item in self.questions if item.parent_question_id is None]

    def root_of(self, question: InterviewQuestion) -> InterviewQuestion:
        if question.parent_question_id is None:
            return question
        return self.question(question.parent_question_id) or question

    def record_response(self, response: CandidateResponse) -> None:
        if self.question(response.question_id) is None:
            raise KeyError(f"unknown question id: {response.question_id}")
        self.responses[response.question_id] = response

    def record_evaluation(self, evaluation: ResponseEvaluation) -> None:
        if self.question(evaluation.question_id) is None:
            raise KeyError(f"unknown question id: {evaluation.question_id}")
        self.evaluations[evaluation.question_id] = evaluation


__all__ = [
    "ActionType",
    "AdaptedResponse",
    "AlignmentFeedback",
    "AlignmentScore",
    "BehaviorType",
    "CandidateResponse",
    "CommunicationScores",
    "ContinuationOption",
    "ContinuationParameters",
    "ContinuationPrompt",
    "ExperienceLevel",
    "FeedbackReport",
    "FollowUpReason",
    "Grade",
    "Improvement",
    "InteractionMode",
    "InterviewAction",
    "InterviewQuestion",
    "JobRole",
    "LevelName",
    "Priority",
    "Progress",
    "QuestionCategory",
    "QuestionFeedback",
    "QuestionType",
    "ResponseEvaluation",
    "ResumeAnalysis",
    "ResumeDocument",
    "ResumeReference",
    "ResumeSkill",
    "Session",
    "SessionStatus",
    "TechnicalScores",
    "utcnow",
]
