"""Pydantic schemas for the interview session API."""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from agents.types import InteractionMode, InterviewAction, InterviewQuestion, Progress


class CreateSessionReq(BaseModel):
    role: str  # role id or display name
    level: str
    interactionMode: InteractionMode = "text"


class SessionCreated(BaseModel):
    sessionId: str
    status: str
    expectedDuration: int  # seconds


class ResumeReq(BaseModel):
    content: str
    format: Literal["text", "pdf", "docx"] = "text"
    filename: str = "resume.txt"


class ResponseReq(BaseModel):
    text: str = ""


class ContinueReq(BaseModel):
    sessionId: str
    optionId: str


class ErrorDetail(BaseModel):
    message: str
    options: List[str] = Field(default_factory=list)


class ProgressResp(Progress):
    sessionId: str
    status: str
    currentQuestion: Optional[str] = None


class QuestionResp(InterviewQuestion):
    prompt: str  # rendered for the session's interaction mode


class ActionResp(InterviewAction):
    prompt: str


__all__ = [
    "ActionResp",
    "ContinueReq",
    "CreateSessionReq",
    "ErrorDetail",
    "ProgressResp",
    "QuestionResp",
    "ResponseReq",
    "ResumeReq",
    "SessionCreated",
]
