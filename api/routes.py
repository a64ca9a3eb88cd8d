"""FastAPI routes for interview session control."""
from __future__ import annotations

from typing import List, NoReturn

from fastapi import APIRouter, HTTPException, Response

from agents.types import (
    ContinuationPrompt,
    ExperienceLevel,
    InterviewAction,
    JobRole,
    ResumeAnalysis,
    ResumeDocument,
)
from api.schemas import (
    ActionResp,
    ContinueReq,
    CreateSessionReq,
    ErrorDetail,
    ProgressResp,
    QuestionResp,
    ResponseReq,
    ResumeReq,
    SessionCreated,
)
from interview_session import InterviewController
from services.errors import (
    InterviewError,
    InvalidInputError,
    InvalidStateTransitionError,
    SessionNotFoundError,
)

router = APIRouter(prefix="/api")

controller = InterviewController()


def _raise_http(exc: InterviewError) -> NoReturn:
    if isinstance(exc, SessionNotFoundError):
        raise HTTPException(status_code=404, detail=ErrorDetail(message=str(exc)).model_dump()) from exc
    if isinstance(exc, InvalidStateTransitionError):
        raise HTTPException(status_code=409, detail=ErrorDetail(message=str(exc)).model_dump()) from exc
    if isinstance(exc, InvalidInputError):
        detail = ErrorDetail(message=exc.message, options=exc.options)
        raise HTTPException(status_code=400, detail=detail.model_dump()) from exc
    raise HTTPException(status_code=400, detail=ErrorDetail(message=str(exc)).model_dump()) from exc


def _with_prompt(session_id: str, action: InterviewAction) -> ActionResp:
    render = controller.renderer(session_id)
    number = controller.get_progress(session_id).current_question_index + 1
    return ActionResp(**action.model_dump(), prompt=render.action(action, number))


@router.get("/roles", response_model=List[JobRole])
def list_roles() -> List[JobRole]:
    return controller.manager.catalog.roles()


@router.get("/levels", response_model=List[ExperienceLevel])
def list_levels() -> List[ExperienceLevel]:
    return controller.manager.catalog.levels()


@router.post("/sessions", response_model=SessionCreated, status_code=201)
def create_session(req: CreateSessionReq) -> SessionCreated:
    try:
        session_id = controller.create_session(req.role, req.level, req.interactionMode)
        return SessionCreated(
            sessionId=session_id,
            status=controller.manager.get_session(session_id).status,
            expectedDuration=controller.get_expected_duration(session_id),
        )
    except InterviewError as exc:
        _raise_http(exc)


@router.post("/sessions/{session_id}/resume", response_model=ResumeAnalysis)
def upload_resume(session_id: str, req: ResumeReq) -> ResumeAnalysis:
    document = ResumeDocument(content=req.content, format=req.format, filename=req.filename)
    try:
        return controller.upload_resume(session_id, document)
    except InterviewError as exc:
        _raise_http(exc)


@router.post("/sessions/{session_id}/start", response_model=QuestionResp)
def start_interview(session_id: str) -> QuestionResp:
    try:
        question = controller.start_interview(session_id)
        render = controller.renderer(session_id)
        return QuestionResp(**question.model_dump(), prompt=render.question(question, 1))
    except InterviewError as exc:
        _raise_http(exc)


@router.post("/sessions/{session_id}/responses", response_model=ActionResp)
def submit_response(session_id: str, req: ResponseReq) -> ActionResp:
    try:
        return _with_prompt(session_id, controller.submit_response(session_id, req.text))
    except InterviewError as exc:
        _raise_http(exc)


@router.get("/sessions/{session_id}/progress", response_model=ProgressResp)
def get_progress(session_id: str) -> ProgressResp:
    try:
        progress = controller.get_progress(session_id)
        session = controller.manager.get_session(session_id)
    except InterviewError as exc:
        _raise_http(exc)
    current = session.question(session.current_question_id)
    return ProgressResp(
        **progress.model_dump(),
        sessionId=session_id,
        status=session.status,
        currentQuestion=current.text if current else None,
    )


@router.post("/sessions/{session_id}/end", response_model=ActionResp)
def end_interview(session_id: str) -> ActionResp:
    try:
        return _with_prompt(session_id, controller.end_interview_early(session_id))
    except InterviewError as exc:
        _raise_http(exc)


@router.get("/sessions/{session_id}/continuation", response_model=ContinuationPrompt)
def continuation_options(session_id: str) -> ContinuationPrompt:
    try:
        return controller.get_continuation_options(session_id)
    except InterviewError as exc:
        _raise_http(exc)


@router.post("/sessions/continue", response_model=SessionCreated, status_code=201)
def continue_session(req: ContinueReq) -> SessionCreated:
    try:
        prompt = controller.get_continuation_options(req.sessionId)
        option = next((item for item in prompt.options if item.id == req.optionId), None)
        if option is None:
            raise InvalidInputError(
                f'Invalid continuation option: "{req.optionId}". Please select from available options.',
                [item.id for item in prompt.options],
            )
        session_id = controller.continue_with_new_session(option)
        return SessionCreated(
            sessionId=session_id,
            status=controller.manager.get_session(session_id).status,
            expectedDuration=controller.get_expected_duration(session_id),
        )
    except InterviewError as exc:
        _raise_http(exc)


@router.delete("/sessions/{session_id}", status_code=204)
def delete_session(session_id: str) -> Response:
    try:
        controller.cleanup_session(session_id)
    except InterviewError as exc:
        _raise_http(exc)
    return Response(status_code=204)


__all__ = ["controller", "router"]
