from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import api.routes as routes
from api_server import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def seeded_controller(monkeypatch, controller):
    monkeypatch.setattr(routes, "controller", controller)
    return controller


def _create(role="software-engineer", level="mid"):
    resp = client.post("/api/sessions", json={"role": role, "level": level})
    assert resp.status_code == 201
    return resp.json()["sessionId"]


def test_catalog_endpoints():
    roles = client.get("/api/roles").json()
    assert len(roles) == 6
    assert roles[0]["id"] == "software-engineer"
    levels = client.get("/api/levels").json()
    assert [level["level"] for level in levels] == ["entry", "mid", "senior", "lead"]
    assert client.get("/health").json() == {"status": "ok"}


def test_invalid_role_returns_options():
    resp = client.post("/api/sessions", json={"role": "astronaut", "level": "mid"})
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert "astronaut" in detail["message"]
    assert "software-engineer" in detail["options"]


def test_full_flow(strong_answer):
    created = client.post("/api/sessions", json={"role": "Software Engineer", "level": "mid"})
    assert created.status_code == 201
    body = created.json()
    session_id = body["sessionId"]
    assert body["status"] == "initialized"
    assert body["expectedDuration"] > 0

    resume = client.post(f"/api/sessions/{session_id}/resume", json={"content": "Skills: Python, React, AWS"})
    assert resume.status_code == 200
    assert [skill["name"] for skill in resume.json()["technical_skills"]] == ["Python", "React", "AWS"]

    first = client.post(f"/api/sessions/{session_id}/start")
    assert first.status_code == 200
    assert first.json()["text"]

    turn = client.post(f"/api/sessions/{session_id}/responses", json={"text": "I worked on a team project."})
    assert turn.status_code == 200
    assert turn.json()["type"] == "follow-up"

    progress = client.get(f"/api/sessions/{session_id}/progress").json()
    assert progress["total_questions"] == 8
    assert progress["status"] == "in-progress"
    assert progress["currentQuestion"] == turn.json()["question"]["text"]

    while True:
        action = client.post(f"/api/sessions/{session_id}/responses", json={"text": strong_answer}).json()
        if action["type"] == "complete":
            break
    report = action["feedback"]
    assert 0 <= report["overall_score"] <= 100
    assert report["resume_alignment"] is not None

    late = client.post(f"/api/sessions/{session_id}/responses", json={"text": strong_answer})
    assert late.status_code == 409
    assert "completed" in late.json()["detail"]["message"]

    prompt = client.get(f"/api/sessions/{session_id}/continuation").json()
    assert prompt["message"] == "Would you like to continue practicing?"
    follow_on = client.post("/api/sessions/continue", json={"sessionId": session_id, "optionId": "new-round-same"})
    assert follow_on.status_code == 201
    assert follow_on.json()["sessionId"] != session_id

    bad_option = client.post("/api/sessions/continue", json={"sessionId": session_id, "optionId": "nope"})
    assert bad_option.status_code == 400
    assert "new-round-same" in bad_option.json()["detail"]["options"]


def test_end_early_and_delete():
    session_id = _create(level="entry")
    assert client.post(f"/api/sessions/{session_id}/end").status_code == 409
    client.post(f"/api/sessions/{session_id}/start")
    ended = client.post(f"/api/sessions/{session_id}/end")
    assert ended.status_code == 200
    assert ended.json()["feedback"]["ended_early"] is True
    assert ended.json()["feedback"]["overall_grade"] == "F"

    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/sessions/{session_id}/progress").status_code == 404
    assert client.delete(f"/api/sessions/{session_id}").status_code == 404


def test_prompts_follow_interaction_mode():
    text_id = _create()
    text_start = client.post(f"/api/sessions/{text_id}/start").json()
    assert text_start["prompt"].startswith("Question 1 [")

    resp = client.post("/api/sessions", json={"role": "software-engineer", "level": "mid", "interactionMode": "voice"})
    voice_id = resp.json()["sessionId"]
    voice_start = client.post(f"/api/sessions/{voice_id}/start").json()
    assert voice_start["prompt"].startswith("Question 1. ")
    assert "[" not in voice_start["prompt"]

    turn = client.post(f"/api/sessions/{voice_id}/responses", json={"text": "I worked on a team project."}).json()
    assert turn["type"] == "follow-up"
    assert "Let me follow up on that." in turn["prompt"]
    ended = client.post(f"/api/sessions/{voice_id}/end").json()
    assert "Here is your feedback." in ended["prompt"]
