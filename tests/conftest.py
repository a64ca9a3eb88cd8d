import random
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from agents.qg.generator import QuestionGenerator
from interview_session import InterviewController
from services.sessions import SessionManager

STRONG_ANSWER = (
    "First, I gathered the requirements with the stakeholders because the scope affected every later decision. "
    "Then I designed a small prototype so that we could measure latency and throughput early. "
    "For example, we compared a cache in front of the database against query tuning, which means we weighed "
    "the trade-offs explicitly. Therefore we chose the cache, and as a result response times dropped by forty "
    "percent. Finally, I documented the architecture and reviewed it with the team in order to share the reasoning."
)


@pytest.fixture
def strong_answer():
    return STRONG_ANSWER


@pytest.fixture
def generator():
    return QuestionGenerator(random.Random(7))


@pytest.fixture
def controller(generator):
    return InterviewController(manager=SessionManager(), generator=generator)


@pytest.fixture
def started(controller):
    session_id = controller.create_session("software-engineer", "mid")
    controller.start_interview(session_id)
    return session_id
