"""Tests for the HTTP endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from civics_backend.api import grade
from civics_backend.core.errors import ConfigurationError, UpstreamError
from civics_backend.core.grading_agent import GradeVerdict
from civics_backend.main import app

GRADE_BODY = {
    "question": "What is the supreme law of the land?",
    "answers": ["the Constitution"],
    "userAnswer": "  the constitution  ",
}


@pytest.fixture
def agent():
    return MagicMock()


@pytest.fixture
def client(agent, question_pool):
    grade.set_dependencies(agent, question_pool)
    yield TestClient(app)
    grade.set_dependencies(None, [])


class TestGradeEndpoint:
    """POST /api/grade"""

    def test_correct_answer(self, client, agent):
        agent.grade = AsyncMock(return_value=GradeVerdict(is_correct=True, ai_reply="Yes\nCorrect."))

        response = client.post("/api/grade", json=GRADE_BODY)

        assert response.status_code == 200
        assert response.json() == {"isCorrect": True, "aiReply": "Yes\nCorrect."}
        agent.grade.assert_awaited_once_with(
            question="What is the supreme law of the land?",
            answers=["the Constitution"],
            user_answer="the constitution",
        )

    def test_incorrect_answer(self, client, agent):
        agent.grade = AsyncMock(return_value=GradeVerdict(is_correct=False, ai_reply="No."))

        response = client.post("/api/grade", json=GRADE_BODY)

        assert response.status_code == 200
        assert response.json()["isCorrect"] is False

    def test_missing_credential(self, client, agent):
        agent.grade = AsyncMock(side_effect=ConfigurationError("No API key"))

        response = client.post("/api/grade", json=GRADE_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "No API key", "kind": "configuration"}

    def test_upstream_failure(self, client, agent):
        agent.grade = AsyncMock(side_effect=UpstreamError("deadline exceeded"))

        response = client.post("/api/grade", json=GRADE_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "deadline exceeded", "kind": "upstream"}

    def test_unexpected_failure_reported_as_upstream(self, client, agent):
        agent.grade = AsyncMock(side_effect=KeyError("choices"))

        response = client.post("/api/grade", json=GRADE_BODY)

        assert response.status_code == 500
        assert response.json()["kind"] == "upstream"
        assert response.json()["error"]

    @pytest.mark.parametrize("body", [
        {**GRADE_BODY, "userAnswer": "   "},
        {**GRADE_BODY, "answers": []},
        {"question": "Q?", "answers": ["a"]},
    ])
    def test_invalid_body_rejected_before_grading(self, client, agent, body):
        agent.grade = AsyncMock()

        response = client.post("/api/grade", json=body)

        assert response.status_code == 422
        assert response.json()["kind"] == "validation"
        agent.grade.assert_not_awaited()


class TestQuestionsEndpoint:
    """GET /api/questions"""

    def test_default_sample_size(self, client):
        response = client.get("/api/questions")

        assert response.status_code == 200
        questions = response.json()["questions"]
        assert len(questions) == 10
        assert len({q["question"] for q in questions}) == 10
        assert all(q["answers"] for q in questions)

    def test_custom_count(self, client):
        response = client.get("/api/questions", params={"count": 3})

        assert len(response.json()["questions"]) == 3

    def test_zero_count_rejected(self, client):
        response = client.get("/api/questions", params={"count": 0})

        assert response.status_code == 422


class TestHealth:
    def test_health_reports_pool(self, client, question_pool):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["pool_size"] == len(question_pool)
