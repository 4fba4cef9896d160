"""Shared fixtures for the civics test suite."""

from typing import Iterable, List

import pytest

from civics_backend.config import DEFAULT_POOL_PATH
from civics_backend.core.question_bank import load_question_pool
from civics_frontend.models import Question
from civics_frontend.grading_client import ClassifierHealth, GradeResult


class ScriptedGrader:
    """Grader double that replays a list of verdicts and records each call.

    Items may be booleans (a normal verdict) or GradeResult instances.
    """

    def __init__(self, verdicts: Iterable):
        self.verdicts = list(verdicts)
        self.calls = []

    def grade(self, question: Question, user_answer: str) -> GradeResult:
        self.calls.append((question, user_answer))
        verdict = self.verdicts.pop(0)
        if isinstance(verdict, GradeResult):
            return verdict
        reply = "Yes, that's correct." if verdict else "No.\nThat is not one of the accepted answers."
        return GradeResult(is_correct=verdict, rationale=reply, health=ClassifierHealth.OK)


@pytest.fixture
def question_pool() -> List[Question]:
    return load_question_pool(DEFAULT_POOL_PATH)


@pytest.fixture
def ten_questions() -> List[Question]:
    return [
        Question(question=f"Civics question {i}?", answers=[f"answer {i}", f"alt {i}"])
        for i in range(1, 11)
    ]


@pytest.fixture
def scripted_grader():
    return ScriptedGrader
