"""HTTP client for the grading API, used by the quiz session."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

import requests

from civics_frontend.errors import ConfigurationError, GradingError, UpstreamError
from civics_frontend.models import Question

logger = logging.getLogger(__name__)


class ClassifierHealth(str, Enum):
    OK = "ok"
    ERROR = "error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GradeResult:
    """Verdict for one answer, or the reason no verdict could be obtained."""

    is_correct: bool
    rationale: str
    health: ClassifierHealth = ClassifierHealth.OK
    error_kind: Optional[str] = None

    @property
    def graded(self) -> bool:
        return self.error_kind is None

    @classmethod
    def failed(cls, error: GradingError) -> "GradeResult":
        return cls(
            is_correct=False,
            rationale=f"Grading failed: {error}",
            health=ClassifierHealth.ERROR,
            error_kind=error.kind,
        )


class GradingClient:
    def __init__(self, base_url: str, timeout: float = 60.0, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def grade(self, question: Question, user_answer: str) -> GradeResult:
        """
        Ask the grading API whether ``user_answer`` answers ``question``.

        Never raises for classifier trouble: configuration and upstream
        failures come back as a ``GradeResult`` with ``health=ERROR`` and
        ``is_correct=False`` so the quiz can move on.
        """
        try:
            is_correct, ai_reply = self._post_grade(question, user_answer)
        except GradingError as e:
            logger.error(f"Grading request failed ({e.kind}): {e}")
            return GradeResult.failed(e)
        return GradeResult(is_correct=is_correct, rationale=ai_reply)

    def _post_grade(self, question: Question, user_answer: str):
        if not self.base_url:
            raise ConfigurationError("API_BASE_URL is not set")

        payload = {
            "question": question.text,
            "answers": list(question.accepted_answers),
            "userAnswer": user_answer,
        }
        try:
            response = self.http.post(f"{self.base_url}/grade", json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"Could not reach grading API: {e}") from e

        data = _json_body(response)
        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            message = message or f"HTTP {response.status_code}"
            if isinstance(data, dict) and data.get("kind") == "configuration":
                raise ConfigurationError(message)
            raise UpstreamError(message)

        if not isinstance(data, dict) or not isinstance(data.get("isCorrect"), bool):
            raise UpstreamError("Grading API returned an unexpected response")
        ai_reply = data.get("aiReply") or ""
        if not isinstance(ai_reply, str):
            raise UpstreamError("Grading API returned an unexpected response")
        return data["isCorrect"], ai_reply

    def fetch_questions(self, count: int) -> List[Question]:
        """Get a freshly sampled question set. Raises UpstreamError on failure."""
        try:
            response = self.http.get(
                f"{self.base_url}/questions",
                params={"count": count},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Could not reach grading API: {e}") from e

        data = _json_body(response)
        if not response.ok or not isinstance(data, dict):
            raise UpstreamError(f"Failed to fetch questions: HTTP {response.status_code}")
        try:
            return [Question.model_validate(item) for item in data["questions"]]
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Malformed question set: {e}") from e


def _json_body(response: requests.Response):
    try:
        return response.json()
    except ValueError:
        return None
