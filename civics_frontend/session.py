"""Quiz session state machine.

A session walks through a fixed question set, grades each submitted answer
once, and stops as soon as the pass threshold is reached or the questions
run out. The presentation layer reads immutable snapshots and sends back
``submit_answer`` and ``restart`` intents.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple
import logging

from pydantic import BaseModel, ConfigDict

from civics_frontend.errors import GradingError, ValidationError
from civics_frontend.models import Question
from civics_frontend.grading_client import ClassifierHealth, GradeResult

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 6
TOTAL_QUESTIONS = 10


class SessionStatus(str, Enum):
    IN_PROGRESS = "in-progress"
    PASSED = "passed"
    FAILED = "failed"


class Outcome(BaseModel):
    """Result of one answered question."""

    model_config = ConfigDict(frozen=True)

    question: Question
    user_answer: str
    is_correct: bool
    rationale: str
    accepted_answers: Tuple[str, ...]
    graded: bool = True


class SessionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    questions: Tuple[Question, ...]
    current_index: int
    correct_count: int
    outcomes: Tuple[Outcome, ...]
    status: SessionStatus
    pending: bool
    health: ClassifierHealth
    pass_threshold: int

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Optional[Question]:
        if self.status is not SessionStatus.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    @property
    def is_finished(self) -> bool:
        return self.status is not SessionStatus.IN_PROGRESS


def validate_answer(user_answer: Optional[str]) -> str:
    """Return the trimmed answer, or raise ValidationError if nothing is left."""
    answer = (user_answer or "").strip()
    if not answer:
        raise ValidationError("Answer must not be empty")
    return answer


class QuizSession:
    """
    One attempt at the quiz.
    - Grades at most one answer at a time; extra submissions are dropped
    - Passes the moment ``pass_threshold`` correct answers are recorded
    - Fails only after the last question is answered below the threshold
    """

    def __init__(self, questions: Sequence[Question], grader, pass_threshold: int = PASS_THRESHOLD):
        if not questions:
            raise ValueError("A quiz session needs at least one question")
        if not 1 <= pass_threshold <= len(questions):
            raise ValueError(f"pass_threshold must be between 1 and {len(questions)}")

        self.questions: Tuple[Question, ...] = tuple(questions)
        self.grader = grader
        self.pass_threshold = pass_threshold

        self.current_index = 0
        self.correct_count = 0
        self.outcomes: List[Outcome] = []
        self.status = SessionStatus.IN_PROGRESS
        self.pending = False
        self.health = ClassifierHealth.UNKNOWN
        self._grading_disabled = False

    @property
    def current_question(self) -> Optional[Question]:
        if self.status is not SessionStatus.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    def submit_answer(self, user_answer: Optional[str]) -> Optional[Outcome]:
        """
        Grade ``user_answer`` against the current question and advance.

        Returns the recorded Outcome, or None when the submission is ignored:
        the session is finished, another answer is being graded, or the
        answer is blank.
        """
        if self.status is not SessionStatus.IN_PROGRESS:
            logger.debug("Ignoring submission: session already finished")
            return None
        if self.pending:
            logger.debug("Ignoring submission: grading already in progress")
            return None
        try:
            answer = validate_answer(user_answer)
        except ValidationError:
            logger.debug("Ignoring submission: empty answer")
            return None

        question = self.questions[self.current_index]
        self.pending = True
        try:
            result = self._grade(question, answer)
        finally:
            self.pending = False

        outcome = Outcome(
            question=question,
            user_answer=answer,
            is_correct=result.is_correct,
            rationale=result.rationale,
            accepted_answers=tuple(question.accepted_answers),
            graded=result.graded,
        )
        self._record(outcome, result)
        return outcome

    def _grade(self, question: Question, answer: str) -> GradeResult:
        if self._grading_disabled:
            return GradeResult(
                is_correct=False,
                rationale="Grading unavailable: the grading service is not configured",
                health=ClassifierHealth.ERROR,
                error_kind="configuration",
            )
        try:
            return self.grader.grade(question, answer)
        except GradingError as e:
            logger.error(f"Grader raised {e.kind} error: {e}")
            return GradeResult.failed(e)

    def _record(self, outcome: Outcome, result: GradeResult):
        self.outcomes.append(outcome)
        if outcome.is_correct:
            self.correct_count += 1
        self.current_index += 1

        if result.health is ClassifierHealth.ERROR:
            self.health = ClassifierHealth.ERROR
        elif self.health is ClassifierHealth.UNKNOWN:
            self.health = ClassifierHealth.OK
        if result.error_kind == "configuration":
            self._grading_disabled = True

        if self.correct_count >= self.pass_threshold:
            self.status = SessionStatus.PASSED
        elif self.current_index == len(self.questions):
            self.status = SessionStatus.FAILED

        logger.info(
            f"Question {self.current_index}/{len(self.questions)} answered "
            f"({'correct' if outcome.is_correct else 'incorrect'}); "
            f"score {self.correct_count}, status {self.status.value}"
        )

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            questions=self.questions,
            current_index=self.current_index,
            correct_count=self.correct_count,
            outcomes=tuple(self.outcomes),
            status=self.status,
            pending=self.pending,
            health=self.health,
            pass_threshold=self.pass_threshold,
        )

    def restart(self, questions: Sequence[Question]) -> "QuizSession":
        """Start over with a new question set; this session is left as it was."""
        return QuizSession(questions, self.grader, self.pass_threshold)
