from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import List, Optional
import logging

from civics_backend.config import Config
from civics_backend.core.errors import GradingError, UpstreamError
from civics_backend.core.grading_agent import GradingAgent
from civics_backend.core.question_bank import sample_questions
from civics_backend.models.schemas import (
    ErrorResponse,
    GradeRequest,
    GradeResponse,
    Question,
    QuestionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Set by the application lifespan
grading_agent: Optional[GradingAgent] = None
question_pool: List[Question] = []


def set_dependencies(agent: GradingAgent, pool: List[Question]):
    global grading_agent, question_pool
    grading_agent = agent
    question_pool = pool


def _error_response(error: GradingError) -> JSONResponse:
    body = ErrorResponse(error=str(error) or error.kind, kind=error.kind)
    return JSONResponse(status_code=500, content=body.model_dump())


@router.get("/questions", response_model=QuestionsResponse)
async def get_questions(count: Optional[int] = Query(default=None, ge=1)):
    """
    Sample a fresh question set for a new quiz attempt.

    Draws ``count`` questions (default ``QUIZ_SIZE``) from the pool without
    replacement, in random order. Each call produces a new sample, so the
    frontend calls this once per session start or restart.

    Returns:
        QuestionsResponse: the sampled questions with their accepted answers
    """
    size = count or Config.QUIZ_SIZE
    questions = sample_questions(question_pool, size)
    return QuestionsResponse(questions=questions)


@router.post(
    "/grade",
    response_model=GradeResponse,
    responses={500: {"model": ErrorResponse}},
)
async def grade_answer(request: GradeRequest):
    """
    Grade one submitted answer with the classifier.

    Sends the question, its accepted answers and the user's answer to the
    language model and reads a yes/no verdict from the first line of the
    reply. Anything other than a leading "yes" counts as incorrect.

    Args:
        request (GradeRequest): question text, accepted answers, userAnswer

    Returns:
        GradeResponse: ``isCorrect`` and the raw ``aiReply``

    Errors:
        500 with ``{"error", "kind": "configuration"}`` when no credential is set,
        500 with ``{"error", "kind": "upstream"}`` when the model call fails
    """
    try:
        verdict = await grading_agent.grade(
            question=request.question,
            answers=request.answers,
            user_answer=request.user_answer,
        )
    except GradingError as e:
        logger.error(f"Grading failed ({e.kind}): {e}")
        return _error_response(e)
    except Exception as e:
        logger.exception("Unexpected error while grading")
        return _error_response(UpstreamError(str(e) or type(e).__name__))

    return GradeResponse(is_correct=verdict.is_correct, ai_reply=verdict.ai_reply)
