from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


class Question(BaseModel):
    """A civics question and every answer the grader should accept."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="question", min_length=1)
    accepted_answers: List[str] = Field(alias="answers", min_length=1)

    @field_validator("accepted_answers")
    @classmethod
    def answers_not_blank(cls, value: List[str]) -> List[str]:
        if any(not answer.strip() for answer in value):
            raise ValueError("accepted answers must not be blank")
        return value


class QuestionsResponse(BaseModel):
    questions: List[Question]


class GradeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(min_length=1)
    answers: List[str] = Field(min_length=1)
    user_answer: str = Field(alias="userAnswer")

    @field_validator("user_answer")
    @classmethod
    def user_answer_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("userAnswer must not be empty")
        return value


class GradeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_correct: bool = Field(alias="isCorrect")
    ai_reply: str = Field(alias="aiReply")


class ErrorResponse(BaseModel):
    error: str
    kind: str = "upstream"


class HealthResponse(BaseModel):
    status: str
    version: str
    classifier_configured: bool
    pool_size: Optional[int] = None
