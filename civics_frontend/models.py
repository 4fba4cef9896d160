from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Question(BaseModel):
    """A question as served by ``GET /api/questions``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(alias="question", min_length=1)
    accepted_answers: List[str] = Field(alias="answers", min_length=1)
