from langchain_core.messages import HumanMessage, SystemMessage
from dataclasses import dataclass
from typing import Sequence
import logging

from civics_backend.core.llm import GeminiLLMWrapper
from civics_backend.prompts.grading_prompts import GRADER_SYSTEM_PROMPT, build_grading_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeVerdict:
    is_correct: bool
    ai_reply: str


def parse_verdict(reply: str) -> bool:
    """True only when the first line of the reply starts with "yes", in any case."""
    if not reply:
        return False
    first_line = reply.strip().split("\n")[0].strip().lower()
    return first_line.startswith("yes")


class GradingAgent:
    """
    Judges a free-text answer against the accepted answers of a question.
    - Builds the grading prompt and sends it to the chat model once
    - Reads the yes/no verdict from the first line of the reply
    - Lets ConfigurationError and UpstreamError from the wrapper propagate
    """

    def __init__(self, llm_wrapper: GeminiLLMWrapper):
        self.llm = llm_wrapper

    async def grade(self, question: str, answers: Sequence[str], user_answer: str) -> GradeVerdict:
        prompt = build_grading_prompt(question, answers, user_answer)
        logger.info(f"Grading answer for question: {question[:60]}")

        reply = await self.llm.generate_response([
            SystemMessage(content=GRADER_SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ])

        is_correct = parse_verdict(reply)
        logger.info(f"Verdict: {'correct' if is_correct else 'incorrect'}")
        return GradeVerdict(is_correct=is_correct, ai_reply=reply)
