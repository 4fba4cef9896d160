import json
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import ValidationError

from civics_backend.core.errors import QuestionPoolError
from civics_backend.models.schemas import Question

logger = logging.getLogger(__name__)


def load_question_pool(path: Union[str, Path]) -> List[Question]:
    """
    Read the question pool from a JSON file.

    The file holds a list of ``{"question": ..., "answers": [...]}`` records.
    Every record is validated; one bad record rejects the whole pool.

    Raises:
        QuestionPoolError: file missing, not JSON, or a record is invalid
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise QuestionPoolError(f"Cannot read question pool {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise QuestionPoolError(f"Question pool {path} is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise QuestionPoolError(f"Question pool {path} must be a JSON list")

    pool = []
    for position, record in enumerate(raw):
        try:
            pool.append(Question.model_validate(record))
        except ValidationError as e:
            raise QuestionPoolError(f"Invalid question #{position} in {path}: {e}") from e

    logger.info(f"Loaded {len(pool)} questions from {path}")
    return pool


def sample_questions(
    pool: Sequence[Question],
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Question]:
    """Draw ``count`` distinct questions in random order.

    A pool smaller than ``count`` yields all of its questions, shuffled.
    """
    if count < 0:
        raise ValueError("count must not be negative")
    rng = rng or random.Random()
    if len(pool) < count:
        logger.warning(f"Question pool has {len(pool)} questions, fewer than the {count} requested")
        count = len(pool)
    return rng.sample(list(pool), count)
