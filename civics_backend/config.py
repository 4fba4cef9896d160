import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_POOL_PATH = Path(__file__).parent / "data" / "civics_questions.json"


@dataclass(frozen=True)
class GradingSettings:
    """Explicit classifier settings handed to the LLM wrapper at construction."""

    api_key: str
    model: str
    temperature: float
    max_output_tokens: int
    timeout: float


class Config:
    # API Keys
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")

    # Model Settings
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GRADING_TEMPERATURE: float = float(os.getenv("GRADING_TEMPERATURE", "0.0"))
    GRADING_MAX_TOKENS: int = int(os.getenv("GRADING_MAX_TOKENS", "100"))
    GRADING_TIMEOUT: float = float(os.getenv("GRADING_TIMEOUT", "30"))

    # Quiz Settings
    QUESTION_POOL_PATH: str = os.getenv("QUESTION_POOL_PATH", str(DEFAULT_POOL_PATH))
    QUIZ_SIZE: int = int(os.getenv("QUIZ_SIZE", "10"))

    # Server Settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def grading_settings(cls) -> GradingSettings:
        return GradingSettings(
            api_key=cls.GEMINI_API_KEY,
            model=cls.GEMINI_MODEL,
            temperature=cls.GRADING_TEMPERATURE,
            max_output_tokens=cls.GRADING_MAX_TOKENS,
            timeout=cls.GRADING_TIMEOUT,
        )

    @classmethod
    def cors_origins(cls) -> List[str]:
        return [origin.strip() for origin in cls.CORS_ORIGINS.split(",") if origin.strip()]

    @classmethod
    def validate_config(cls) -> List[str]:
        """
        Check settings that can be checked at startup.

        A missing GEMINI_API_KEY is only reported here; grading requests fail
        with a configuration error when they are actually made.
        """
        warnings = []
        if not cls.GEMINI_API_KEY:
            warnings.append("GEMINI_API_KEY is not set; grading requests will fail")
        if cls.QUIZ_SIZE < 1:
            raise ValueError("QUIZ_SIZE must be at least 1")
        if not Path(cls.QUESTION_POOL_PATH).is_file():
            raise ValueError(f"QUESTION_POOL_PATH does not exist: {cls.QUESTION_POOL_PATH}")
        return warnings
