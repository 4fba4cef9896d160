from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from typing import List, Optional
import logging

from civics_backend.config import GradingSettings
from civics_backend.core.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class GeminiLLMWrapper:
    def __init__(self, settings: GradingSettings):
        """Keep the settings; the chat model is built on first use."""
        self.settings = settings
        self._llm: Optional[ChatGoogleGenerativeAI] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.api_key)

    def _get_llm(self) -> ChatGoogleGenerativeAI:
        if not self.is_configured:
            raise ConfigurationError("No API key")
        if self._llm is None:
            self._llm = ChatGoogleGenerativeAI(
                google_api_key=self.settings.api_key,
                model=self.settings.model,
                temperature=self.settings.temperature,
                max_output_tokens=self.settings.max_output_tokens,
                timeout=self.settings.timeout,
                max_retries=0,
            )
        return self._llm

    async def generate_response(
        self,
        messages: List[BaseMessage],
        **kwargs
    ) -> str:
        llm = self._get_llm()
        try:
            response = await llm.ainvoke(messages, **kwargs)
        except Exception as e:
            logger.error(f"LLM generation error: {e}")
            raise UpstreamError(str(e) or type(e).__name__) from e
        return _content_to_text(response.content)


def _content_to_text(content) -> str:
    """Flatten a chat message payload into plain text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and isinstance(part.get("text"), str):
                parts.append(part["text"])
        return "".join(parts)
    raise UpstreamError(f"Unexpected reply payload: {type(content).__name__}")
