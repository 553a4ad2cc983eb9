"""Text-generation backends"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from branchpoint.core.config import settings
from branchpoint.decision.error_codes import ErrorCodeDictionary
from branchpoint.exceptions import GenerationError

logger = logging.getLogger(__name__)


class TextGenerator(ABC):
    """Turns a single prompt into free text."""

    @abstractmethod
    async def generate(self, prompt: str, *, model: Optional[str] = None) -> str:
        """
        Generate a completion for one user turn.

        Raises:
            GenerationError: If no text could be produced
        """


class OpenAITextGenerator(TextGenerator):
    """
    Chat-completions backend.

    Sends the prompt as a single user message; model, timeout, temperature
    and token limit come from settings unless overridden.
    """

    def __init__(
        self,
        openai_client: Optional[AsyncOpenAI] = None,
        default_model: Optional[str] = None,
    ):
        self.client = openai_client or AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.openai_timeout_seconds,
        )
        self.default_model = default_model or settings.openai_model

    async def generate(self, prompt: str, *, model: Optional[str] = None) -> str:
        model_name = model or self.default_model
        try:
            response = await self.client.chat.completions.create(
                model=model_name,
                messages=[{"role": "user", "content": prompt}],
                temperature=settings.openai_temperature,
                max_tokens=settings.openai_max_tokens,
            )
        except OpenAIError as e:
            raise GenerationError(
                ErrorCodeDictionary.GENERATION_007,
                context={"model": model_name, "error": str(e)},
            ) from e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise GenerationError(
                ErrorCodeDictionary.GENERATION_007,
                context={"model": model_name, "error": "No content in response"},
                message="No content in response",
            )
        return content


class UnavailableTextGenerator(TextGenerator):
    """Backend used when no API key is configured; every call fails fast."""

    async def generate(self, prompt: str, *, model: Optional[str] = None) -> str:
        raise GenerationError(
            ErrorCodeDictionary.GENERATION_007,
            context={"error": "OPENAI_API_KEY is not configured"},
            message="Text generation is not configured",
        )


def build_text_generator() -> TextGenerator:
    """Pick the backend for the current settings."""
    if not settings.openai_api_key:
        return UnavailableTextGenerator()
    return OpenAITextGenerator()
