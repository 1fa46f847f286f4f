"""Gemini AI client for the notes API.

Single text-completion entry point used for summaries and tags.
"""

import asyncio
from typing import Any, Optional

from notes_ai.config import Config
from notes_ai.core.exceptions import AIServiceError, PromptTooLongError
from notes_ai.core.logging import logger

MAX_PROMPT_TOKENS = 8000
CHARS_PER_TOKEN = 4


def estimate_tokens(text: str) -> float:
    """Rough token estimate (about 4 characters per token)."""
    return len(text) / CHARS_PER_TOKEN


def validate_token_limit(text: str, max_tokens: int = MAX_PROMPT_TOKENS) -> bool:
    """Reject prompts whose estimated token count exceeds max_tokens.

    Raises:
        PromptTooLongError: If the estimate is over the limit
    """
    estimated = estimate_tokens(text)
    if estimated > max_tokens:
        raise PromptTooLongError(round(estimated), max_tokens)
    return True


class GeminiClient:
    """Gemini text-completion client.

    Vendor exceptions propagate unchanged so the error classifier can read
    their status codes and messages.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """Initialize Gemini client.

        Args:
            api_key: Optional API key. If not provided, reads from environment.
            model_name: Optional model override (GEMINI_MODEL by default)
        """
        self.api_key = api_key if api_key is not None else Config.gemini_api_key()
        self.model_name = model_name or Config.gemini_model()
        self._model: Any = None

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_model(self) -> Any:
        """Lazily configure google.generativeai and build the model.

        Raises:
            AIServiceError: If no API key is configured
        """
        if self._model is None:
            if not self.api_key:
                raise AIServiceError(
                    "Gemini API key is not configured. Set GEMINI_API_KEY or "
                    "GOOGLE_GENERATIVE_AI_API_KEY.",
                    status_code=401,
                )

            import google.generativeai as genai

            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(model_name=self.model_name)
        return self._model

    async def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            Generated text

        Raises:
            PromptTooLongError: If the prompt exceeds the token budget
            AIServiceError: If the model returns no text
            Exception: Vendor and network errors, unchanged
        """
        validate_token_limit(prompt)
        model = self._get_model()

        try:
            response = await asyncio.to_thread(model.generate_content, prompt)
        except Exception as e:
            logger.error("gemini_request_failed", model=self.model_name, error=str(e))
            raise

        text = self._response_text(response)
        if not text:
            raise AIServiceError("Gemini API returned an empty response")

        logger.debug("gemini_request_succeeded", model=self.model_name, chars=len(text))
        return text.strip()

    @staticmethod
    def _response_text(response: Any) -> Optional[str]:
        # response.text raises ValueError when the candidate was blocked
        try:
            return response.text
        except ValueError:
            return None
