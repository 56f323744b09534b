"""Gemini API wrapper used for spell checking."""

import logging
from typing import Optional

import httpx
from google import genai
from google.genai import errors, types

from .. import config
from .base import ProviderError, TextProvider

logger = logging.getLogger(__name__)


class GeminiProvider(TextProvider):
    """Sends prompts to Gemini through the google-genai client."""

    name = "gemini"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: float = 0.1,
        client: Optional[genai.Client] = None,
    ):
        self.model = model or config.GEMINI_MODEL
        self.temperature = temperature
        self._api_key = api_key or config.GEMINI_API_KEY
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Configure the Gemini client on first use."""
        if self._client is None:
            if not self._api_key:
                raise ProviderError("GEMINI_API_KEY is not set")
            self._client = genai.Client(api_key=self._api_key)
        return self._client

    def send_prompt(self, prompt: str) -> str:
        """Generate a reply for the prompt.

        Args:
            prompt: Prompt text

        Returns:
            Reply text
        """
        client = self.client
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                ),
            )
        except (errors.APIError, httpx.HTTPError) as e:
            logger.error(f"Gemini request failed: {e}")
            raise ProviderError(f"Gemini request failed: {e}") from e

        if not response.text:
            raise ProviderError("Invalid response format from Gemini API")
        return response.text
