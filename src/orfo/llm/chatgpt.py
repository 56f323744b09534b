"""OpenAI chat completions wrapper used for spell checking."""

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from .. import config
from .base import ProviderError, TextProvider

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a Karakalpak language assistant. Follow the output format exactly."


class ChatGPTProvider(TextProvider):
    """Sends prompts to an OpenAI chat model."""

    name = "chatgpt"

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        temperature: float = 0.1,
        max_tokens: int = 2000,
        client: Optional[OpenAI] = None,
    ):
        self.model = model or config.OPENAI_MODEL
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._api_key = api_key or config.OPENAI_API_KEY
        self._client = client

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self._api_key:
                raise ProviderError("OPENAI_API_KEY is not set")
            self._client = OpenAI(api_key=self._api_key, timeout=60.0)
        return self._client

    def send_prompt(self, prompt: str) -> str:
        logger.debug(f"OpenAI request: model={self.model}, prompt_chars={len(prompt)}")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise ProviderError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ProviderError("Empty response from OpenAI API")
        return content.strip()
