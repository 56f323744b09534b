"""Capability interface every LLM provider implements."""

from abc import ABC, abstractmethod


class ProviderError(RuntimeError):
    """The provider could not produce a reply (network, auth, empty answer)."""


class TextProvider(ABC):
    """Sends a prompt to a hosted model and returns the reply text."""

    name: str = ""

    @abstractmethod
    def send_prompt(self, prompt: str) -> str:
        """Send a single-turn prompt.

        Args:
            prompt: Full prompt text

        Returns:
            The model's reply as plain text

        Raises:
            ProviderError: If the request fails or the reply is empty
        """
