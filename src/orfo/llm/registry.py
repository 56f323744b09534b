"""Provider selection by name."""

from typing import Dict, Optional, Type

from .. import config
from .base import TextProvider
from .chatgpt import ChatGPTProvider
from .gemini import GeminiProvider

PROVIDERS: Dict[str, Type[TextProvider]] = {
    GeminiProvider.name: GeminiProvider,
    ChatGPTProvider.name: ChatGPTProvider,
}


def get_provider(name: Optional[str] = None) -> TextProvider:
    """Create the provider configured by ORFO_LLM_PROVIDER (or the given name).

    Raises:
        ValueError: If the name is not a known provider
    """
    name = (name or config.LLM_PROVIDER).lower()
    try:
        provider_class = PROVIDERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown LLM provider {name!r}, expected one of: {', '.join(sorted(PROVIDERS))}"
        ) from None
    return provider_class()
