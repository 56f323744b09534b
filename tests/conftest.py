from typing import List, Optional

import pytest

from orfo.llm.base import ProviderError, TextProvider


class FakeProvider(TextProvider):
    """Returns canned replies and records the prompts it was sent."""

    name = "fake"

    def __init__(self, reply: str = "", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []

    def send_prompt(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def failing_provider():
    return FakeProvider(error=ProviderError("Network error: Unable to connect"))
