"""Spell-check service: model reply -> positioned, summarised results."""

import logging
from typing import List, Optional

from pydantic import BaseModel, ValidationError

from ..llm.base import ProviderError, TextProvider
from ..llm.registry import get_provider
from ..spellcheck.models import ParsedLLMResponse, WordSuggestion
from ..spellcheck.positions import backfill_positions, compute_statistics, fallback_results
from ..spellcheck.sanitizer import parse_response, recover_json_object
from ..utils.script import ScriptType, detect_script

logger = logging.getLogger(__name__)


class SpellCheckRequest(BaseModel):
    text: str


class BatchSpellCheckRequest(BaseModel):
    texts: List[str]


class SuggestionRequest(BaseModel):
    word: str
    limit: int = 5


def _script_label(script: ScriptType) -> str:
    return "Latin" if script in (ScriptType.LATIN, ScriptType.MIXED) else "Cyrillic"


def build_spellcheck_prompt(text: str, script: ScriptType) -> str:
    """Prompt asking the model for per-word verdicts as JSON."""
    return f"""You are a Karakalpak language spell checker. Analyze the following text for spelling errors.

Text: "{text}"
Script: {_script_label(script)}

Instructions:
1. Check each word for spelling errors
2. Mark words as correct (true) or incorrect (false)
3. For incorrect words, provide 1-3 correct suggestions
4. Return ONLY a valid JSON object

Expected JSON format:
{{
  "results": [
    {{"word": "word1", "isCorrect": true, "suggestions": []}},
    {{"word": "word2", "isCorrect": false, "suggestions": ["correction1", "correction2"]}}
  ]
}}

Response must be valid JSON only. No explanations or additional text."""


def build_suggestion_prompt(word: str, limit: int) -> str:
    """Prompt asking the model for spelling suggestions for one word."""
    return f"""Provide {limit} spelling suggestions for the Karakalpak word "{word}" written in {_script_label(detect_script(word))} script.

Return response ONLY in JSON format:
{{
  "suggestions": [
    {{"word": "suggestion_1", "confidence": 95}},
    {{"word": "suggestion_2", "confidence": 90}}
  ]
}}

Return ONLY JSON response."""


class SpellCheckService:
    """Service for LLM-backed spell checking."""

    def __init__(self, provider: Optional[TextProvider] = None):
        self._provider = provider

    @property
    def provider(self) -> TextProvider:
        if self._provider is None:
            self._provider = get_provider()
        return self._provider

    def check(self, text: str) -> ParsedLLMResponse:
        """Spell-check a text.

        Args:
            text: Text to check

        Returns:
            ParsedLLMResponse with positioned results and statistics. A reply
            that cannot be parsed yields empty results with error set.

        Raises:
            ProviderError: If the model could not be reached
        """
        script = detect_script(text)

        if not text.strip():
            parsed = ParsedLLMResponse(results=[])
        else:
            content = self.provider.send_prompt(build_spellcheck_prompt(text, script))
            logger.debug(f"Raw model response: {content[:200]}")
            parsed = parse_response(content)

            if not parsed.results and parsed.error is None:
                logger.warning("No results in parsed data, creating fallback")
                parsed.results = fallback_results(text)

        backfill_positions(text, parsed.results)
        statistics = compute_statistics(text, parsed.results, script)
        parsed.statistics = statistics.model_dump(by_alias=True, mode="json")
        return parsed

    def check_many(self, texts: List[str]) -> List[ParsedLLMResponse]:
        """Spell-check several texts; a failed request is reported in its own entry."""
        responses = []
        for text in texts:
            try:
                responses.append(self.check(text))
            except ProviderError as e:
                logger.error(f"Batch spell check failed for text of {len(text)} chars: {e}")
                responses.append(ParsedLLMResponse(results=[], error=str(e)))
        return responses

    def suggest(self, word: str, limit: int = 5) -> List[WordSuggestion]:
        """Ask the model for spelling suggestions.

        Args:
            word: Word to get suggestions for
            limit: Maximum number of suggestions

        Returns:
            Suggestions, empty if the reply could not be parsed
        """
        if not word.strip() or limit <= 0:
            return []

        content = self.provider.send_prompt(build_suggestion_prompt(word, limit))
        payload = recover_json_object(content)
        if payload is None:
            return []

        raw_items = payload.get("suggestions")
        if not isinstance(raw_items, list):
            return []

        suggestions = []
        for item in raw_items:
            if isinstance(item, str):
                item = {"word": item}
            try:
                suggestions.append(WordSuggestion.model_validate(item))
            except ValidationError:
                logger.warning(f"Skipping invalid suggestion: {item!r}")
        return suggestions[:limit]
