"""Spell-check data structures shared by the sanitizer, the API and the UI."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from ..utils.script import ScriptType


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys (isCorrect, rawResponse...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SpellCheckResult(CamelModel):
    """Verdict for a single word.

    Attributes:
        word: The word as reported by the model.
        is_correct: Whether the word is spelled correctly.
        suggestions: Replacement candidates for an incorrect word.
        start: Offset of the word in the checked text (set by back-filling).
        end: End offset, exclusive.
    """

    word: str
    is_correct: bool = True
    suggestions: List[str] = []
    start: Optional[int] = None
    end: Optional[int] = None

    @field_validator("is_correct", mode="before")
    @classmethod
    def default_correct(cls, value: Any) -> Any:
        return True if value is None else value

    @field_validator("suggestions", mode="before")
    @classmethod
    def coerce_suggestions(cls, value: Any) -> List[str]:
        # Models answer with null, a bare string, or a list of mixed values
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value if item is not None and str(item).strip()]
        return []


class SpellCheckStatistics(CamelModel):
    """Aggregate numbers for one checked text."""

    total_words: int
    correct_words: int
    incorrect_words: int
    accuracy: float
    text_length: int
    script_type: ScriptType


class ParsedLLMResponse(CamelModel):
    """Spell-check payload recovered from a model reply.

    ``results`` is always a list; on total failure it is empty and
    ``error``/``raw_response`` say why.
    """

    results: List[SpellCheckResult] = []
    statistics: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    raw_response: Optional[str] = None


class WordSuggestion(BaseModel):
    word: str
    confidence: Optional[float] = None
