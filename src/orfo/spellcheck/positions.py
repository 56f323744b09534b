"""Word offsets and statistics for spell-check results."""

import logging
import re
from typing import Iterator, List, Optional, Tuple

from ..utils.script import ScriptType, detect_script
from .models import SpellCheckResult, SpellCheckStatistics

logger = logging.getLogger(__name__)

# Punctuation stripped from both ends of a token before comparing words
WORD_PUNCTUATION = ".,!?;:\"'()[]{}«»“”„‘’…-—–"

_TOKEN_PATTERN = re.compile(r"\S+")


def strip_punctuation(word: str) -> str:
    """Remove surrounding punctuation from a word."""
    return word.strip(WORD_PUNCTUATION)


def iter_tokens(text: str) -> Iterator[Tuple[str, int, int]]:
    """Yield (word, start, end) for each whitespace-separated token.

    The span covers the token with its surrounding punctuation removed.
    """
    for match in _TOKEN_PATTERN.finditer(text):
        token = match.group(0)
        lead = len(token) - len(token.lstrip(WORD_PUNCTUATION))
        word = strip_punctuation(token)
        start = match.start() + lead
        yield word, start, start + len(word)


def backfill_positions(text: str, results: List[SpellCheckResult]) -> List[SpellCheckResult]:
    """Fill in start/end offsets of each result in place.

    Results are matched left to right: each one takes the next unused token
    at or after the previous match, so repeated words map to successive
    occurrences. A result whose word is not found gets the approximate span
    0..len(word), clamped to the text.

    Args:
        text: The text that was checked
        results: Results in the order the words appear

    Returns:
        The same list, for chaining
    """
    tokens = [(word.lower(), start, end) for word, start, end in iter_tokens(text)]
    cursor = 0

    for result in results:
        target = strip_punctuation(result.word).lower()
        match_index: Optional[int] = None
        if target:
            for index in range(cursor, len(tokens)):
                if tokens[index][0] == target:
                    match_index = index
                    break

        if match_index is None:
            logger.debug(f"Position not found for {result.word!r}, using approximate span")
            result.start = 0
            result.end = min(len(result.word), len(text))
            continue

        _, result.start, result.end = tokens[match_index]
        cursor = match_index + 1

    return results


def fallback_results(text: str) -> List[SpellCheckResult]:
    """Mark every word of text as correct; used when the model returned nothing."""
    return [
        SpellCheckResult(word=word, is_correct=True, suggestions=[])
        for word, _, _ in iter_tokens(text)
        if word
    ]


def compute_statistics(
    text: str,
    results: List[SpellCheckResult],
    script: Optional[ScriptType] = None,
) -> SpellCheckStatistics:
    """Summarise a spell-check run.

    Args:
        text: The text that was checked
        results: Results for that text
        script: Detected script; detected from text when omitted

    Returns:
        SpellCheckStatistics with accuracy as a percentage rounded to 0.1
    """
    total_words = len(text.split())
    incorrect_words = sum(1 for r in results if not r.is_correct)
    correct_words = max(total_words - incorrect_words, 0)
    accuracy = round(correct_words / total_words * 100, 1) if total_words else 100.0

    return SpellCheckStatistics(
        total_words=total_words,
        correct_words=correct_words,
        incorrect_words=incorrect_words,
        accuracy=accuracy,
        text_length=len(text),
        script_type=script if script is not None else detect_script(text),
    )
