"""Best-effort recovery of JSON objects from raw LLM replies.

Models asked for "JSON only" still wrap it in Markdown fences, prepend
chatter, escape quotes twice, leave trailing commas or break a string with a
stray quote. The functions here peel those layers off one at a time and stop
at the first stage that yields a valid object. They never raise on bad data:
``recover_json_object`` returns None and ``parse_response`` returns a
degraded ParsedLLMResponse instead.
"""

import json
import logging
import re
from typing import Any, Callable, Dict, Iterator, List, Optional

from pydantic import ValidationError

from ..config import RAW_RESPONSE_LIMIT
from .models import ParsedLLMResponse, SpellCheckResult

logger = logging.getLogger(__name__)

PARSE_ERROR = "Failed to parse response"

_CODE_FENCE = re.compile(r"```(?:json|JSON)?[ \t]*")
_TRAILING_COMMA = re.compile(r",(\s*[}\]])")
# A string value running from `: "` to the last quote before , } or ]
_STRING_VALUE = re.compile(r':\s*"(.*?)"(?=\s*[,}\]])')
_DISALLOWED_IN_VALUE = re.compile(r"[^\w\s\-.']")

# Offsets are recomputed from the checked text, never trusted from the model
_MODEL_OFFSET_KEYS = ("start", "end")


def _loads_object(text: str) -> Optional[Dict[str, Any]]:
    """Strict json.loads that only accepts a JSON object."""
    try:
        value = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return value if isinstance(value, dict) else None


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fence markers (```json / ```)."""
    return _CODE_FENCE.sub("", text)


def extract_outer_object(text: str, start: int = 0) -> Optional[str]:
    """Return the first balanced {...} substring of text at or after start.

    Braces inside JSON strings are ignored. If the object never closes, the
    span from its "{" to the last "}" is returned instead.

    Args:
        text: Text that may contain a JSON object among other content
        start: Offset to search from

    Returns:
        The object substring, or None if text has no "{" there
    """
    start = text.find("{", start)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    end = text.rfind("}")
    if end > start:
        return text[start : end + 1]
    return text[start:]


def iter_outer_objects(text: str) -> Iterator[str]:
    """Yield each top-level {...} candidate of text, left to right."""
    start = text.find("{")
    while start != -1:
        candidate = extract_outer_object(text, start)
        yield candidate
        start = text.find("{", start + len(candidate))


def collapse_whitespace(text: str) -> str:
    """Replace literal newlines/tabs with spaces and drop trailing commas."""
    text = text.replace("\r", " ").replace("\n", " ").replace("\t", " ")
    return _TRAILING_COMMA.sub(r"\1", text)


def repair_escapes(text: str) -> str:
    """Undo over-escaping: \\" becomes ", escaped whitespace becomes a space,
    any other backslash is dropped."""
    text = text.replace('\\"', '"')
    text = text.replace("\\n", " ").replace("\\t", " ").replace("\\r", " ")
    text = text.replace("\\", "")
    return collapse_whitespace(text)


def scrub_string_values(text: str) -> str:
    """Keep only word characters, whitespace, "-", "." and "'" inside string values."""

    def _clean(match: "re.Match[str]") -> str:
        content = _DISALLOWED_IN_VALUE.sub("", match.group(1))
        return f': "{content}"'

    return _STRING_VALUE.sub(_clean, text)


# Applied cumulatively to the extracted object, gentlest first
_REPAIRS: List[Callable[[str], str]] = [
    collapse_whitespace,
    repair_escapes,
    scrub_string_values,
]


def _as_text(raw: Any) -> Optional[str]:
    """Model reply as str; bytes are decoded as UTF-8."""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw if isinstance(raw, str) else None


def recover_json_object(raw: Any) -> Optional[Dict[str, Any]]:
    """Recover a JSON object from a raw model reply.

    Every top-level {...} candidate is tried as-is before any repair, so a
    brace pair in leading prose does not hide the object that follows it.

    Args:
        raw: Text returned by the model

    Returns:
        The parsed object, or None if nothing could be recovered
    """
    text = _as_text(raw)
    if text is None:
        logger.warning(f"Expected model reply as text, got {type(raw).__name__}")
        return None

    payload = _loads_object(text)
    if payload is not None:
        return payload

    logger.debug("Direct parse failed, trying to clean JSON...")

    candidates = list(iter_outer_objects(strip_code_fences(text)))
    if not candidates:
        logger.warning("No JSON object found in model reply")
        return None

    for candidate in candidates:
        payload = _loads_object(candidate)
        if payload is not None:
            return payload

    for candidate in candidates:
        for repair in _REPAIRS:
            candidate = repair(candidate)
            payload = _loads_object(candidate)
            if payload is not None:
                logger.debug(f"Recovered JSON after {repair.__name__}")
                return payload

    logger.warning(f"JSON cleaning failed, cleaned text: {candidate[:200]}")
    return None


def _coerce_results(raw_results: Any) -> List[SpellCheckResult]:
    """Validate the model's result entries, dropping the unusable ones."""
    if not isinstance(raw_results, list):
        return []

    results = []
    for item in raw_results:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object result entry: {item!r}")
            continue
        fields = {k: v for k, v in item.items() if k not in _MODEL_OFFSET_KEYS}
        try:
            results.append(SpellCheckResult.model_validate(fields))
        except ValidationError as e:
            logger.warning(f"Skipping invalid result entry {item!r}: {e.error_count()} error(s)")
    return results


def degraded_response(raw: Any) -> ParsedLLMResponse:
    """Placeholder returned when no JSON object could be recovered."""
    text = _as_text(raw)
    if text is None:
        text = str(raw)
    return ParsedLLMResponse(
        results=[],
        error=PARSE_ERROR,
        raw_response=text[:RAW_RESPONSE_LIMIT],
    )


def parse_response(raw: Any) -> ParsedLLMResponse:
    """Turn a raw spell-check reply into a ParsedLLMResponse.

    Never raises; ``results`` is always a list.

    Args:
        raw: Text returned by the model

    Returns:
        ParsedLLMResponse with results, or a degraded one with error set
    """
    payload = recover_json_object(raw)
    if payload is None:
        return degraded_response(raw)

    statistics = payload.get("statistics")
    error = payload.get("error")

    return ParsedLLMResponse(
        results=_coerce_results(payload.get("results")),
        statistics=statistics if isinstance(statistics, dict) else None,
        error=error if isinstance(error, str) else None,
    )
