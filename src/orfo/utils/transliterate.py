"""Karakalpak Cyrillic <-> Latin transliteration."""

import logging
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .script import ScriptType, detect_script

logger = logging.getLogger(__name__)


# Cyrillic -> Latin. Every source is a single letter; some targets are digraphs.
CYRILLIC_TO_LATIN_MAP = {
    "а": "a",
    "ә": "ә",
    "б": "b",
    "в": "v",
    "г": "g",
    "ғ": "ğ",
    "д": "d",
    "е": "e",
    "ё": "yo",
    "ж": "j",
    "з": "z",
    "и": "i",
    "й": "y",
    "к": "k",
    "қ": "q",
    "л": "l",
    "м": "m",
    "н": "n",
    "ң": "ń",
    "о": "o",
    "ө": "ö",
    "п": "p",
    "р": "r",
    "с": "s",
    "т": "t",
    "у": "u",
    "ү": "ü",
    "ў": "w",
    "ф": "f",
    "х": "x",
    "ҳ": "h",
    "һ": "h",
    "ц": "c",
    "ч": "ch",
    "ш": "sh",
    "щ": "shh",
    "ъ": "'",
    "ы": "ı",
    "ь": "'",
    "э": "e",
    "ю": "yu",
    "я": "ya",
}

# Latin -> Cyrillic multi-character mappings (must win over single letters)
LATIN_MULTI_CHAR_MAP = {
    "shh": "щ",
    "sh": "ш",
    "ch": "ч",
    "yo": "ё",
    "yu": "ю",
    "ya": "я",
}

# Latin -> Cyrillic single character mappings, including the 2016 alphabet
# letters (á, ǵ, ó, ú) next to the older ones (ә, ğ, ö, ü)
LATIN_SINGLE_CHAR_MAP = {
    "a": "а",
    "ә": "ә",
    "á": "ә",
    "b": "б",
    "c": "ц",
    "d": "д",
    "e": "е",
    "f": "ф",
    "g": "г",
    "ğ": "ғ",
    "ǵ": "ғ",
    "h": "ҳ",
    "i": "и",
    "ı": "ы",
    "j": "ж",
    "k": "к",
    "l": "л",
    "m": "м",
    "n": "н",
    "ń": "ң",
    "o": "о",
    "ö": "ө",
    "ó": "ө",
    "p": "п",
    "q": "қ",
    "r": "р",
    "s": "с",
    "ş": "ш",
    "t": "т",
    "u": "у",
    "ü": "ү",
    "ú": "ү",
    "v": "в",
    "w": "ў",
    "x": "х",
    "y": "й",
    "z": "з",
}

LATIN_TO_CYRILLIC_MAP = {**LATIN_SINGLE_CHAR_MAP, **LATIN_MULTI_CHAR_MAP}


class TransliterationResult(BaseModel):
    """Outcome of a transliteration request."""

    model_config = ConfigDict(populate_by_name=True)

    original: str
    converted: str
    source_script: ScriptType = Field(alias="from")
    target_script: ScriptType = Field(alias="to")


def _apply_case(source: str, target: str, prev_char: str, next_char: str) -> str:
    """Give target the letter case of the source token it replaces."""
    if not source.isupper():
        if source[0].isupper():
            # Title-cased digraph, e.g. "Sh"
            return target[:1].upper() + target[1:]
        return target

    if len(source) > 1 or len(target) == 1:
        return target.upper()

    # A lone capital becoming a digraph: "ШАХАР" -> "SHAXAR", "Шахар" -> "Shaxar"
    if prev_char.isupper() or next_char.isupper():
        return target.upper()
    return target[:1].upper() + target[1:]


def _convert(text: str, table: Dict[str, str]) -> str:
    """Replace every table token in text, longest match first.

    Args:
        text: Source text
        table: Lowercase source token -> target token

    Returns:
        Converted text; characters missing from the table are kept as is
    """
    max_len = max(len(key) for key in table)
    result = []
    i = 0

    while i < len(text):
        for size in range(min(max_len, len(text) - i), 0, -1):
            chunk = text[i : i + size]
            target = table.get(chunk.lower())
            if target is None:
                continue
            prev_char = text[i - 1] if i > 0 else ""
            next_char = text[i + size] if i + size < len(text) else ""
            result.append(_apply_case(chunk, target, prev_char, next_char))
            i += size
            break
        else:
            result.append(text[i])
            i += 1

    return "".join(result)


def cyrillic_to_latin(text: str) -> str:
    """Convert Karakalpak Cyrillic text to Latin.

    Args:
        text: Text in Karakalpak Cyrillic script

    Returns:
        Text converted to Latin script
    """
    return _convert(text, CYRILLIC_TO_LATIN_MAP)


def latin_to_cyrillic(text: str) -> str:
    """Convert Karakalpak Latin text to Cyrillic.

    Args:
        text: Text in Karakalpak Latin script

    Returns:
        Text converted to Cyrillic script
    """
    return _convert(text, LATIN_TO_CYRILLIC_MAP)


def resolve_target(
    source: ScriptType, target: Optional[Union[str, ScriptType]] = None
) -> ScriptType:
    """Pick the script to convert into.

    Without an explicit target ("auto"), Cyrillic text goes to Latin and
    everything else (Latin, mixed, unknown) goes to Cyrillic.

    Raises:
        ValueError: If target is not a script name, "auto" or None
    """
    if target is None or target == "auto":
        return ScriptType.LATIN if source is ScriptType.CYRILLIC else ScriptType.CYRILLIC
    return ScriptType(target)


def transliterate(
    text: str, target: Optional[Union[str, ScriptType]] = None
) -> TransliterationResult:
    """Convert text to the target Karakalpak script.

    Text already in the target script is returned unchanged, whatever that
    script is. Only "latin" and "cyrillic" can be converted into.

    Args:
        text: Text to convert
        target: "latin", "cyrillic", or None/"auto" for the opposite of the
            detected script

    Returns:
        TransliterationResult with the detected source script

    Raises:
        ValueError: If text would have to be converted into a script other
            than Latin or Cyrillic
    """
    source = detect_script(text)
    target_script = resolve_target(source, target)

    if source is target_script:
        converted = text
    elif target_script is ScriptType.LATIN:
        converted = cyrillic_to_latin(text)
    elif target_script is ScriptType.CYRILLIC:
        converted = latin_to_cyrillic(text)
    else:
        raise ValueError(f"Cannot transliterate into {target_script.value!r} script")

    logger.debug(f"Transliterated {len(text)} chars: {source.value} -> {target_script.value}")

    return TransliterationResult(
        original=text,
        converted=converted,
        source_script=source,
        target_script=target_script,
    )


def auto_transliterate(text: str) -> TransliterationResult:
    """Convert text to the opposite of its detected script."""
    return transliterate(text, None)
