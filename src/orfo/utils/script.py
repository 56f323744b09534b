"""Karakalpak script detection (Cyrillic vs Latin)."""

import re
from enum import Enum
from typing import Tuple


class ScriptType(str, Enum):
    """Alphabet a piece of text is written in."""

    CYRILLIC = "cyrillic"
    LATIN = "latin"
    MIXED = "mixed"
    UNKNOWN = "unknown"


# Karakalpak Cyrillic letters, both cases
CYRILLIC_LETTERS = re.compile(r"[а-яА-ЯёЁәӘғҒқҚңҢөӨүҮўЎһҺҳҲ]")

# Karakalpak Latin letters, both cases. The schwa "ә" was part of the
# product's Latin alphabet, so it counts here as well.
LATIN_LETTERS = re.compile(r"[a-zA-ZáÁǵǴğĞıńŃóÓöÖúÚüÜşŞәӘ]")


def count_script_letters(text: str) -> Tuple[int, int]:
    """Count Cyrillic and Latin letters in text.

    Args:
        text: Text to inspect

    Returns:
        Tuple of (cyrillic_count, latin_count)
    """
    return len(CYRILLIC_LETTERS.findall(text)), len(LATIN_LETTERS.findall(text))


def detect_script(text: str) -> ScriptType:
    """Detect which Karakalpak alphabet the text is written in.

    Args:
        text: Text to classify

    Returns:
        UNKNOWN when there are no letters from either alphabet, MIXED on a
        tie, otherwise whichever alphabet has more letters
    """
    cyrillic_count, latin_count = count_script_letters(text)

    if cyrillic_count == 0 and latin_count == 0:
        return ScriptType.UNKNOWN
    if cyrillic_count > latin_count:
        return ScriptType.CYRILLIC
    if latin_count > cyrillic_count:
        return ScriptType.LATIN
    return ScriptType.MIXED
