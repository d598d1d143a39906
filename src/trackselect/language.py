"""Language code normalization and comparison utilities.

This module is the default Code Matcher of the selection engine. It treats
the following spellings of a language as aliases of each other:
- ISO 639-1 (2-letter codes like "en", "de", "ja")
- ISO 639-2/B (3-letter bibliographic codes like "eng", "ger", "jpn")
- ISO 639-2/T and 639-3 (3-letter terminological codes like "deu")
- English language names ("English", "German")

Lookups are backed by pycountry. The canonical form is ISO 639-2/B, which is
what MKV containers and FFmpeg emit. Values that are not languages at all,
such as the "off" subtitle sentinel, are kept as lowercased raw strings so
they only ever match themselves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import lru_cache

import pycountry

logger = logging.getLogger(__name__)

# Signature shared by every code matcher the engine accepts
CodeMatcher = Callable[[str | None, str | None], bool]

# Special ISO 639-2 codes that are identical across standards
_SPECIAL_CODES: frozenset[str] = frozenset({"und", "mis", "mul", "zxx"})


@lru_cache(maxsize=1024)
def _lookup(code: str):
    """Resolve a lowercased code or name to a pycountry language record."""
    if len(code) == 2:
        return pycountry.languages.get(alpha_2=code)
    if len(code) == 3:
        return pycountry.languages.get(alpha_3=code) or pycountry.languages.get(
            bibliographic=code
        )
    try:
        return pycountry.languages.lookup(code)
    except LookupError:
        return None


def normalize_language(code: str | None) -> str:
    """Normalize a language code or name to ISO 639-2/B.

    Args:
        code: Language code (ISO 639-1, 639-2/B, 639-2/T) or English name.

    Returns:
        The ISO 639-2/B code, "und" for empty input, or the lowercased
        input when it is not a recognized language.

    Examples:
        >>> normalize_language("de")
        'ger'
        >>> normalize_language("deu")
        'ger'
        >>> normalize_language("English")
        'eng'
        >>> normalize_language("off")
        'off'
    """
    if not code:
        return "und"

    code = code.strip().lower()
    if code in _SPECIAL_CODES:
        return code

    record = _lookup(code)
    if record is None:
        return code
    return getattr(record, "bibliographic", None) or record.alpha_3


def match_language_code(code1: str | None, code2: str | None) -> bool:
    """Check if two language identifiers denote the same language.

    Missing values never match, not even each other. The wildcard "*" gets
    no special treatment here; callers check for it explicitly.

    Examples:
        >>> match_language_code("en", "eng")
        True
        >>> match_language_code("ger", "German")
        True
        >>> match_language_code("eng", None)
        False
    """
    if not code1 or not code2:
        return False
    if code1.strip().lower() == code2.strip().lower():
        return True
    return normalize_language(code1) == normalize_language(code2)


def get_language_name(code: str | None) -> str:
    """Get the English name for a language code.

    Args:
        code: Language code (any ISO 639 format).

    Returns:
        English name of the language, or the code itself if unknown.
    """
    if not code:
        return "Undefined"

    record = _lookup(code.strip().lower())
    if record is None:
        return code
    return record.name


def is_valid_language_code(code: str | None) -> bool:
    """Check if a code is a recognized ISO 639 language code."""
    if not code:
        return False
    code = code.strip().lower()
    if code in _SPECIAL_CODES:
        return True
    return len(code) in (2, 3) and _lookup(code) is not None
