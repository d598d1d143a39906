"""Parsing of delimited language preference strings.

Configuration values such as "eng,jpn" or "eng,off;*,eng" are kept verbatim
in SelectionConfig and tokenized on demand. The sequences defined here are
lazy and restartable: every iteration re-reads the raw string, so a
preference list can be scanned once per candidate without materializing it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

LIST_DELIMITER = ","
PAIR_DELIMITER = ";"


@dataclass(frozen=True)
class LanguagePair:
    """An (audio language, subtitle language) preference entry."""

    audio: str
    subtitle: str


class LanguageList:
    """Ordered, restartable sequence of trimmed non-empty tokens.

    Example:
        >>> list(LanguageList(" eng, ,jpn "))
        ['eng', 'jpn']
    """

    def __init__(self, raw: str | None, delimiter: str = LIST_DELIMITER) -> None:
        self._raw = raw or ""
        self._delimiter = delimiter

    @property
    def raw(self) -> str:
        """The unparsed configuration string."""
        return self._raw

    def __iter__(self) -> Iterator[str]:
        for token in self._raw.split(self._delimiter):
            token = token.strip()
            if token:
                yield token

    def __repr__(self) -> str:
        return f"LanguageList({self._raw!r})"


class LanguagePairList:
    """Ordered, restartable sequence of audio/subtitle language pairs.

    Entries are separated by ";" and each entry is split on its first ","
    into an audio pattern and a subtitle pattern. Entries without a comma
    are malformed and skipped; the remaining entries are still produced.

    Example:
        >>> [(p.audio, p.subtitle) for p in LanguagePairList("eng,off; bad ;*,eng")]
        [('eng', 'off'), ('*', 'eng')]
    """

    def __init__(self, raw: str | None) -> None:
        self._raw = raw or ""

    @property
    def raw(self) -> str:
        """The unparsed configuration string."""
        return self._raw

    def __iter__(self) -> Iterator[LanguagePair]:
        for token in LanguageList(self._raw, PAIR_DELIMITER):
            audio, sep, subtitle = token.partition(",")
            if not sep:
                logger.debug("Skipping malformed audio/subtitle pair %r", token)
                continue
            yield LanguagePair(audio=audio.strip(), subtitle=subtitle.strip())

    def __repr__(self) -> str:
        return f"LanguagePairList({self._raw!r})"


def parse_language_list(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated language list into a tuple."""
    return tuple(LanguageList(raw))


def parse_language_pairs(raw: str | None) -> tuple[LanguagePair, ...]:
    """Parse a semicolon-separated list of audio,subtitle pairs into a tuple."""
    return tuple(LanguagePairList(raw))
