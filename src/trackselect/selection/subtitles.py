"""Subtitle track resolution.

Subtitle selection runs as a sequence of phases over one media item's
subtitle track list. Every phase is a function of the tracks, the
configuration and the state left by the previous phase; the first phase to
reach a definitive answer decides the outcome.

Phases:
    0. Gate: subtitles disabled, external subtitle discovery, no tracks.
    1. Audio/subtitle pair preferences, evaluated for the first pair whose
       audio pattern applies to the selected audio language. Without an
       audio language no pair applies, not even "*".
    2. Forced external subtitles, when nothing was chosen so far.
    3. Forced-tag subtitles when the pair said "off", otherwise the first
       external subtitle when nothing matched so far (only with external
       subtitle autoloading).
    4. The renderer's preferred subtitle languages.

A candidate whose language is "off" always ends resolution with no
subtitles, whichever phase produced it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from trackselect.config.models import SelectionConfig
from trackselect.domain import (
    NO_SUBTITLES_ID,
    SUBTITLES_OFF,
    WILDCARD,
    MediaItem,
    SubtitleTrack,
)
from trackselect.language import CodeMatcher, match_language_code
from trackselect.preferences import LanguageList, LanguagePair
from trackselect.selection.discovery import NullSubtitleDiscovery
from trackselect.selection.interfaces import SubtitleDiscovery

logger = logging.getLogger(__name__)

# Placeholder left by an "off" pair preference. It never reaches the caller.
OFF_MARKER = SubtitleTrack(id=NO_SUBTITLES_ID, language=SUBTITLES_OFF)

_NULL_DISCOVERY = NullSubtitleDiscovery()


@dataclass(frozen=True)
class SubtitleState:
    """Outcome of a resolution phase.

    selected is a definitive pick. tentative is an internal track (or the
    "off" marker) that a later, higher-priority match may still replace.
    """

    selected: SubtitleTrack | None = None
    tentative: SubtitleTrack | None = None

    @property
    def candidate(self) -> SubtitleTrack | None:
        """The track resolution would return if it stopped here."""
        return self.selected if self.selected is not None else self.tentative


def _first_external(tracks: Sequence[SubtitleTrack]) -> SubtitleTrack | None:
    return next((t for t in tracks if t.is_external), None)


def _passes_gate(
    file_ref: Path | str | None,
    media: MediaItem,
    config: SelectionConfig,
    force_refresh: bool,
    discovery: SubtitleDiscovery,
) -> bool:
    """Phase 0: decide whether there is anything to resolve."""
    if config.subtitles_disabled:
        logger.debug("Not resolving subtitles since subtitles are disabled")
        return False

    if force_refresh or not media.external_subs_probed:
        discovery.discover(file_ref, media, force_refresh)

    if not media.has_subtitles:
        logger.debug("No subtitles found for %s", file_ref)
        return False
    return True


def _pair_applies(
    pair: LanguagePair, audio_language: str | None, matcher: CodeMatcher
) -> bool:
    if audio_language is None:
        return False
    return pair.audio == WILDCARD or matcher(audio_language, pair.audio)


def _match_pair(
    pair: LanguagePair,
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    matcher: CodeMatcher,
) -> SubtitleState:
    """Resolve one audio/subtitle pair against the subtitle tracks."""
    if pair.subtitle == SUBTITLES_OFF:
        if config.force_external_subtitles:
            external = _first_external(tracks)
            if external is not None:
                logger.debug(
                    'Ignoring the "off" language because external subtitles '
                    "are enforced: %s",
                    external,
                )
                return SubtitleState(selected=external)
        logger.debug(
            'Not looking for non-forced subtitles since they are "off" '
            'for audio language "%s"',
            pair.audio,
        )
        return SubtitleState(tentative=OFF_MARKER)

    tentative: SubtitleTrack | None = None
    for track in tracks:
        if pair.subtitle != WILDCARD and not matcher(track.language, pair.subtitle):
            continue

        if track.is_external:
            if config.autoload_external_subtitles:
                logger.debug("Matched external subtitles track: %s", track)
                return SubtitleState(selected=track)
            logger.debug(
                "External subtitles ignored because auto loading of external "
                "subtitles is disabled: %s",
                track,
            )
        elif tentative is None:
            if not config.autoload_external_subtitles:
                logger.debug("Matched internal subtitles track: %s", track)
                return SubtitleState(selected=track)
            logger.debug(
                "Matched internal subtitles track, but will keep looking for "
                "an external match: %s",
                track,
            )
            tentative = track

    return SubtitleState(tentative=tentative)


def match_pair_preferences(
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    audio_language: str | None,
    matcher: CodeMatcher = match_language_code,
) -> SubtitleState:
    """Phase 1: apply the first audio/subtitle pair that fits the audio.

    Only the first applicable pair is evaluated; later pairs for the same
    audio language are never consulted.
    """
    for pair in config.audio_subtitle_pairs:
        if not _pair_applies(pair, audio_language, matcher):
            continue
        logger.debug(
            'Searching for a match for language "%s" with audio "%s" '
            'and subtitle "%s"',
            audio_language,
            pair.audio,
            pair.subtitle,
        )
        return _match_pair(pair, tracks, config, matcher)
    return SubtitleState()


def apply_forced_external(
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    state: SubtitleState,
) -> SubtitleState:
    """Phase 2: fall back to any external track when externals are forced."""
    if state.candidate is not None or not config.force_external_subtitles:
        return state
    external = _first_external(tracks)
    if external is None:
        return state
    logger.debug(
        "Matched external subtitles track that did not match language "
        "preferences: %s",
        external,
    )
    return SubtitleState(selected=external)


def find_forced_subtitles(
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    matcher: CodeMatcher = match_language_code,
) -> SubtitleTrack | None:
    """Find the first track whose title carries a forced tag.

    The track must also be in the configured forced-subtitle language. Tags
    are matched as case-insensitive substrings, in configured order.
    """
    tags = [tag.lower() for tag in config.forced_tags]
    for track in tracks:
        if track.title is None:
            continue
        title = track.title.lower()
        for tag in tags:
            if tag in title and matcher(
                track.language, config.forced_subtitle_language
            ):
                logger.debug(
                    "Forced %s subtitles track: %s",
                    "external" if track.is_external else "internal",
                    track,
                )
                return track
    return None


def apply_forced_or_external_default(
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    state: SubtitleState,
    matcher: CodeMatcher = match_language_code,
) -> SubtitleState:
    """Phase 3: forced-tag subtitles for "off", else the first external track.

    Only runs with external subtitle autoloading enabled and no definitive
    selection. A tentative internal match from the pair preferences is kept
    as is; only the "off" marker or an empty state are looked at. If nothing
    is found the state stands.
    """
    if not config.autoload_external_subtitles or state.selected is not None:
        return state

    if state.tentative is not None:
        if not state.tentative.is_off:
            return state
        forced = find_forced_subtitles(tracks, config, matcher)
        if forced is None:
            return state
        return SubtitleState(selected=forced, tentative=state.tentative)

    external = _first_external(tracks)
    if external is None:
        return state
    logger.debug("Found external subtitles track: %s", external)
    return SubtitleState(selected=external)


def match_renderer_languages(
    tracks: Sequence[SubtitleTrack],
    config: SelectionConfig,
    renderer_languages: Iterable[str],
    matcher: CodeMatcher = match_language_code,
) -> SubtitleTrack | None:
    """Phase 4: first track in one of the renderer's preferred languages.

    External tracks are skipped when autoloading them is disabled.
    """
    for lang in renderer_languages:
        logger.debug('Looking for a subtitle track with language "%s"', lang)
        for track in tracks:
            if track.is_off:
                continue
            if track.is_external and not config.autoload_external_subtitles:
                continue
            if matcher(track.language, lang):
                logger.debug("Matched subtitles track: %s", track)
                return track
    return None


def resolve_subtitle(
    file_ref: Path | str | None,
    media: MediaItem | None,
    renderer_languages: str | Iterable[str] | None,
    audio_language: str | None,
    force_refresh: bool,
    config: SelectionConfig,
    *,
    discovery: SubtitleDiscovery = _NULL_DISCOVERY,
    matcher: CodeMatcher = match_language_code,
) -> SubtitleTrack | None:
    """Pick the subtitle track to show, if any.

    Args:
        file_ref: Location of the media, passed through to discovery untouched.
        media: Media item to choose from. None yields None.
        renderer_languages: Renderer's preferred languages, either the
            comma-delimited string or an ordered iterable.
        audio_language: Language of the selected audio track, if known.
        force_refresh: Re-run external subtitle discovery even if the item
            was already probed.
        config: Selection configuration snapshot.
        discovery: External subtitle discovery collaborator.
        matcher: Language code equivalence predicate.

    Returns:
        The selected SubtitleTrack, or None for no subtitles. The result is
        never a track whose language is "off".
    """
    if media is None:
        return None
    if not _passes_gate(file_ref, media, config, force_refresh, discovery):
        return None

    tracks = media.subtitle_tracks
    state = match_pair_preferences(tracks, config, audio_language, matcher)
    state = apply_forced_external(tracks, config, state)
    state = apply_forced_or_external_default(tracks, config, state, matcher)

    candidate = state.candidate
    if candidate is not None:
        if candidate.is_off:
            logger.debug("Subtitles are off for audio language %r", audio_language)
            return None
        return candidate

    if renderer_languages is None:
        return None
    if isinstance(renderer_languages, str):
        renderer_languages = LanguageList(renderer_languages)
    return match_renderer_languages(tracks, config, renderer_languages, matcher)
