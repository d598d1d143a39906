"""Audio track resolution.

The audio resolver is a first-match, ordered-fallback policy: the audio
language preference list is walked in order and the first track matching a
preferred language wins. Only when no preference matches at all does the
resolver fall back to the first DTS track, then to the first track. With
an empty preference list no track is scanned, so the first track is used
whatever its codec.
"""

from __future__ import annotations

import logging

from trackselect.config.models import SelectionConfig
from trackselect.domain import AudioTrack, MediaItem
from trackselect.language import CodeMatcher, match_language_code

logger = logging.getLogger(__name__)


def resolve_audio(
    media: MediaItem | None,
    config: SelectionConfig,
    matcher: CodeMatcher = match_language_code,
) -> AudioTrack | None:
    """Pick the audio track to play.

    Args:
        media: Media item to choose from. None yields None.
        config: Selection configuration snapshot.
        matcher: Language code equivalence predicate.

    Returns:
        The selected AudioTrack, or None if the item has no audio.
    """
    if media is None or not media.audio_tracks:
        logger.debug("Found no audio track")
        return None

    # Only tracks scanned against a preference count as DTS candidates
    dts_track: AudioTrack | None = None
    for lang in config.audio_language_preference:
        logger.debug('Looking for an audio track with language "%s"', lang)
        for audio in media.audio_tracks:
            if matcher(audio.language, lang):
                logger.debug("Matched audio track: %s", audio)
                return audio
            if dts_track is None and audio.is_dts:
                dts_track = audio

    if dts_track is not None:
        logger.debug(
            "Preferring DTS audio track since no language match was found: %s",
            dts_track,
        )
        return dts_track

    first = media.audio_tracks[0]
    logger.debug("Using the first available audio track: %s", first)
    return first
