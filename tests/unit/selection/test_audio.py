"""Tests for the audio resolver."""

import logging

import pytest

from trackselect.config.models import SelectionConfig
from trackselect.domain import AudioTrack, MediaItem
from trackselect.selection.audio import resolve_audio


def make_media(*audio: AudioTrack) -> MediaItem:
    """Create a MediaItem holding the given audio tracks."""
    return MediaItem(audio_tracks=list(audio))


def audio(track_id: int, language: str | None, is_dts: bool = False) -> AudioTrack:
    return AudioTrack(id=track_id, language=language, is_dts=is_dts, index=track_id)


class TestResolveAudioPreferences:
    """Language preference matching."""

    def test_first_preference_wins_over_track_order(self) -> None:
        """An earlier preference beats a track that appears earlier."""
        media = make_media(audio(0, "jpn"), audio(1, "eng"))
        config = SelectionConfig(audio_languages="eng,jpn")

        assert resolve_audio(media, config).id == 1

    def test_first_matching_track_for_a_preference(self) -> None:
        media = make_media(audio(0, "fre"), audio(1, "eng"), audio(2, "eng"))
        config = SelectionConfig(audio_languages="eng")

        assert resolve_audio(media, config).id == 1

    def test_falls_through_to_later_preference(self) -> None:
        media = make_media(audio(0, "fre"), audio(1, "jpn"))
        config = SelectionConfig(audio_languages="eng,jpn")

        assert resolve_audio(media, config).id == 1

    def test_alias_codes_match(self) -> None:
        """Two-letter preferences match three-letter track codes."""
        media = make_media(audio(0, "fre"), audio(1, "ger"))
        config = SelectionConfig(audio_languages="de")

        assert resolve_audio(media, config).id == 1

    def test_preferred_language_beats_earlier_dts(self) -> None:
        """A language match wins even if a DTS track comes first."""
        media = make_media(audio(0, "ger", is_dts=True), audio(1, "eng"))
        config = SelectionConfig(audio_languages="eng")

        assert resolve_audio(media, config).id == 1

    def test_custom_matcher_is_used(self) -> None:
        media = make_media(audio(0, "eng"), audio(1, "xx"))
        config = SelectionConfig(audio_languages="anything")

        result = resolve_audio(media, config, matcher=lambda a, b: a == "xx")

        assert result.id == 1


class TestResolveAudioFallbacks:
    """Behavior when no preference matches."""

    def test_dts_track_preferred_over_first_track(self) -> None:
        media = make_media(audio(0, "fre"), audio(1, "ger", is_dts=True))
        config = SelectionConfig(audio_languages="eng,jpn")

        assert resolve_audio(media, config).id == 1

    def test_first_dts_track_in_order(self) -> None:
        media = make_media(
            audio(0, "fre"), audio(1, "ger", is_dts=True), audio(2, "ita", is_dts=True)
        )
        config = SelectionConfig(audio_languages="eng")

        assert resolve_audio(media, config).id == 1

    def test_first_track_without_dts(self) -> None:
        media = make_media(audio(0, "fre"), audio(1, "ger"))
        config = SelectionConfig(audio_languages="eng")

        assert resolve_audio(media, config).id == 0

    def test_untagged_tracks_fall_back(self) -> None:
        media = make_media(audio(0, None), audio(1, None))
        config = SelectionConfig(audio_languages="eng")

        assert resolve_audio(media, config).id == 0

    @pytest.mark.parametrize("languages", ["", " , ,"])
    def test_empty_preference_list_uses_first_track(self, languages: str) -> None:
        """Without preferences no track is scanned, so DTS is not preferred."""
        media = make_media(audio(0, "eng"), audio(1, "eng", is_dts=True))
        config = SelectionConfig(audio_languages=languages)

        assert resolve_audio(media, config).id == 0


class TestResolveAudioNoTracks:
    """Edge cases without audio."""

    def test_no_audio_tracks(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="trackselect.selection.audio"):
            assert resolve_audio(make_media(), SelectionConfig()) is None
        assert "Found no audio track" in caplog.text

    def test_no_media(self) -> None:
        assert resolve_audio(None, SelectionConfig()) is None
