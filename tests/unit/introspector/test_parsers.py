"""Unit tests for ffprobe output parsing."""

import json
import logging
from pathlib import Path

import pytest

from trackselect.introspector.parsers import (
    MediaParseError,
    load_media_file,
    parse_audio_stream,
    parse_ffprobe_output,
    parse_subtitle_stream,
    sanitize_string,
)


class TestParseFfprobeOutput:
    """Tests for parse_ffprobe_output()."""

    def test_dual_audio_episode(self, anime_dual_audio_fixture: dict) -> None:
        media = parse_ffprobe_output(anime_dual_audio_fixture)

        assert [(a.id, a.language) for a in media.audio_tracks] == [
            (0, "jpn"),
            (1, "eng"),
        ]
        assert [s.title for s in media.subtitle_tracks] == [
            "Signs & Songs (Forced)",
            "Full Subtitles",
        ]
        assert media.subtitle_tracks[0].is_forced is True
        assert media.subtitle_tracks[1].is_forced is False
        assert not any(s.is_external for s in media.subtitle_tracks)

    def test_video_and_attachments_ignored(self, anime_dual_audio_fixture: dict) -> None:
        media = parse_ffprobe_output(anime_dual_audio_fixture)

        assert len(media.audio_tracks) == 2
        assert len(media.subtitle_tracks) == 2

    def test_dts_detection(self, movie_dts_fixture: dict) -> None:
        media = parse_ffprobe_output(movie_dts_fixture)

        assert [a.is_dts for a in media.audio_tracks] == [False, True]
        assert media.audio_tracks[1].channels == 8

    def test_duplicate_index_skipped(self, movie_dts_fixture: dict, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            media = parse_ffprobe_output(movie_dts_fixture, Path("/media/movie.mkv"))

        assert [s.language for s in media.subtitle_tracks] == ["fre", "und"]
        assert [s.id for s in media.subtitle_tracks] == [0, 1]
        assert "Duplicate stream index 3 in /media/movie.mkv" in caplog.text

    def test_media_path_from_format_section(self, anime_dual_audio_fixture: dict) -> None:
        media = parse_ffprobe_output(anime_dual_audio_fixture)

        assert media.path == Path("/media/anime/episode01.mkv")

    def test_explicit_path_wins(self, anime_dual_audio_fixture: dict) -> None:
        media = parse_ffprobe_output(anime_dual_audio_fixture, Path("/other.mkv"))

        assert media.path == Path("/other.mkv")

    def test_no_media_path_without_format_filename(self, movie_dts_fixture: dict) -> None:
        assert parse_ffprobe_output(movie_dts_fixture).path is None

    @pytest.mark.parametrize("index", [[1], {"a": 1}, "3", -1])
    def test_invalid_index_is_ignored(self, index, caplog) -> None:
        media = parse_ffprobe_output(
            {
                "streams": [
                    {"index": index, "codec_type": "audio"},
                    {"index": index, "codec_type": "audio"},
                ]
            }
        )

        assert len(media.audio_tracks) == 2
        assert "Ignoring invalid stream index" in caplog.text

    def test_path_recorded(self, movie_dts_fixture: dict) -> None:
        media = parse_ffprobe_output(movie_dts_fixture, Path("/media/movie.mkv"))
        assert media.path == Path("/media/movie.mkv")

    def test_no_streams(self) -> None:
        media = parse_ffprobe_output({"format": {}})

        assert media.audio_tracks == []
        assert media.has_subtitles is False

    def test_malformed_stream_entry_skipped(self) -> None:
        media = parse_ffprobe_output(
            {"streams": ["junk", {"index": 0, "codec_type": "audio"}]}
        )
        assert len(media.audio_tracks) == 1

    def test_not_a_mapping(self) -> None:
        with pytest.raises(MediaParseError, match="must be a JSON object"):
            parse_ffprobe_output([])

    def test_streams_not_a_list(self) -> None:
        with pytest.raises(MediaParseError, match="/media/x.mkv: 'streams' must be"):
            parse_ffprobe_output({"streams": {}}, Path("/media/x.mkv"))


class TestParseStreams:
    """Tests for the per-stream parsers."""

    def test_audio_language_normalized(self) -> None:
        track = parse_audio_stream(
            {"codec_name": "dca", "tags": {"language": "de"}}, ordinal=2
        )

        assert track.language == "ger"
        assert track.is_dts is True
        assert track.id == 2
        assert track.index == 2

    def test_audio_invalid_channels_ignored(self, caplog) -> None:
        track = parse_audio_stream({"channels": -2}, ordinal=0, file_path="x.mkv")

        assert track.channels is None
        assert "Ignoring invalid channels" in caplog.text

    def test_subtitle_without_tags(self) -> None:
        track = parse_subtitle_stream({"codec_name": "subrip"}, ordinal=0)

        assert track.language == "und"
        assert track.title is None
        assert track.is_forced is False


class TestSanitizeString:
    def test_none(self) -> None:
        assert sanitize_string(None) is None

    def test_lone_surrogate_replaced(self) -> None:
        assert sanitize_string("bad\udcffvalue") == "bad?value"


class TestLoadMediaFile:
    """Tests for load_media_file()."""

    def test_loads_fixture(self, ffprobe_fixtures_dir: Path) -> None:
        media = load_media_file(ffprobe_fixtures_dir / "movie_dts.json")

        assert len(media.audio_tracks) == 2
        assert media.path is None

    def test_media_path_is_not_the_json_file(self, ffprobe_fixtures_dir: Path) -> None:
        media = load_media_file(ffprobe_fixtures_dir / "anime_dual_audio.json")

        assert media.path == Path("/media/anime/episode01.mkv")

    def test_document_error_names_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "streams.json"
        path.write_text('{"streams": {}}')

        with pytest.raises(MediaParseError) as exc_info:
            load_media_file(path)

        assert str(exc_info.value) == f"{path}: 'streams' must be a list"
        assert exc_info.value.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MediaParseError, match="cannot read file"):
            load_media_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(MediaParseError, match="invalid JSON") as exc_info:
            load_media_file(path)

        assert exc_info.value.path == path

    def test_round_trips_written_document(self, tmp_path: Path) -> None:
        path = tmp_path / "streams.json"
        path.write_text(
            json.dumps(
                {
                    "streams": [
                        {"index": 0, "codec_type": "subtitle", "tags": {"language": "en"}}
                    ]
                }
            )
        )

        media = load_media_file(path)

        assert media.subtitle_tracks[0].language == "eng"
