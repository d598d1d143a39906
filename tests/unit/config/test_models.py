"""Tests for configuration models."""

import pytest

from trackselect.config.models import LoggingConfig, SelectionConfig
from trackselect.preferences import LanguagePair


class TestSelectionConfig:
    """Tests for SelectionConfig."""

    def test_defaults(self) -> None:
        config = SelectionConfig()

        assert config.audio_languages == "eng,jpn"
        assert config.audio_subtitle_languages == "eng,off;*,eng;*,und"
        assert config.forced_subtitle_tags == "forced"
        assert config.forced_subtitle_language == "eng"
        assert config.subtitles_disabled is False
        assert config.force_external_subtitles is True
        assert config.autoload_external_subtitles is True

    def test_parsed_views(self) -> None:
        config = SelectionConfig(
            audio_languages="jpn, eng",
            audio_subtitle_languages="jpn,eng;*,off",
            forced_subtitle_tags="forced,foreign",
        )

        assert list(config.audio_language_preference) == ["jpn", "eng"]
        assert list(config.audio_subtitle_pairs) == [
            LanguagePair("jpn", "eng"),
            LanguagePair("*", "off"),
        ]
        assert list(config.forced_tags) == ["forced", "foreign"]

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            SelectionConfig().audio_languages = "fre"

    def test_to_dict(self) -> None:
        data = SelectionConfig(audio_languages="fre").to_dict()

        assert data["audio_languages"] == "fre"
        assert list(data)[0] == "audio_languages"


class TestLoggingConfig:
    """Tests for LoggingConfig validation."""

    def test_invalid_level(self) -> None:
        with pytest.raises(ValueError, match="level must be one of"):
            LoggingConfig(level="trace")

    def test_invalid_format(self) -> None:
        with pytest.raises(ValueError, match="format must be one of"):
            LoggingConfig(format="xml")

    def test_level_case_insensitive(self) -> None:
        assert LoggingConfig(level="DEBUG").level == "DEBUG"
