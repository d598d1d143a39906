"""Tests for ConfigBuilder and configuration sources."""

from pathlib import Path

import pytest

from trackselect.config.builder import (
    ConfigBuilder,
    ConfigError,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from trackselect.config.env import EnvReader
from trackselect.config.models import SelectionConfig


class TestConfigBuilder:
    """Tests for layering and defaults."""

    def test_defaults_when_nothing_applied(self) -> None:
        config = ConfigBuilder().build()

        assert config.selection == SelectionConfig()
        assert config.renderer.languages == "eng"
        assert config.logging.level == "info"
        assert config.renderers_dir is None

    def test_later_sources_override_earlier(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(audio_languages="fre"), "file")
        builder.apply(ConfigSource(audio_languages="ger"), "env")

        assert builder.build().selection.audio_languages == "ger"
        assert builder.origin_of("audio_languages") == "env"

    def test_none_does_not_override(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(subtitles_disabled=True), "file")
        builder.apply(ConfigSource(subtitles_disabled=None), "env")

        assert builder.build().selection.subtitles_disabled is True
        assert builder.origin_of("subtitles_disabled") == "file"

    def test_false_overrides(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(force_external_subtitles=False), "cli")

        assert builder.build().selection.force_external_subtitles is False

    def test_origin_defaults(self) -> None:
        assert ConfigBuilder().origin_of("audio_languages") == "default"

    def test_invalid_logging_level(self) -> None:
        builder = ConfigBuilder()
        builder.apply(ConfigSource(logging_level="verbose"), "file")

        with pytest.raises(ConfigError, match="Invalid logging configuration"):
            builder.build()


class TestSourceFromFile:
    """Tests for source_from_file()."""

    def test_reads_all_sections(self) -> None:
        source = source_from_file(
            {
                "selection": {
                    "audio_languages": "jpn,eng",
                    "audio_subtitle_languages": "jpn,eng;*,off",
                    "autoload_external_subtitles": False,
                },
                "renderer": {"languages": "fre", "profiles_dir": "/etc/renderers"},
                "logging": {"level": "debug", "file": "/var/log/ts.log"},
            }
        )

        assert source.audio_languages == "jpn,eng"
        assert source.audio_subtitle_languages == "jpn,eng;*,off"
        assert source.autoload_external_subtitles is False
        assert source.renderer_languages == "fre"
        assert source.renderers_dir == Path("/etc/renderers")
        assert source.logging_level == "debug"
        assert source.logging_file == Path("/var/log/ts.log")

    def test_missing_keys_are_none(self) -> None:
        source = source_from_file({})

        assert source == ConfigSource()

    def test_strings_kept_verbatim(self) -> None:
        source = source_from_file({"selection": {"forced_subtitle_tags": " forced ,foreign"}})

        assert source.forced_subtitle_tags == " forced ,foreign"

    def test_wrong_type_rejected(self) -> None:
        with pytest.raises(ConfigError, match=r"\[selection\] subtitles_disabled"):
            source_from_file({"selection": {"subtitles_disabled": "yes"}})

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(ConfigError, match="max_bytes must be of type int"):
            source_from_file({"logging": {"max_bytes": True}})


class TestSourceFromEnv:
    """Tests for source_from_env()."""

    def test_reads_trackselect_variables(self) -> None:
        reader = EnvReader(
            env={
                "TRACKSELECT_AUDIO_LANGUAGES": "ger",
                "TRACKSELECT_AUDIO_SUBTITLE_LANGUAGES": "*,ger",
                "TRACKSELECT_FORCED_SUBTITLE_TAGS": "forced,foreign",
                "TRACKSELECT_FORCED_SUBTITLE_LANGUAGE": "ger",
                "TRACKSELECT_SUBTITLES_DISABLED": "yes",
                "TRACKSELECT_FORCE_EXTERNAL_SUBTITLES": "0",
                "TRACKSELECT_AUTOLOAD_EXTERNAL_SUBTITLES": "off",
                "TRACKSELECT_RENDERER_LANGUAGES": "ger,eng",
                "TRACKSELECT_LOG_LEVEL": "warning",
            }
        )

        source = source_from_env(reader)

        assert source.audio_languages == "ger"
        assert source.audio_subtitle_languages == "*,ger"
        assert source.forced_subtitle_tags == "forced,foreign"
        assert source.forced_subtitle_language == "ger"
        assert source.subtitles_disabled is True
        assert source.force_external_subtitles is False
        assert source.autoload_external_subtitles is False
        assert source.renderer_languages == "ger,eng"
        assert source.logging_level == "warning"

    def test_empty_environment(self) -> None:
        assert source_from_env(EnvReader(env={})) == ConfigSource()
