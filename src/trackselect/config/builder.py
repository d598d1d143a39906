"""Configuration builder with explicit layering.

This module provides ConfigBuilder for building AppConfig by composing
multiple configuration sources with explicit precedence handling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from trackselect.config.env import EnvReader
from trackselect.config.models import (
    AppConfig,
    LoggingConfig,
    RendererConfig,
    SelectionConfig,
)


class ConfigError(Exception):
    """Invalid value in a configuration source."""


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values indicate "not specified in this source" and will not
    override values from lower-precedence sources.
    """

    # Selection config
    audio_languages: str | None = None
    audio_subtitle_languages: str | None = None
    forced_subtitle_tags: str | None = None
    forced_subtitle_language: str | None = None
    subtitles_disabled: bool | None = None
    force_external_subtitles: bool | None = None
    autoload_external_subtitles: bool | None = None

    # Renderer config
    renderer_languages: str | None = None
    renderers_dir: Path | None = None

    # Logging config
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


# Selection fields in the order they appear in SelectionConfig
SELECTION_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(SelectionConfig))


class ConfigBuilder:
    """Builds AppConfig by layering ConfigSources with precedence.

    Later sources override earlier ones (for non-None values).

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        builder.apply(cli_source)
        config = builder.build()
    """

    def __init__(self) -> None:
        """Initialize the builder with no values set."""
        self._values: dict[str, Any] = {}
        self._origins: dict[str, str] = {}

    def apply(self, source: ConfigSource, source_name: str = "unknown") -> None:
        """Apply configuration source, overriding existing values.

        Args:
            source: Configuration source to apply.
            source_name: Label recorded for each value taken from the source.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value
                self._origins[field_obj.name] = source_name

    def origin_of(self, key: str) -> str:
        """Return which source supplied a value ("default" if none did)."""
        return self._origins.get(key, "default")

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> AppConfig:
        """Build the final AppConfig with defaults for unset values."""
        defaults = SelectionConfig()
        selection = SelectionConfig(
            **{name: self._get(name, getattr(defaults, name)) for name in SELECTION_FIELDS}
        )

        renderer = RendererConfig(
            languages=self._get("renderer_languages", RendererConfig().languages),
        )

        try:
            logging_config = LoggingConfig(
                level=self._get("logging_level", "info"),
                file=self._get("logging_file", None),
                format=self._get("logging_format", "text"),
                include_stderr=self._get("logging_include_stderr", False),
                max_bytes=self._get("logging_max_bytes", 10_485_760),
                backup_count=self._get("logging_backup_count", 5),
            )
        except ValueError as e:
            raise ConfigError(f"Invalid logging configuration: {e}") from e

        return AppConfig(
            selection=selection,
            renderer=renderer,
            logging=logging_config,
            renderers_dir=self._get("renderers_dir", None),
        )


def _typed(section: dict[str, Any], key: str, expected: type, where: str) -> Any:
    """Fetch an optional value from a config section, checking its type."""
    value = section.get(key)
    if value is None:
        return None
    # bool is a subclass of int; do not accept it where an int is expected
    if not isinstance(value, expected) or (
        expected is int and isinstance(value, bool)
    ):
        raise ConfigError(
            f"[{where}] {key} must be of type {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    selection = file_config.get("selection", {})
    renderer = file_config.get("renderer", {})
    logging_conf = file_config.get("logging", {})

    renderers_dir = _typed(renderer, "profiles_dir", str, "renderer")
    log_file = _typed(logging_conf, "file", str, "logging")

    return ConfigSource(
        # Selection
        audio_languages=_typed(selection, "audio_languages", str, "selection"),
        audio_subtitle_languages=_typed(
            selection, "audio_subtitle_languages", str, "selection"
        ),
        forced_subtitle_tags=_typed(
            selection, "forced_subtitle_tags", str, "selection"
        ),
        forced_subtitle_language=_typed(
            selection, "forced_subtitle_language", str, "selection"
        ),
        subtitles_disabled=_typed(selection, "subtitles_disabled", bool, "selection"),
        force_external_subtitles=_typed(
            selection, "force_external_subtitles", bool, "selection"
        ),
        autoload_external_subtitles=_typed(
            selection, "autoload_external_subtitles", bool, "selection"
        ),
        # Renderer
        renderer_languages=_typed(renderer, "languages", str, "renderer"),
        renderers_dir=Path(renderers_dir).expanduser() if renderers_dir else None,
        # Logging
        logging_level=_typed(logging_conf, "level", str, "logging"),
        logging_file=Path(log_file).expanduser() if log_file else None,
        logging_format=_typed(logging_conf, "format", str, "logging"),
        logging_include_stderr=_typed(logging_conf, "include_stderr", bool, "logging"),
        logging_max_bytes=_typed(logging_conf, "max_bytes", int, "logging"),
        logging_backup_count=_typed(logging_conf, "backup_count", int, "logging"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from TRACKSELECT_* environment variables."""
    return ConfigSource(
        # Selection
        audio_languages=reader.get_str("TRACKSELECT_AUDIO_LANGUAGES"),
        audio_subtitle_languages=reader.get_str(
            "TRACKSELECT_AUDIO_SUBTITLE_LANGUAGES"
        ),
        forced_subtitle_tags=reader.get_str("TRACKSELECT_FORCED_SUBTITLE_TAGS"),
        forced_subtitle_language=reader.get_str(
            "TRACKSELECT_FORCED_SUBTITLE_LANGUAGE"
        ),
        subtitles_disabled=reader.get_bool("TRACKSELECT_SUBTITLES_DISABLED"),
        force_external_subtitles=reader.get_bool(
            "TRACKSELECT_FORCE_EXTERNAL_SUBTITLES"
        ),
        autoload_external_subtitles=reader.get_bool(
            "TRACKSELECT_AUTOLOAD_EXTERNAL_SUBTITLES"
        ),
        # Renderer
        renderer_languages=reader.get_str("TRACKSELECT_RENDERER_LANGUAGES"),
        renderers_dir=reader.get_path("TRACKSELECT_RENDERERS_DIR"),
        # Logging
        logging_level=reader.get_str("TRACKSELECT_LOG_LEVEL"),
        logging_file=reader.get_path("TRACKSELECT_LOG_FILE"),
    )
