"""Configuration data models.

This module defines dataclasses for Track Select configuration options.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path

from trackselect.preferences import LanguageList, LanguagePairList


@dataclass(frozen=True)
class SelectionConfig:
    """Snapshot of the settings that drive track selection.

    The language settings are kept as the raw delimited strings users
    configure (for example "eng,off;*,eng") and tokenized on access, so the
    configuration format round-trips unchanged.
    """

    # Comma-separated audio language preference, most preferred first
    audio_languages: str = "eng,jpn"

    # Semicolon-separated "audio,subtitle" pairs; "*" matches any language
    # and a subtitle of "off" means no regular subtitles
    audio_subtitle_languages: str = "eng,off;*,eng;*,und"

    # Comma-separated substrings identifying forced subtitle tracks by title
    forced_subtitle_tags: str = "forced"

    # Language a forced subtitle track must have to be chosen
    forced_subtitle_language: str = "eng"

    subtitles_disabled: bool = False
    force_external_subtitles: bool = True
    autoload_external_subtitles: bool = True

    @property
    def audio_language_preference(self) -> LanguageList:
        """Ordered audio language tokens."""
        return LanguageList(self.audio_languages)

    @property
    def audio_subtitle_pairs(self) -> LanguagePairList:
        """Ordered (audio pattern, subtitle pattern) pairs."""
        return LanguagePairList(self.audio_subtitle_languages)

    @property
    def forced_tags(self) -> LanguageList:
        """Ordered forced-subtitle title tags."""
        return LanguageList(self.forced_subtitle_tags)

    def to_dict(self) -> dict[str, str | bool]:
        """Raw settings keyed by field name, in declaration order."""
        return asdict(self)


@dataclass(frozen=True)
class RendererConfig:
    """Default renderer settings used when no device profile applies."""

    # Comma-separated subtitle language list, most preferred first
    languages: str = "eng"


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass(frozen=True)
class RendererProfile:
    """Device-specific configuration for one renderer.

    Any selection field left as None falls back to the base configuration.
    """

    name: str
    description: str | None = None
    # Comma-separated renderer language list; None = use base renderer config
    languages: str | None = None
    selection_overrides: dict[str, str | bool] = field(default_factory=dict)


@dataclass
class AppConfig:
    """Main configuration container for Track Select."""

    selection: SelectionConfig = field(default_factory=SelectionConfig)
    renderer: RendererConfig = field(default_factory=RendererConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Directory holding renderer profile YAML files (None = default location)
    renderers_dir: Path | None = None
