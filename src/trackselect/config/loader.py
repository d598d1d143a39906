"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (TRACKSELECT_*)
3. Config file (~/.trackselect/config.toml)
4. Default values

Environment variables:
- TRACKSELECT_CONFIG_PATH: Path to config file (overrides default location)
- TRACKSELECT_DATA_DIR: Path to data directory (overrides ~/.trackselect/)
- TRACKSELECT_AUDIO_LANGUAGES, TRACKSELECT_AUDIO_SUBTITLE_LANGUAGES,
  TRACKSELECT_FORCED_SUBTITLE_TAGS, TRACKSELECT_FORCED_SUBTITLE_LANGUAGE:
  selection language settings, in the same format as the config file
- TRACKSELECT_SUBTITLES_DISABLED, TRACKSELECT_FORCE_EXTERNAL_SUBTITLES,
  TRACKSELECT_AUTOLOAD_EXTERNAL_SUBTITLES: selection flags
- TRACKSELECT_RENDERER_LANGUAGES: default renderer language list
- TRACKSELECT_RENDERERS_DIR: Directory of renderer profiles
- TRACKSELECT_LOG_LEVEL, TRACKSELECT_LOG_FILE: logging overrides
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from trackselect.config.builder import (
    ConfigBuilder,
    ConfigError,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from trackselect.config.env import EnvReader
from trackselect.config.models import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".trackselect"
CONFIG_FILE_NAME = "config.toml"

# Cache for loaded config files (path -> (parsed dict, mtime))
# A changed file is reloaded on the next call, so every snapshot reflects
# the configuration on disk at the time it was taken.
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the Track Select data directory.

    Can be overridden by the TRACKSELECT_DATA_DIR environment variable.

    Returns:
        Path to the data directory (~/.trackselect/ by default).
    """
    reader = env_reader or EnvReader()
    return reader.get_path("TRACKSELECT_DATA_DIR", DEFAULT_DATA_DIR)


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by the TRACKSELECT_CONFIG_PATH environment variable.
    """
    reader = env_reader or EnvReader()
    env_path = reader.get_path("TRACKSELECT_CONFIG_PATH")
    if env_path is not None:
        return env_path
    return get_data_dir(reader) / CONFIG_FILE_NAME


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Parse a TOML file, returning an empty dict if it doesn't exist.

    Raises:
        ConfigError: If the file exists but is not valid TOML.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    logger.debug("Loaded config from %s", path)
    return data


def load_config_file(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a TOML file.

    Results are cached with mtime-based invalidation. Thread-safe.

    Args:
        path: Path to config file. If None, uses default location.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: If the file cannot be parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        cached = _config_cache.get(path)
        if cached is not None and cached[1] == current_mtime:
            return cached[0]

        result = _load_toml_file(path)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    cli_source: ConfigSource | None = None,
    env_reader: EnvReader | None = None,
) -> AppConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides TRACKSELECT_CONFIG_PATH).
        cli_source: Values given on the command line (highest precedence).
        env_reader: Optional EnvReader for testing (uses os.environ if None).

    Returns:
        AppConfig with merged configuration.

    Raises:
        ConfigError: If the config file is invalid.
    """
    reader = env_reader or EnvReader()
    path = config_path or get_default_config_path(reader)
    file_config = load_config_file(path)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config), source_name="file")
    builder.apply(source_from_env(reader), source_name="env")
    if cli_source is not None:
        builder.apply(cli_source, source_name="cli")

    config = builder.build()
    if config.renderers_dir is None:
        config.renderers_dir = get_data_dir(reader) / "renderers"
    return config
