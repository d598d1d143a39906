"""Configuration management for Track Select.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (TRACKSELECT_*)
3. Config file (~/.trackselect/config.toml)
4. Default values (lowest priority)

Device-specific settings live in renderer profiles (see profiles.py).
"""

from trackselect.config.builder import (
    ConfigBuilder,
    ConfigError,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from trackselect.config.env import EnvReader
from trackselect.config.loader import (
    clear_config_cache,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from trackselect.config.models import (
    AppConfig,
    LoggingConfig,
    RendererConfig,
    RendererProfile,
    SelectionConfig,
)
from trackselect.config.profiles import (
    ProfileConfigProvider,
    RendererProfileError,
    RendererProfileNotFoundError,
    list_renderer_profiles,
    load_renderer_profile,
    merge_renderer_with_config,
)

__all__ = [
    # Models
    "AppConfig",
    "LoggingConfig",
    "RendererConfig",
    "RendererProfile",
    "SelectionConfig",
    # Loader
    "clear_config_cache",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
    # Builder
    "ConfigBuilder",
    "ConfigError",
    "ConfigSource",
    "EnvReader",
    "source_from_env",
    "source_from_file",
    # Renderer profiles
    "ProfileConfigProvider",
    "RendererProfileError",
    "RendererProfileNotFoundError",
    "list_renderer_profiles",
    "load_renderer_profile",
    "merge_renderer_with_config",
]
