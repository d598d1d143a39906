"""Renderer profile management.

A renderer profile holds device-specific settings: the renderer's preferred
subtitle language list and overrides for any selection setting. Profiles are
YAML files named after the renderer:

    # ~/.trackselect/renderers/living-room-tv.yaml
    description: Living room TV
    languages: "fre,eng"
    selection:
      audio_languages: "fre,eng"
      autoload_external_subtitles: false
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trackselect.config.models import (
    AppConfig,
    RendererProfile,
    SelectionConfig,
)

logger = logging.getLogger(__name__)

_PROFILE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")


class RendererProfileError(Exception):
    """Error loading or validating a renderer profile."""


class RendererProfileNotFoundError(RendererProfileError):
    """Renderer profile does not exist."""


class _SelectionOverridesModel(BaseModel):
    """Selection settings a renderer profile may override."""

    model_config = ConfigDict(extra="forbid")

    audio_languages: str | None = None
    audio_subtitle_languages: str | None = None
    forced_subtitle_tags: str | None = None
    forced_subtitle_language: str | None = None
    subtitles_disabled: bool | None = None
    force_external_subtitles: bool | None = None
    autoload_external_subtitles: bool | None = None


class _RendererProfileModel(BaseModel):
    """Schema of a renderer profile YAML document."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    description: str | None = None
    languages: str | None = None
    selection: _SelectionOverridesModel = Field(
        default_factory=_SelectionOverridesModel
    )


def list_renderer_profiles(directory: Path) -> list[str]:
    """List available renderer profile names.

    Returns:
        Sorted profile names (without .yaml extension).
    """
    if not directory.exists():
        return []

    return sorted(
        p.stem
        for p in directory.glob("*.yaml")
        if p.is_file() and not p.name.startswith(".")
    )


def load_renderer_profile(name: str, directory: Path) -> RendererProfile:
    """Load a renderer profile by name.

    Args:
        name: Renderer name (file name without .yaml extension).
        directory: Directory holding renderer profiles.

    Raises:
        RendererProfileNotFoundError: If the profile doesn't exist.
        RendererProfileError: If the profile is invalid.
    """
    if not _PROFILE_NAME_PATTERN.match(name):
        raise RendererProfileError(f"Invalid renderer profile name: {name!r}")

    profile_path = directory / f"{name}.yaml"
    if not profile_path.exists():
        raise RendererProfileNotFoundError(f"Renderer profile not found: {name}")

    try:
        with open(profile_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise RendererProfileError(
            f"Invalid YAML in renderer profile {name}: {e}"
        ) from e

    if not isinstance(data, dict):
        raise RendererProfileError(
            f"Renderer profile {name} must be a mapping, got {type(data).__name__}"
        )

    try:
        model = _RendererProfileModel.model_validate(data)
    except ValidationError as e:
        raise RendererProfileError(
            f"Invalid renderer profile {name}: {e}"
        ) from e

    return RendererProfile(
        name=model.name or name,
        description=model.description,
        languages=model.languages,
        selection_overrides=model.selection.model_dump(exclude_none=True),
    )


def merge_renderer_with_config(
    profile: RendererProfile, selection: SelectionConfig
) -> SelectionConfig:
    """Apply a renderer profile's overrides to a base selection config.

    Returns:
        New SelectionConfig; the base is left unchanged.
    """
    return replace(selection, **profile.selection_overrides)


class ProfileConfigProvider:
    """Resolves device-specific configuration from renderer profiles.

    Serves both the configuration snapshot and the preferred language list of
    a renderer. Profiles are re-read on every call so edits take effect on the
    next resolution. Renderers without a profile use the base configuration.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    @property
    def base_config(self) -> AppConfig:
        return self._config

    def _profile_for(self, renderer: str | None) -> RendererProfile | None:
        if renderer is None or self._config.renderers_dir is None:
            return None
        if not _PROFILE_NAME_PATTERN.match(renderer):
            logger.debug("Renderer %r cannot have a profile, using defaults", renderer)
            return None
        try:
            return load_renderer_profile(renderer, self._config.renderers_dir)
        except RendererProfileNotFoundError:
            logger.debug("No profile for renderer %r, using defaults", renderer)
            return None

    def config_for(self, renderer: str | None) -> SelectionConfig:
        """Return the selection configuration for a renderer."""
        profile = self._profile_for(renderer)
        if profile is None:
            return self._config.selection
        return merge_renderer_with_config(profile, self._config.selection)

    def languages_for(self, renderer: str | None) -> str:
        """Return the renderer's comma-delimited preferred language list."""
        profile = self._profile_for(renderer)
        if profile is not None and profile.languages is not None:
            return profile.languages
        return self._config.renderer.languages
