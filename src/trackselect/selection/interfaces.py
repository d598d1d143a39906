"""Interfaces of the collaborators the selection engine consumes.

The host system supplies these. Default implementations live in
trackselect.selection.discovery and trackselect.config.profiles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from trackselect.config.models import SelectionConfig
from trackselect.domain import MediaItem


@runtime_checkable
class SubtitleDiscovery(Protocol):
    """Finds external subtitles for a media item.

    Implementations may append external SubtitleTracks to
    media.subtitle_tracks, fill in metadata, and must set
    media.external_subs_probed once discovery has run. The call may block
    on disk or network I/O; failures propagate to the caller.
    """

    def discover(
        self, file_ref: Path | str | None, media: MediaItem, force_refresh: bool
    ) -> None:
        """Look for external subtitles of the item at file_ref."""
        ...


@runtime_checkable
class RendererLanguageSource(Protocol):
    """Supplies a renderer's preferred subtitle languages."""

    def languages_for(self, renderer: str | None) -> str:
        """Return a comma-delimited, most-preferred-first language list."""
        ...


@runtime_checkable
class ConfigProvider(Protocol):
    """Resolves the (possibly device-specific) selection configuration."""

    def config_for(self, renderer: str | None) -> SelectionConfig:
        """Return the configuration snapshot to use for renderer."""
        ...
