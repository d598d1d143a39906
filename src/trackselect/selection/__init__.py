"""Track selection engine.

resolve_audio and resolve_subtitle are pure functions of a media item and
a configuration snapshot. TrackSelector and apply_selection wire them to
the host's collaborators and fill in a playback request.
"""

from trackselect.selection.audio import resolve_audio
from trackselect.selection.discovery import (
    KnownSubtitle,
    ListedSubtitleDiscovery,
    NullSubtitleDiscovery,
    SerializedDiscovery,
)
from trackselect.selection.exceptions import (
    SelectionError,
    SelectionInvariantError,
    ensure_playable,
)
from trackselect.selection.facade import (
    StaticConfigProvider,
    TrackSelector,
    apply_selection,
)
from trackselect.selection.interfaces import (
    ConfigProvider,
    RendererLanguageSource,
    SubtitleDiscovery,
)
from trackselect.selection.subtitles import SubtitleState, resolve_subtitle

__all__ = [
    # Resolvers
    "SubtitleState",
    "resolve_audio",
    "resolve_subtitle",
    # Facade
    "StaticConfigProvider",
    "TrackSelector",
    "apply_selection",
    # Collaborators
    "ConfigProvider",
    "KnownSubtitle",
    "ListedSubtitleDiscovery",
    "NullSubtitleDiscovery",
    "RendererLanguageSource",
    "SerializedDiscovery",
    "SubtitleDiscovery",
    # Errors
    "SelectionError",
    "SelectionInvariantError",
    "ensure_playable",
]
