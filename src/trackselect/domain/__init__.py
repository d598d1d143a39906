"""Domain models for Track Select.

Usage:
    from trackselect.domain import AudioTrack, SubtitleTrack, MediaItem
"""

from .models import (
    NO_SUBTITLES_ID,
    SUBTITLES_OFF,
    WILDCARD,
    AudioTrack,
    MediaItem,
    OutputParams,
    SelectionResult,
    SubtitleTrack,
)

__all__ = [
    # Models
    "AudioTrack",
    "SubtitleTrack",
    "MediaItem",
    "SelectionResult",
    "OutputParams",
    # Sentinels
    "NO_SUBTITLES_ID",
    "SUBTITLES_OFF",
    "WILDCARD",
]
