"""Domain models for Track Select.

This module contains the stream metadata the selection engine consumes and
the records it produces. Track models are produced by upstream demuxing
(or the ffprobe parser in trackselect.introspector) and are never mutated
by the engine.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

# Subtitle id meaning "the caller explicitly wants no subtitles"
NO_SUBTITLES_ID = -1

# Subtitle language sentinel; never a terminal selection
SUBTITLES_OFF = "off"

# Wildcard language token used in preference pairs
WILDCARD = "*"


@dataclass(frozen=True)
class AudioTrack:
    """An audio stream of a media item."""

    id: int
    language: str | None = None
    is_dts: bool = False
    # Position in the media's audio track list (original order)
    index: int = 0
    codec: str | None = None
    channels: int | None = None
    title: str | None = None


@dataclass(frozen=True)
class SubtitleTrack:
    """A subtitle stream, either muxed in the container or external."""

    id: int
    language: str | None = None
    is_external: bool = False
    # Human title from container metadata, used for forced-tag matching
    title: str | None = None
    index: int = 0
    codec: str | None = None
    external_file: Path | None = None
    is_forced: bool = False
    # Streaming subtitle fetched on demand by the host
    requires_live_fetch: bool = False

    @property
    def is_off(self) -> bool:
        """True if this track carries the "off" language sentinel."""
        return self.language == SUBTITLES_OFF

    @property
    def is_no_subtitles_marker(self) -> bool:
        """True if this is the explicit "no subtitles wanted" sentinel."""
        return self.id == NO_SUBTITLES_ID


@dataclass(eq=False)
class MediaItem:
    """Decoded stream metadata for one playable item.

    The only state the engine allows to change is external_subs_probed,
    set by the external subtitle-discovery collaborator. Items compare and
    hash by identity.
    """

    audio_tracks: list[AudioTrack] = field(default_factory=list)
    subtitle_tracks: list[SubtitleTrack] = field(default_factory=list)
    external_subs_probed: bool = False
    path: Path | None = None

    @property
    def first_audio_track(self) -> AudioTrack | None:
        """Return the first audio track in original order, or None."""
        return self.audio_tracks[0] if self.audio_tracks else None

    @property
    def has_subtitles(self) -> bool:
        """Return True if any subtitle track is known."""
        return bool(self.subtitle_tracks)

    def external_subtitles(self) -> Iterator[SubtitleTrack]:
        """Yield external subtitle tracks in original order."""
        return (t for t in self.subtitle_tracks if t.is_external)

    def add_external_subtitle(
        self,
        language: str | None,
        external_file: Path | None = None,
        title: str | None = None,
        codec: str | None = None,
    ) -> SubtitleTrack:
        """Append a discovered external subtitle track.

        Ids and indices continue after the existing subtitle tracks so the
        original order of previously known tracks is preserved.

        Returns:
            The newly added SubtitleTrack.
        """
        next_id = max((t.id for t in self.subtitle_tracks), default=-1) + 1
        track = SubtitleTrack(
            id=next_id,
            language=language,
            is_external=True,
            title=title,
            index=len(self.subtitle_tracks),
            codec=codec,
            external_file=external_file,
        )
        self.subtitle_tracks.append(track)
        return track


@dataclass(frozen=True)
class SelectionResult:
    """The audio and subtitle tracks chosen for playback."""

    audio: AudioTrack | None = None
    subtitle: SubtitleTrack | None = None


@dataclass
class OutputParams:
    """Playback parameters shared with the host.

    audio and subtitle may be pre-assigned by the caller; apply_selection
    fills in whatever is missing.
    """

    audio: AudioTrack | None = None
    subtitle: SubtitleTrack | None = None
    # Renderer (device) name used to look up device-specific configuration
    renderer: str | None = None

    def as_result(self) -> SelectionResult:
        """Snapshot the current assignment as a SelectionResult."""
        return SelectionResult(audio=self.audio, subtitle=self.subtitle)
