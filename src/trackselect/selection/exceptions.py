"""Exceptions for track selection."""

from __future__ import annotations

from trackselect.domain import SelectionResult, SubtitleTrack


class SelectionError(Exception):
    """Base class for track selection errors."""


class SelectionInvariantError(SelectionError):
    """A selection would hand the "off" sentinel track to playback.

    This is a logic defect in a resolver or mutator, never a normal outcome.
    """

    def __init__(self, track: SubtitleTrack) -> None:
        self.track = track
        super().__init__(
            f"Subtitle track {track.id} has language 'off' and cannot be selected"
        )


def ensure_playable(result: SelectionResult) -> SelectionResult:
    """Return result unchanged, or raise if its subtitle is the "off" sentinel.

    Raises:
        SelectionInvariantError: If result.subtitle has language "off".
    """
    if result.subtitle is not None and result.subtitle.is_off:
        raise SelectionInvariantError(result.subtitle)
    return result
