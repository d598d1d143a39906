"""Context handed to selection mutators."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from trackselect.config.models import SelectionConfig
from trackselect.domain import MediaItem


@dataclass(frozen=True)
class SelectionContext:
    """What a mutator may inspect about the selection being made.

    Attributes:
        file_ref: Location of the media as given by the host.
        media: The media item tracks were chosen from.
        renderer: Renderer (device) name, or None.
        config: Selection configuration used for this renderer.
    """

    file_ref: Path | str | None
    media: MediaItem | None
    renderer: str | None
    config: SelectionConfig
