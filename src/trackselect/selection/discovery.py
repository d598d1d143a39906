"""Default external-subtitle discovery collaborators.

Scanning disks or downloading subtitles is the host's job. The classes here
cover the plumbing around it: a discovery that finds nothing, one that
registers subtitles the host already knows about, and a wrapper that keeps
concurrent resolutions from probing the same item twice.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from trackselect.domain import MediaItem
from trackselect.selection.interfaces import SubtitleDiscovery

logger = logging.getLogger(__name__)


class NullSubtitleDiscovery:
    """Discovery that finds nothing and only marks the item as probed."""

    def discover(
        self, file_ref: Path | str | None, media: MediaItem, force_refresh: bool
    ) -> None:
        media.external_subs_probed = True


@dataclass(frozen=True)
class KnownSubtitle:
    """An external subtitle file supplied by the host."""

    path: Path
    language: str | None = None
    title: str | None = None


class ListedSubtitleDiscovery:
    """Registers a fixed list of external subtitle files on the media item.

    Files already registered (by path) are not added again, so a forced
    refresh does not duplicate tracks.
    """

    def __init__(self, subtitles: Sequence[KnownSubtitle]) -> None:
        self._subtitles = tuple(subtitles)

    def discover(
        self, file_ref: Path | str | None, media: MediaItem, force_refresh: bool
    ) -> None:
        known = {t.external_file for t in media.external_subtitles()}
        for sub in self._subtitles:
            if sub.path in known:
                continue
            track = media.add_external_subtitle(
                language=sub.language,
                external_file=sub.path,
                title=sub.title,
                codec=sub.path.suffix.lstrip(".").lower() or None,
            )
            logger.debug("Registered external subtitles: %s", track)
        media.external_subs_probed = True


class SerializedDiscovery:
    """Serializes discovery per media item.

    Wraps another discovery collaborator. Calls for the same item run one at
    a time, and a call that waited on the lock re-checks the probed flag so
    the item is not probed twice unless a refresh was forced.
    """

    def __init__(self, inner: SubtitleDiscovery) -> None:
        self._inner = inner
        self._locks: weakref.WeakKeyDictionary[MediaItem, threading.Lock] = (
            weakref.WeakKeyDictionary()
        )
        self._guard = threading.Lock()

    def _lock_for(self, media: MediaItem) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(media, threading.Lock())

    def discover(
        self, file_ref: Path | str | None, media: MediaItem, force_refresh: bool
    ) -> None:
        with self._lock_for(media):
            if media.external_subs_probed and not force_refresh:
                logger.debug("External subtitles already probed for %s", file_ref)
                return
            self._inner.discover(file_ref, media, force_refresh)
