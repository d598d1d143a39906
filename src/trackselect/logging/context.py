"""Selection context for structured logging.

Carries the file and renderer being resolved in contextvars, so every log
record emitted during a resolution can be tagged with them.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_file_ref: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "file_ref", default=None
)
_renderer: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "renderer", default=None
)


def set_selection_context(
    file_ref: Path | str | None, renderer: str | None = None
) -> None:
    """Set the current selection context."""
    _file_ref.set(str(file_ref) if file_ref is not None else None)
    _renderer.set(renderer)


def clear_selection_context() -> None:
    """Clear the current selection context."""
    _file_ref.set(None)
    _renderer.set(None)


@contextmanager
def selection_context(
    file_ref: Path | str | None, renderer: str | None = None
) -> Generator[None, None, None]:
    """Context manager for one track selection.

    Sets the context on entry and restores the previous one on exit, so
    nested selections do not clobber each other.

    Example:
        with selection_context("/media/film.mkv", "living-room-tv"):
            logger.debug("Resolving")  # record carries file_ref and renderer
    """
    old_file_ref = _file_ref.get()
    old_renderer = _renderer.get()
    try:
        set_selection_context(file_ref, renderer)
        yield
    finally:
        _file_ref.set(old_file_ref)
        _renderer.set(old_renderer)


def get_selection_context() -> tuple[str | None, str | None]:
    """Get the current selection context.

    Returns:
        Tuple of (file_ref, renderer), either may be None.
    """
    return _file_ref.get(), _renderer.get()


class SelectionContextFilter(logging.Filter):
    """Logging filter that injects the selection context into log records.

    Adds file_ref and renderer attributes, plus a compact selection_tag
    such as "[film.mkv@tv] " for the text format.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        file_ref, renderer = get_selection_context()

        record.file_ref = file_ref
        record.renderer = renderer

        if file_ref:
            name = Path(file_ref).name or file_ref
            if renderer:
                record.selection_tag = f"[{name}@{renderer}] "
            else:
                record.selection_tag = f"[{name}] "
        else:
            record.selection_tag = ""

        return True
