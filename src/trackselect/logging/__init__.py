"""Structured logging module for Track Select.

Provides configurable logging with JSON format support and file rotation,
and tags records with the file and renderer being resolved.
"""

from trackselect.logging.config import configure_logging
from trackselect.logging.context import (
    SelectionContextFilter,
    clear_selection_context,
    get_selection_context,
    selection_context,
    set_selection_context,
)
from trackselect.logging.handlers import JSONFormatter, TextFormatter

__all__ = [
    "JSONFormatter",
    "SelectionContextFilter",
    "TextFormatter",
    "clear_selection_context",
    "configure_logging",
    "get_selection_context",
    "selection_context",
    "set_selection_context",
]
