"""Log formatters for Track Select.

Both formatters expect records to have passed SelectionContextFilter, which
adds the file and renderer being resolved; records that did not are
formatted without them.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

TEXT_FORMAT = "%(asctime)s - %(selection_tag)s%(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Attributes every LogRecord carries, plus those added while formatting and
# by SelectionContextFilter. Anything else came from `extra=`.
_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "file_ref", "renderer", "selection_tag"}


class TextFormatter(logging.Formatter):
    """One line per record, tagged with the selection being made.

    Example:
        2024-05-01T20:15:02+0000 - [film.mkv@tv] trackselect.selection.audio
        - DEBUG - Matched audio track: ...
    """

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "selection_tag"):
            record.selection_tag = ""
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: timestamp (ISO-8601 UTC), level, logger, message, then file and
    renderer when a selection is in progress, extra for values passed with
    `extra=`, and exception when the record carries one.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        file_ref = getattr(record, "file_ref", None)
        if file_ref:
            entry["file"] = file_ref
        renderer = getattr(record, "renderer", None)
        if renderer:
            entry["renderer"] = renderer

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
