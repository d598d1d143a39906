"""Pure parsing functions for ffprobe JSON output.

These functions turn the document printed by
``ffprobe -print_format json -show_streams`` into a MediaItem. No ffprobe
process is launched here; the caller supplies the JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any

from trackselect.domain import AudioTrack, MediaItem, SubtitleTrack
from trackselect.language import normalize_language

logger = logging.getLogger(__name__)

# codec_name values ffprobe reports for DTS and its extensions
DTS_CODECS = frozenset({"dts", "dca", "dtshd"})


class MediaParseError(Exception):
    """An ffprobe document could not be turned into a MediaItem."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.reason = message
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


def sanitize_string(value: str | None) -> str | None:
    """Replace invalid UTF-8 characters in a tag value."""
    if value is None:
        return None
    return value.encode("utf-8", errors="replace").decode("utf-8")


def _positive_int(value: Any, field_name: str, file_path: str | None) -> int | None:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        logger.warning(
            "Ignoring invalid %s %r in %s", field_name, value, file_path or "unknown"
        )
        return None
    return value


def _media_path(data: dict) -> Path | None:
    """Path of the probed media file, from the format section."""
    fmt = data.get("format")
    if not isinstance(fmt, dict):
        return None
    filename = fmt.get("filename")
    if not isinstance(filename, str) or not filename:
        return None
    return Path(filename)


def parse_audio_stream(
    stream: dict, ordinal: int, file_path: str | None = None
) -> AudioTrack:
    """Parse one ffprobe audio stream.

    Args:
        stream: Stream dictionary from ffprobe JSON.
        ordinal: Position among the item's audio streams; used as id and index.
        file_path: Optional file path for context in warning messages.
    """
    tags = stream.get("tags") or {}
    codec = stream.get("codec_name")
    return AudioTrack(
        id=ordinal,
        language=normalize_language(tags.get("language")),
        is_dts=(codec or "").casefold() in DTS_CODECS,
        index=ordinal,
        codec=codec,
        channels=_positive_int(stream.get("channels"), "channels", file_path),
        title=sanitize_string(tags.get("title")),
    )


def parse_subtitle_stream(stream: dict, ordinal: int) -> SubtitleTrack:
    """Parse one ffprobe subtitle stream into an internal SubtitleTrack."""
    tags = stream.get("tags") or {}
    disposition = stream.get("disposition") or {}
    return SubtitleTrack(
        id=ordinal,
        language=normalize_language(tags.get("language")),
        is_external=False,
        title=sanitize_string(tags.get("title")),
        index=ordinal,
        codec=stream.get("codec_name"),
        is_forced=disposition.get("forced", 0) == 1,
    )


def parse_ffprobe_output(data: Any, path: Path | None = None) -> MediaItem:
    """Parse ffprobe JSON output into a MediaItem.

    Streams other than audio and subtitle are ignored, as are streams
    repeating an index already seen.

    Args:
        data: Parsed ffprobe JSON output.
        path: Path of the media file. Defaults to format.filename from
            the document, when ffprobe was run with -show_format.

    Returns:
        MediaItem with tracks in stream order.

    Raises:
        MediaParseError: If data is not an ffprobe document.
    """
    if not isinstance(data, dict):
        raise MediaParseError("ffprobe output must be a JSON object", path)
    if path is None:
        path = _media_path(data)
    streams = data.get("streams", [])
    if not isinstance(streams, list):
        raise MediaParseError("'streams' must be a list", path)

    file_path = str(path) if path is not None else "ffprobe output"
    audio_tracks: list[AudioTrack] = []
    subtitle_tracks: list[SubtitleTrack] = []
    seen_indices: set[int] = set()

    for stream in streams:
        if not isinstance(stream, dict):
            logger.warning("Skipping malformed stream entry in %s", file_path)
            continue
        index = _positive_int(stream.get("index"), "stream index", file_path)
        if index is not None:
            if index in seen_indices:
                logger.warning(
                    "Duplicate stream index %s in %s, skipping", index, file_path
                )
                continue
            seen_indices.add(index)

        codec_type = stream.get("codec_type")
        if codec_type == "audio":
            audio_tracks.append(
                parse_audio_stream(stream, len(audio_tracks), file_path)
            )
        elif codec_type == "subtitle":
            subtitle_tracks.append(parse_subtitle_stream(stream, len(subtitle_tracks)))

    logger.debug(
        "Parsed %d audio and %d subtitle tracks from %s",
        len(audio_tracks),
        len(subtitle_tracks),
        file_path,
    )
    return MediaItem(
        audio_tracks=audio_tracks,
        subtitle_tracks=subtitle_tracks,
        path=path,
    )


def load_media_file(path: Path) -> MediaItem:
    """Read a saved ffprobe JSON document and parse it.

    The media path comes from the document, not from path, which is only
    the location of the JSON file.

    Raises:
        MediaParseError: If the file cannot be read or is not an ffprobe
            document. The message names the JSON file.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise MediaParseError(f"cannot read file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise MediaParseError(f"invalid JSON: {e}", path) from e
    try:
        return parse_ffprobe_output(data)
    except MediaParseError as e:
        raise MediaParseError(e.reason, path) from e
