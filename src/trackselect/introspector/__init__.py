"""Media introspection from ffprobe JSON documents."""

from trackselect.introspector.parsers import (
    DTS_CODECS,
    MediaParseError,
    load_media_file,
    parse_audio_stream,
    parse_ffprobe_output,
    parse_subtitle_stream,
)

__all__ = [
    "DTS_CODECS",
    "MediaParseError",
    "load_media_file",
    "parse_audio_stream",
    "parse_ffprobe_output",
    "parse_subtitle_stream",
]
