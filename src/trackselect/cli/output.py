"""CLI output helpers shared by all commands."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from typing import Any, NoReturn

import click

from trackselect.cli.exit_codes import ExitCode
from trackselect.domain import AudioTrack, SubtitleTrack


def error_exit(
    message: str,
    code: ExitCode | int,
    json_output: bool = False,
) -> NoReturn:
    """Exit with formatted error message.

    Args:
        message: Error message to display.
        code: Exit code to use (ExitCode enum or int).
        json_output: Whether to format output as JSON.
    """
    if isinstance(code, ExitCode):
        code_name = code.name
        exit_value = int(code)
    else:
        code_name = "UNKNOWN_ERROR"
        exit_value = code

    if json_output:
        click.echo(
            json.dumps(
                {
                    "status": "failed",
                    "error": {
                        "code": code_name,
                        "message": message,
                    },
                }
            ),
            err=True,
        )
    else:
        click.echo(f"Error: {message}", err=True)

    sys.exit(exit_value)


def track_to_dict(track: AudioTrack | SubtitleTrack | None) -> dict[str, Any] | None:
    """Convert a track to a JSON-serializable dict."""
    if track is None:
        return None
    data = asdict(track)
    if data.get("external_file") is not None:
        data["external_file"] = str(data["external_file"])
    return data


def describe_audio(track: AudioTrack | None) -> str:
    """One-line human description of an audio track."""
    if track is None:
        return "none"
    details = [track.codec or "unknown codec"]
    if track.channels:
        details.append(f"{track.channels}ch")
    if track.is_dts:
        details.append("DTS")
    text = f"#{track.id} {track.language or 'und'} ({', '.join(details)})"
    if track.title:
        text += f' "{track.title}"'
    return text


def describe_subtitle(track: SubtitleTrack | None) -> str:
    """One-line human description of a subtitle track."""
    if track is None:
        return "none"
    kind = "external" if track.is_external else "internal"
    text = f"#{track.id} {track.language or 'und'} ({kind}"
    if track.is_forced:
        text += ", forced"
    text += ")"
    if track.title:
        text += f' "{track.title}"'
    if track.external_file is not None:
        text += f" {track.external_file}"
    return text
