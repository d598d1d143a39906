"""CLI command for resolving the tracks of a media file."""

import json
import logging
from pathlib import Path

import click

from trackselect.cli.exit_codes import ExitCode
from trackselect.cli.output import (
    describe_audio,
    describe_subtitle,
    error_exit,
    track_to_dict,
)
from trackselect.config import (
    AppConfig,
    ProfileConfigProvider,
    RendererProfileError,
)
from trackselect.domain import AudioTrack, MediaItem, OutputParams
from trackselect.introspector import MediaParseError, load_media_file
from trackselect.language import match_language_code
from trackselect.plugin import MutatorRegistry, load_entry_point_mutators
from trackselect.selection import (
    KnownSubtitle,
    ListedSubtitleDiscovery,
    SelectionError,
    TrackSelector,
)

logger = logging.getLogger(__name__)


def parse_external(value: str) -> KnownSubtitle:
    """Parse a PATH[:LANG] external subtitle option.

    The language is taken after the last colon; without one the subtitle
    has no language. The file name doubles as the track title so forced
    tags in names like "film.forced.srt" are recognized.
    """
    path_text, sep, language = value.rpartition(":")
    if not sep or not path_text:
        path_text, language = value, ""
    path = Path(path_text)
    return KnownSubtitle(path=path, language=language or None, title=path.name)


def _preassigned_audio(media: MediaItem, language: str) -> AudioTrack | None:
    return next(
        (a for a in media.audio_tracks if match_language_code(a.language, language)),
        None,
    )


@click.command("resolve")
@click.argument(
    "media_json",
    type=click.Path(path_type=Path, dir_okay=False),
)
@click.option("--renderer", default=None, help="Renderer (device) name.")
@click.option(
    "--media-path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Media file the document describes (default: format.filename in it).",
)
@click.option(
    "--audio-language",
    default=None,
    help="Play the first audio track in this language instead of resolving one.",
)
@click.option(
    "--external",
    "externals",
    multiple=True,
    metavar="PATH:LANG",
    help="External subtitle file and its language. Repeatable.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.pass_context
def resolve_command(
    ctx: click.Context,
    media_json: Path,
    renderer: str | None,
    media_path: Path | None,
    audio_language: str | None,
    externals: tuple[str, ...],
    output_format: str,
) -> None:
    """Resolve the audio and subtitle tracks of MEDIA_JSON.

    MEDIA_JSON is the output of
    ffprobe -print_format json -show_format -show_streams saved to a file.
    The media file it describes is taken from its format section unless
    --media-path is given.

    Examples:

        trackselect resolve film.json

        trackselect resolve film.json --media-path /media/film.mkv

        trackselect resolve film.json --renderer living-room-tv

        trackselect resolve film.json --external film.en.srt:eng --format json
    """
    json_output = output_format.casefold() == "json"
    config: AppConfig = ctx.obj["config"]

    if not media_json.exists():
        error_exit(f"File not found: {media_json}", ExitCode.TARGET_NOT_FOUND, json_output)

    try:
        media = load_media_file(media_json)
    except MediaParseError as e:
        error_exit(str(e), ExitCode.PARSE_ERROR, json_output)

    file_ref = media_path or media.path
    if file_ref is None:
        logger.debug("No media path known for %s", media_json)

    params = OutputParams(renderer=renderer)
    if audio_language is not None:
        params.audio = _preassigned_audio(media, audio_language)
        if params.audio is None:
            error_exit(
                f"No audio track with language {audio_language!r}",
                ExitCode.NO_TRACKS_FOUND,
                json_output,
            )

    mutators = MutatorRegistry()
    load_entry_point_mutators(mutators)

    selector = TrackSelector(
        config_provider=ProfileConfigProvider(config),
        discovery=ListedSubtitleDiscovery([parse_external(e) for e in externals]),
        mutators=mutators,
    )
    try:
        selector.apply_selection(file_ref, media, params)
    except RendererProfileError as e:
        error_exit(str(e), ExitCode.PROFILE_INVALID, json_output)
    except SelectionError as e:
        error_exit(str(e), ExitCode.GENERAL_ERROR, json_output)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "file": str(media_json),
                    "media": str(file_ref) if file_ref is not None else None,
                    "renderer": renderer,
                    "audio": track_to_dict(params.audio),
                    "subtitle": track_to_dict(params.subtitle),
                },
                indent=2,
            )
        )
        return

    click.echo(f"File:      {media_json}")
    if file_ref is not None:
        click.echo(f"Media:     {file_ref}")
    if renderer:
        click.echo(f"Renderer:  {renderer}")
    click.echo(f"Audio:     {describe_audio(params.audio)}")
    click.echo(f"Subtitles: {describe_subtitle(params.subtitle)}")
