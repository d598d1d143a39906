"""CLI module for Track Select."""

import logging
from pathlib import Path

import click

from trackselect.cli.exit_codes import ExitCode
from trackselect.cli.output import error_exit
from trackselect.config import AppConfig, ConfigError, ConfigSource, get_config
from trackselect.logging import configure_logging

_logging_configured: bool = False

logger = logging.getLogger(__name__)


def _configure_logging(config: AppConfig) -> None:
    """Configure logging once per process."""
    global _logging_configured
    if _logging_configured:
        return
    configure_logging(config.logging)
    _logging_configured = True


@click.group()
@click.version_option(package_name="track-select")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file to use instead of ~/.trackselect/config.toml.",
)
@click.pass_context
def main(
    ctx: click.Context,
    log_level: str | None,
    log_json: bool,
    config_path: Path | None,
) -> None:
    """Track Select - choose audio and subtitle tracks for playback."""
    ctx.ensure_object(dict)

    # Preserve a config passed in by tests
    if "config" not in ctx.obj:
        cli_source = ConfigSource(
            logging_level=log_level,
            logging_format="json" if log_json else None,
        )
        try:
            ctx.obj["config"] = get_config(
                config_path=config_path, cli_source=cli_source
            )
        except ConfigError as e:
            error_exit(str(e), ExitCode.CONFIG_ERROR)

    _configure_logging(ctx.obj["config"])
    logger.debug("Renderer profiles directory: %s", ctx.obj["config"].renderers_dir)


def _register_commands():
    from trackselect.cli.config import config_group
    from trackselect.cli.renderers import renderers_group
    from trackselect.cli.resolve import resolve_command

    main.add_command(config_group)
    main.add_command(renderers_group)
    main.add_command(resolve_command)


_register_commands()
