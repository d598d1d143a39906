"""CLI commands for the effective configuration."""

import json

import click

from trackselect.cli.exit_codes import ExitCode
from trackselect.cli.output import error_exit
from trackselect.config import AppConfig, ProfileConfigProvider, RendererProfileError


@click.group("config")
def config_group() -> None:
    """Inspect the effective configuration."""


@config_group.command("show")
@click.option(
    "--renderer",
    default=None,
    help="Show the settings as merged with this renderer's profile.",
)
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def show_config_cmd(ctx: click.Context, renderer: str | None, json_output: bool) -> None:
    """Show the selection settings after all configuration layers."""
    config: AppConfig = ctx.obj["config"]
    provider = ProfileConfigProvider(config)
    try:
        selection = provider.config_for(renderer)
        languages = provider.languages_for(renderer)
    except RendererProfileError as e:
        error_exit(str(e), ExitCode.PROFILE_INVALID, json_output)

    if json_output:
        click.echo(
            json.dumps(
                {
                    "selection": selection.to_dict(),
                    "renderer": {"name": renderer, "languages": languages},
                    "renderers_dir": str(config.renderers_dir)
                    if config.renderers_dir
                    else None,
                    "logging": {
                        "level": config.logging.level,
                        "format": config.logging.format,
                        "file": str(config.logging.file)
                        if config.logging.file
                        else None,
                    },
                },
                indent=2,
            )
        )
        return

    click.echo("[selection]")
    for key, value in selection.to_dict().items():
        click.echo(f"{key} = {value!r}")
    click.echo("")
    click.echo("[renderer]")
    if renderer:
        click.echo(f"name = {renderer!r}")
    click.echo(f"languages = {languages!r}")
    click.echo(f"profiles_dir = {str(config.renderers_dir)!r}")
    click.echo("")
    click.echo("[logging]")
    click.echo(f"level = {config.logging.level!r}")
    click.echo(f"format = {config.logging.format!r}")
    click.echo(f"file = {str(config.logging.file) if config.logging.file else None!r}")
