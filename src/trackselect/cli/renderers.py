"""CLI commands for renderer profiles."""

import json

import click

from trackselect.cli.exit_codes import ExitCode
from trackselect.cli.output import error_exit
from trackselect.config import (
    AppConfig,
    RendererProfileError,
    RendererProfileNotFoundError,
    list_renderer_profiles,
    load_renderer_profile,
    merge_renderer_with_config,
)


@click.group("renderers")
def renderers_group() -> None:
    """Inspect renderer (device) profiles.

    Profiles are YAML files in ~/.trackselect/renderers/ named after the
    renderer they configure.
    """


@renderers_group.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def list_renderers_cmd(ctx: click.Context, json_output: bool) -> None:
    """List available renderer profiles."""
    config: AppConfig = ctx.obj["config"]
    directory = config.renderers_dir
    names = list_renderer_profiles(directory) if directory is not None else []

    rows = []
    for name in names:
        try:
            profile = load_renderer_profile(name, directory)
            rows.append(
                {
                    "name": profile.name,
                    "description": profile.description,
                    "languages": profile.languages,
                    "error": None,
                }
            )
        except RendererProfileError as e:
            rows.append(
                {"name": name, "description": None, "languages": None, "error": str(e)}
            )

    if json_output:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        click.echo(f"No renderer profiles found in {directory}")
        return

    click.echo(f"{'NAME':<20} {'LANGUAGES':<15} {'DESCRIPTION':<40}")
    click.echo("-" * 77)
    for row in rows:
        if row["error"]:
            desc = f"(error: {row['error']})"
        else:
            desc = row["description"] or "-"
        click.echo(f"{row['name']:<20} {row['languages'] or '-':<15} {desc[:40]:<40}")


@renderers_group.command("show")
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format.")
@click.pass_context
def show_renderer_cmd(ctx: click.Context, name: str, json_output: bool) -> None:
    """Show a renderer profile and the selection settings it results in."""
    config: AppConfig = ctx.obj["config"]
    if config.renderers_dir is None:
        error_exit(
            f"Renderer profile not found: {name}",
            ExitCode.PROFILE_NOT_FOUND,
            json_output,
        )

    try:
        profile = load_renderer_profile(name, config.renderers_dir)
    except RendererProfileNotFoundError as e:
        error_exit(str(e), ExitCode.PROFILE_NOT_FOUND, json_output)
    except RendererProfileError as e:
        error_exit(str(e), ExitCode.PROFILE_INVALID, json_output)

    effective = merge_renderer_with_config(profile, config.selection)
    languages = profile.languages or config.renderer.languages

    if json_output:
        click.echo(
            json.dumps(
                {
                    "name": profile.name,
                    "description": profile.description,
                    "languages": languages,
                    "overrides": profile.selection_overrides,
                    "selection": effective.to_dict(),
                },
                indent=2,
            )
        )
        return

    click.echo(f"Renderer:    {profile.name}")
    if profile.description:
        click.echo(f"Description: {profile.description}")
    click.echo(f"Languages:   {languages}")
    click.echo("")
    click.echo("Selection settings:")
    for key, value in effective.to_dict().items():
        marker = " (profile)" if key in profile.selection_overrides else ""
        click.echo(f"  {key}: {value}{marker}")
