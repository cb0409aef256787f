"""Root CLI group for vaultplans with global flags and command registration."""

from __future__ import annotations

import click

from vaultplans import __version__
from vaultplans.commands import register_commands
from vaultplans.commands._context import AppContext
from vaultplans.config.settings import PlanSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="vaultplans")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output and debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-u",
    "--api-url",
    envvar="OBSIDIAN_API_URL",
    default=None,
    help="Obsidian Local REST API URL (env: OBSIDIAN_API_URL).",
)
@click.option(
    "-k",
    "--api-key",
    envvar="OBSIDIAN_API_KEY",
    default=None,
    help="Obsidian Local REST API key (env: OBSIDIAN_API_KEY).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    api_url: str | None,
    api_key: str | None,
) -> None:
    """vaultplans — technical plan lifecycle for Obsidian vaults."""
    settings = PlanSettings.from_cli(
        config_path=config_path,
        api_url=api_url,
        api_key=api_key,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
