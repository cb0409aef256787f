"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the gateway and lifecycle manager lazily (so
``--help`` never touches the network) and routes results to stdout/stderr
with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from vaultplans.config.logging import configure_logging
from vaultplans.infrastructure.rest import create_gateway
from vaultplans.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from vaultplans.config.settings import PlanSettings
    from vaultplans.services.lifecycle import LifecycleManager
    from vaultplans.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PlanSettings) -> None:
        self.settings = settings
        self._manager: LifecycleManager | None = None
        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def manager(self) -> LifecycleManager:
        """The lifecycle manager (created on first access)."""
        if self._manager is None:
            from vaultplans.services.lifecycle import LifecycleManager

            self._manager = LifecycleManager(
                create_gateway(self.settings),
                folders=self.settings.plans.folders(),
            )
        return self._manager

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult.

        * Success: stdout; warnings go to stderr (JSON mode already
          carries them in the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
