"""Subcommand modules for vaultplans.

Provides register_commands() which uses deferred imports to keep
``vaultplans --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from vaultplans.commands.archive import archive
    from vaultplans.commands.create import create
    from vaultplans.commands.file_cmd import file_cmd
    from vaultplans.commands.init_cmd import init_cmd
    from vaultplans.commands.list_cmd import list_cmd
    from vaultplans.commands.move import move
    from vaultplans.commands.ping import ping
    from vaultplans.commands.review import review
    from vaultplans.commands.serve import serve
    from vaultplans.commands.show import show
    from vaultplans.commands.sweep import sweep

    # Lifecycle
    cli.add_command(init_cmd)
    cli.add_command(create)
    cli.add_command(review)
    cli.add_command(archive)
    cli.add_command(move)
    cli.add_command(sweep)

    # Queries
    cli.add_command(list_cmd)
    cli.add_command(show)

    # Vault
    cli.add_command(file_cmd)
    cli.add_command(ping)
    cli.add_command(serve)
