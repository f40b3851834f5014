"""Subcommand modules for xrdctl.

Provides register_commands() which uses deferred imports to keep
``xrdctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from xrdctl.commands.convert import convert
    from xrdctl.commands.inspect import inspect
    from xrdctl.commands.resolve import resolve

    cli.add_command(convert)
    cli.add_command(inspect)
    cli.add_command(resolve)
