"""Click base classes for xrdctl commands.

XrdCommand and XrdGroup accept an ``examples`` parameter holding sample
invocations against host-meta and WebFinger files. ``--examples`` prints
them and exits; ``--help`` only points at the flag.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click

EXAMPLES_HINT = "Run with --examples for sample invocations."


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""
    text = textwrap.dedent(examples).strip("\n")

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in text.splitlines():
            click.echo(f"  {line}")
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )
    if cmd.epilog is None:
        cmd.epilog = EXAMPLES_HINT


class XrdCommand(click.Command):
    """A command with optional ``examples`` text."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class XrdGroup(click.Group):
    """The root group; ``command_class = XrdCommand`` gives subcommands ``examples``."""

    command_class = XrdCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
