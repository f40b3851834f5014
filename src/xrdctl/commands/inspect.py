"""Command: summarize an XRD document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from xrdctl.commands._base import XrdCommand

if TYPE_CHECKING:
    from xrdctl.commands._context import AppContext


@click.command(
    cls=XrdCommand,
    examples="""\
  xrdctl inspect host-meta.xml
  xrdctl --json inspect bob.jrd""",
)
@click.argument("source", type=click.Path(path_type=Path, dir_okay=False))
@click.pass_obj
def inspect(app: AppContext, source: Path) -> None:
    """Show subject, expiry, aliases, properties, and links of SOURCE."""
    app.emit(app.documents.inspect(source))
