"""Command: convert an XRD document between XML and JSON."""

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
  xrdctl convert host-meta.xml
  xrdctl convert host-meta.xml --to json --output host-meta.json
  xrdctl convert bob.jrd --to xml""",
)
@click.argument("source", type=click.Path(path_type=Path, dir_okay=False))
@click.option(
    "--to",
    "target",
    type=click.Choice(["json", "xml"], case_sensitive=False),
    default=None,
    help="Target format (default from [convert] default_target).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.pass_obj
def convert(app: AppContext, source: Path, target: str | None, output: Path | None) -> None:
    """Convert SOURCE (XML or JSON, detected) to the other format."""
    app.emit(
        app.documents.convert(
            source,
            target=target.lower() if target else None,
            output=output,
        )
    )
