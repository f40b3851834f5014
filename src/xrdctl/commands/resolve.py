"""Command: resolve the href of a document's preferred link."""

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
  xrdctl resolve host-meta.xml lrdd --resource acct:bob@example.com
  xrdctl -q resolve bob.jrd http://webfinger.net/rel/avatar""",
)
@click.argument("source", type=click.Path(path_type=Path, dir_okay=False))
@click.argument("rel")
@click.option(
    "--resource",
    default=None,
    help="Resource URI substituted for {uri} (default: the document subject).",
)
@click.pass_obj
def resolve(app: AppContext, source: Path, rel: str, resource: str | None) -> None:
    """Print the href of the first link in SOURCE with relation REL."""
    app.emit(app.documents.resolve(source, rel, resource=resource))
