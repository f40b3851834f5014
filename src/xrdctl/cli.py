"""Root ``xrdctl`` group: global output/logging flags, then convert, inspect, resolve."""

from __future__ import annotations

import click

from xrdctl import __version__
from xrdctl.commands import register_commands
from xrdctl.commands._base import XrdGroup
from xrdctl.commands._context import AppContext
from xrdctl.config.settings import XrdSettings


@click.group(
    cls=XrdGroup,
    invoke_without_command=True,
    examples="""\
  xrdctl inspect host-meta.xml
  xrdctl convert host-meta.xml --to json
  xrdctl -q resolve bob.jrd lrdd""",
)
@click.version_option(version=__version__, prog_name="xrdctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Use this xrdctl.toml instead of the walk-up search.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """xrdctl: Extensible Resource Descriptor (XRD/JRD) tool.

    Reads OASIS XRD 1.0 XML and RFC 6415 JSON (JRD) documents from local
    files; the format is detected from the first character.
    """
    ctx.ensure_object(dict)
    settings = XrdSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
