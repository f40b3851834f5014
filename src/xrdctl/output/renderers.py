"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from xrdctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from xrdctl.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    if result.ok and result.op == "convert" and "content" in result.data:
        # Encoded documents are printed verbatim so they can be piped.
        return str(result.data["content"]).rstrip("\n")

    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console)
    if verbose:
        _render_meta(console, result)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} - {msg}"
    if result.op == "convert" and "content" in result.data:
        return str(result.data["content"]).rstrip("\n")
    if result.op == "resolve":
        return str(result.data.get("href") or "")
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="xrd.ok"), Text(f"  {result.op}", style="xrd.op"))


def _field(console: Console, key: str, value: Any, style: str = "") -> None:
    if value is None:
        v = Text("-", style="xrd.nil")
    else:
        v = Text(str(value), style=style)
    console.print(Text(f"  {key}: ", style="xrd.key"), v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    if not result.meta:
        return
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in result.meta.items():
        if key == "telemetry":
            _render_span(console, value, indent=4)
        else:
            console.print(f"    {key}: {value}")


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    prefix = " " * indent
    console.print(f"{prefix}{span.get('name', '?')} {span.get('duration_ms', 0.0):.2f}ms")
    for child in span.get("children", []):
        _render_span(console, child, indent + 2)


# ── Per-op renderers ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_error(result: ServiceResult, console: Console) -> None:
    msg = result.error.message if result.error else "Unknown error"
    code = f" [{result.error.code}]" if result.error else ""
    console.print(
        Text("ERROR", style="xrd.error"),
        Text(f"  {result.op}{code}", style="xrd.op"),
        Text(f" - {msg}"),
    )


def _render_inspect(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "format", data.get("format"))
    _field(console, "subject", data.get("subject"), style="xrd.subject")
    _field(console, "expires", data.get("expires"))
    aliases = data.get("aliases")
    _field(console, "aliases", ", ".join(aliases) if aliases else None)

    properties = data.get("properties")
    if properties:
        table = Table(title="Properties", show_lines=False, expand=False)
        table.add_column("Type", style="xrd.key")
        table.add_column("Value")
        for prop_type, value in properties.items():
            table.add_row(
                Text(prop_type),
                Text("nil", style="xrd.nil") if value is None else Text(value),
            )
        console.print(table)

    links = data.get("links") or []
    if links:
        table = Table(title="Links", show_lines=False, expand=False)
        table.add_column("Rel", style="xrd.rel")
        table.add_column("Target", style="xrd.href")
        table.add_column("Type")
        table.add_column("Titles")
        for link in links:
            target = link.get("href") or link.get("template") or ""
            titles = ", ".join(f"{k}={v}" for k, v in (link.get("titles") or {}).items())
            table.add_row(
                Text(link.get("rel", "")), Text(target), Text(link.get("type", "")), Text(titles)
            )
        console.print(table)


def _render_resolve(result: ServiceResult, console: Console) -> None:
    data = result.data
    _status_line(console, result)
    _field(console, "rel", data.get("rel"), style="xrd.rel")
    _field(console, "resource", data.get("resource"))
    _field(console, "href", data.get("href"), style="xrd.href")
    if data.get("alternatives"):
        _field(console, "alternatives", data["alternatives"])


_OP_RENDERERS: dict[str, Callable[[ServiceResult, Console], None]] = {
    "inspect": _render_inspect,
    "resolve": _render_resolve,
}
