from __future__ import annotations

from typing import Iterable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from payload_hydrator.domain.models import FieldSource, HydrationResult

_SOURCE_STYLES = {
    FieldSource.PAYLOAD: "green",
    FieldSource.DEFAULT: "cyan",
    FieldSource.OMITTED: "dim",
    FieldSource.MISSING: "bold red",
    FieldSource.MISMATCHED: "bold yellow",
}


def _short_repr(value: object, width: int = 60) -> str:
    text = repr(value)
    if len(text) > width:
        return text[: width - 3] + "..."
    return text


def build_fields_table(result: HydrationResult, show_values: bool = True) -> Table:
    """
    Render the per-field outcome of a hydration as a rich table.

    Rows follow declaration order. Values are shown only for assigned fields.
    """
    table = Table(title="Hydrated Record", box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Source", no_wrap=True)
    if show_values:
        table.add_column("Value", style="magenta")

    mismatches = {m.field: m for m in result.mismatched}
    for name, source in result.sources.items():
        style = _SOURCE_STYLES.get(source, "")
        row = [escape(name), f"[{style}]{source.value}[/{style}]" if style else source.value]
        if show_values:
            if name in result.record:
                row.append(escape(_short_repr(result.record[name])))
            elif name in mismatches:
                m = mismatches[name]
                row.append(f"[dim]expected {m.expected}, got {m.actual}[/dim]")
            else:
                row.append("")
        table.add_row(*row)
    return table


def _joined(names: Iterable[str]) -> str:
    # Payload keys are untrusted; never let them act as rich markup.
    return ", ".join(escape(name) for name in names)


def build_issues_table(result: HydrationResult) -> Table:
    table = Table(title="Unresolved", box=box.ROUNDED)
    table.add_column("Kind", style="red", no_wrap=True)
    table.add_column("Count", justify="right", style="magenta")
    table.add_column("Names")

    table.add_row("missing", str(len(result.missing)), _joined(result.missing))
    table.add_row("unknown", str(len(result.unknown)), _joined(result.unknown))
    table.add_row(
        "mismatched",
        str(len(result.mismatched)),
        _joined(m.field for m in result.mismatched),
    )
    return table


def print_result(
    result: HydrationResult,
    show_values: bool = True,
    console: Optional[Console] = None,
) -> None:
    """
    Print a hydration result: the field table, then issues if there are any.
    """
    console = console or Console()
    console.print(build_fields_table(result, show_values=show_values))
    if result.ok:
        console.print("[green]All fields resolved.[/green]")
        return
    console.print(build_issues_table(result))
