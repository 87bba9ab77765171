"""Rendering of link outcomes for the console and as JSON."""

from __future__ import annotations

from pathlib import Path

import orjson
from rich.console import Console
from rich.markup import escape

from filter_linker.core.links.models import FilterGroup, LinkResult, LinkStatus, LinkSummary

_STATUS_STYLE = {
    LinkStatus.CREATED: "green",
    LinkStatus.SKIPPED: "yellow",
    LinkStatus.FAILED: "red",
}


class ConsoleSink:
    """Prints each outcome as it happens."""

    def __init__(self, console: Console, quiet: bool = False):
        self.console = console
        self.quiet = quiet

    def missing(self, group: FilterGroup, folder: Path) -> None:
        self.console.print(
            f"[yellow]Folder for filter set '{group.value}' not found: {escape(str(folder))}[/yellow]"
        )

    def result(self, result: LinkResult) -> None:
        if self.quiet:
            return
        style = _STATUS_STYLE[result.status]
        line = f"[{style}]{result.status.value:>7}[/{style}]  {escape(result.name)}"
        if result.status is LinkStatus.SKIPPED:
            line += " [dim](already exists)[/dim]"
        elif result.error:
            line += f" [red]({escape(result.error)})[/red]"
        self.console.print(line)

    def summary(self, summary: LinkSummary) -> None:
        self.console.print(
            f"\n[bold green]{summary.created}[/bold green] {summary.kind.value} links created, "
            f"[bold yellow]{summary.skipped}[/bold yellow] skipped (already exist), "
            f"[bold red]{summary.failed}[/bold red] failed."
        )


def summary_json(summary: LinkSummary) -> str:
    return orjson.dumps(summary.to_dict(), option=orjson.OPT_INDENT_2).decode("utf-8")
