"""Rich table builders for each command."""

from __future__ import annotations

from rich.markdown import Markdown
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from chartdeck.core.lifecycle import editable_fields
from chartdeck.models.chart import ChartMetadata
from chartdeck.models.release import ReleaseRecord
from chartdeck.models.repo import Repository
from chartdeck.models.view import AggregatedViewData
from chartdeck.output.themes import styled_mode, styled_status, styled_update


def repository_table(repos: list[Repository]) -> Table:
    table = Table(title="Chart Repositories", expand=True)
    table.add_column("Name", style="bold white", no_wrap=True)
    table.add_column("URL", style="cyan")
    for r in repos:
        table.add_row(r.name, r.url)
    return table


def chart_catalog_table(repo_name: str, charts: list[ChartMetadata]) -> Table:
    table = Table(title=f"Charts in {repo_name}", expand=True)
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Version", style="bold")
    table.add_column("App Ver", style="cyan")
    table.add_column("Description", max_width=60)
    for c in sorted(charts, key=lambda c: c.name):
        table.add_row(c.name, c.version, c.app_version, c.description)
    return table


def versions_table(repo_name: str, chart_name: str, versions: list[str]) -> Table:
    table = Table(title=f"{repo_name}/{chart_name}", expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Version", style="bold")
    for i, v in enumerate(versions, 1):
        table.add_row(str(i), v + ("  [green](latest)[/green]" if i == 1 else ""))
    return table


def release_list_table(releases: list[ReleaseRecord]) -> Table:
    table = Table(title="Helm Releases", expand=True, show_lines=False)
    table.add_column("Namespace", style="blue", no_wrap=True)
    table.add_column("Release", style="bold white", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Rev", justify="right", style="dim")
    table.add_column("Chart", style="magenta", no_wrap=True)
    table.add_column("Chart Ver", style="magenta")
    table.add_column("App Ver", style="cyan")
    table.add_column("Updated", style="dim", no_wrap=True)

    for r in releases:
        table.add_row(
            r.namespace,
            r.name,
            styled_status(r.status),
            str(r.version),
            r.chart_name,
            r.chart_version,
            r.app_version,
            r.updated_short,
        )
    return table


def view_panel(data: AggregatedViewData) -> Panel:
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold cyan")
    table.add_column("Value")

    table.add_row("Mode", styled_mode(data.mode))
    spec = data.chart_spec
    if spec is not None:
        table.add_row("Chart", f"{spec.name}-{spec.version}" if spec.name else "-")
        if spec.metadata.description:
            table.add_row("Description", spec.metadata.description)
    if data.release is not None:
        rel = data.release
        table.add_row("Release", f"{rel.namespace}/{rel.name}")
        table.add_row("Status", styled_status(rel.status))
        table.add_row("Revision", str(rel.version))
        table.add_row("Updated", rel.updated_short or "-")
        table.add_row("Update", styled_update(data.update_type))
    table.add_row("Selected Ver", data.selected_version or "-")
    table.add_row("Available", ", ".join(data.available_versions[:8]) or "-")
    table.add_row("Namespaces", ", ".join(data.namespaces) or "-")

    table.add_row("Editable", _editable_summary(data))

    border = "yellow" if data.pending else "green"
    title = "[bold]Release[/bold]" if data.release is not None else "[bold]Chart[/bold]"
    if data.pending:
        table.add_row("Notice", f"[yellow]{data.notice}[/yellow]")
    return Panel(table, title=title, border_style=border)


def _editable_summary(data: AggregatedViewData) -> str:
    fields = editable_fields(data.mode)
    names = [
        label
        for label, on in (("name", fields.release_name), ("namespace", fields.namespace), ("version", fields.version))
        if on
    ]
    return ", ".join(names) or "[dim]read-only[/dim]"


def values_panel(text: str, title: str = "Values") -> Panel:
    syntax = Syntax(text or "# (no values)", "yaml", theme="monokai", line_numbers=False)
    return Panel(syntax, title=f"[bold]{title}[/bold]", border_style="green")


def readme_panel(text: str) -> Panel:
    return Panel(Markdown(text or "_No README_"), title="[bold]README[/bold]", border_style="blue")


def history_table(revisions: list[ReleaseRecord]) -> Table:
    table = Table(title="Release History", expand=True)
    table.add_column("Revision", justify="right", style="bold")
    table.add_column("Status", no_wrap=True)
    table.add_column("First Deployed", style="dim", no_wrap=True)
    table.add_column("Updated", style="dim", no_wrap=True)
    table.add_column("Chart Ver", style="magenta")
    table.add_column("Description", max_width=40)

    for r in revisions:
        table.add_row(
            str(r.version),
            styled_status(r.status),
            r.info.first_deployed[:19],
            r.updated_short,
            r.chart_version,
            r.info.description or "",
        )
    return table
