"""chartdeck charts <repo> / chartdeck versions <repo> <chart> - Browse the chart catalog."""

from __future__ import annotations

from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, OutputOption
from chartdeck.cli.runner import open_orchestrator, run
from chartdeck.models.chart import ChartMetadata
from chartdeck.output.formatters import output_charts, output_versions


def charts(
    repo: str = typer.Argument(help="Repository name"),
    output: str = OutputOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """List the latest version of every chart in a repository."""

    async def _run() -> list[ChartMetadata]:
        async with open_orchestrator(api_url) as orch:
            return await orch.charts.latest_charts(repo)

    output_charts(repo, run(_run()), output)


def versions(
    repo: str = typer.Argument(help="Repository name"),
    chart: str = typer.Argument(help="Chart name"),
    output: str = OutputOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """List the available versions of a chart, newest first."""

    async def _run() -> list[str]:
        async with open_orchestrator(api_url) as orch:
            return await orch.charts.versions(repo, chart)

    found = run(_run())
    if not found:
        typer.echo(f"Chart '{chart}' not found in repository '{repo}'.", err=True)
        raise typer.Exit(code=1)
    output_versions(repo, chart, found, output)
