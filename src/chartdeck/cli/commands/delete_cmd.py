"""chartdeck delete <release> - Delete a chart release."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from chartdeck.cli.options import ApiUrlOption, WaitOption
from chartdeck.cli.runner import open_orchestrator, report_refresh, run
from chartdeck.config.settings import settings

console = Console()


def delete(
    release: str = typer.Argument(help="Release name"),
    namespace: str = typer.Option(settings.default_namespace, "--namespace", "-n", help="Release namespace"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    wait: bool = WaitOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """Delete a release and its HelmChart resource."""
    if not yes:
        typer.confirm(f"Delete release '{namespace}/{release}'?", abort=True)

    async def _run() -> None:
        async with open_orchestrator(api_url) as orch:
            outcome = await orch.mutator.delete(namespace, release)
            console.print(f"[green]{outcome.message}[/green]")
            await report_refresh(outcome, wait)

    run(_run())
