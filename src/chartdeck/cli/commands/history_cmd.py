"""chartdeck history <release> - Show release revision history."""

from __future__ import annotations

from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, OutputOption
from chartdeck.cli.runner import open_orchestrator, run
from chartdeck.config.settings import settings
from chartdeck.models.release import ReleaseRecord
from chartdeck.output.formatters import output_history


def history(
    release: str = typer.Argument(help="Release name"),
    output: str = OutputOption,
    namespace: str = typer.Option(settings.default_namespace, "--namespace", "-n", help="Release namespace"),
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """Show the revision history of a release."""

    async def _run() -> list[ReleaseRecord]:
        async with open_orchestrator(api_url) as orch:
            return await orch.loader.revisions(namespace, release)

    revisions = run(_run())
    if not revisions:
        typer.echo(f"No revisions found for release '{release}'.", err=True)
        raise typer.Exit(code=1)
    output_history(revisions, output)
