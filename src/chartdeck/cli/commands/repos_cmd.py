"""chartdeck repos - List chart repositories."""

from __future__ import annotations

from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, OutputOption
from chartdeck.cli.runner import open_orchestrator, run
from chartdeck.models.repo import Repository
from chartdeck.output.formatters import output_repositories


def repos(
    output: str = OutputOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """List the chart repositories known to the backend."""

    async def _run() -> list[Repository]:
        async with open_orchestrator(api_url) as orch:
            return await orch.catalog.list()

    output_repositories(run(_run()), output)
