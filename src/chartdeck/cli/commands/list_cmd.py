"""chartdeck list - List deployed releases."""

from __future__ import annotations

from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, NamespaceOption, OutputOption
from chartdeck.cli.runner import open_orchestrator, run
from chartdeck.models.release import ReleaseRecord
from chartdeck.output.formatters import output_releases


def list_releases(
    output: str = OutputOption,
    namespace: Optional[str] = NamespaceOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """List chart releases, across all namespaces unless one is given."""

    async def _run() -> list[ReleaseRecord]:
        async with open_orchestrator(api_url) as orch:
            return await orch.backend.list_releases(namespace)

    releases = run(_run())
    releases.sort(key=lambda r: (r.namespace, r.name))
    output_releases(releases, output)
