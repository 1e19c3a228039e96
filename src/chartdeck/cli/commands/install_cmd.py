"""chartdeck install / chartdeck upgrade - Submit a chart release."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, ChartOption, NamespaceOption, RepoOption, VersionOption, WaitOption
from chartdeck.cli.runner import open_orchestrator, run, submit
from chartdeck.config.settings import settings
from chartdeck.core.lifecycle import LifecycleContext
from chartdeck.core.release_mutator import ReleaseForm
from chartdeck.models import LifecycleMode

ValuesOption = typer.Option(None, "--values", "-f", exists=True, dir_okay=False, help="YAML values file")


def _read_values(path: Path | None) -> str | None:
    if path is None:
        return None
    return path.read_text(encoding="utf-8")


def install(
    name: str = typer.Argument(help="Release name"),
    repo: str = RepoOption,
    chart: str = ChartOption,
    version: Optional[str] = VersionOption,
    namespace: Optional[str] = NamespaceOption,
    values: Optional[Path] = ValuesOption,
    wait: bool = WaitOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """Install a chart as a new release."""
    ctx = LifecycleContext(mode=LifecycleMode.INSTALL, repo_name=repo, chart_name=chart, chart_version=version)
    values_content = _read_values(values) or ""

    async def _run() -> None:
        async with open_orchestrator(api_url) as orch:
            chosen = version or await orch.charts.latest_version(repo, chart)
            form = ReleaseForm(
                version=chosen,
                values_content=values_content,
                release_name=name,
                namespace=namespace or settings.default_namespace,
            )
            await submit(orch, ctx, form, wait)

    run(_run())


def upgrade(
    name: str = typer.Argument(help="Release name"),
    repo: str = RepoOption,
    chart: str = ChartOption,
    version: Optional[str] = VersionOption,
    namespace: str = typer.Option(settings.default_namespace, "--namespace", "-n", help="Release namespace"),
    values: Optional[Path] = ValuesOption,
    reinstall: bool = typer.Option(False, "--reinstall", help="Reinstall a failed release instead of upgrading"),
    wait: bool = WaitOption,
    api_url: Optional[str] = ApiUrlOption,
) -> None:
    """Upgrade (or reinstall) an existing release, keeping its current values unless a file is given."""
    mode = LifecycleMode.REINSTALL if reinstall else LifecycleMode.UPGRADE
    ctx = LifecycleContext(
        mode=mode,
        repo_name=repo,
        chart_name=chart,
        chart_version=version,
        namespace=namespace,
        release_name=name,
    )
    values_content = _read_values(values)

    async def _run() -> None:
        async with open_orchestrator(api_url) as orch:
            data = await orch.loader.load(mode, repo, chart, version, namespace, name)
            form = ReleaseForm(
                version=data.selected_version,
                values_content=values_content if values_content is not None else data.custom_values,
                release_name=name,
                namespace=namespace,
            )
            await submit(orch, ctx, form, wait)

    run(_run())
