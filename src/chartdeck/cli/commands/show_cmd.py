"""chartdeck show [install|upgrade|reinstall|view] - Load the data a release view needs."""

from __future__ import annotations

from typing import Optional

import typer

from chartdeck.cli.options import ApiUrlOption, ChartOption, NamespaceOption, OutputOption, RepoOption, VersionOption
from chartdeck.cli.runner import open_orchestrator, run
from chartdeck.core.lifecycle import LifecycleContext, NavigationContext, resolve
from chartdeck.models import LifecycleMode
from chartdeck.models.view import AggregatedViewData
from chartdeck.output.formatters import output_view


def _navigation_context(
    segment: str,
    namespace: str | None,
    name: str | None,
    repo: str,
    chart: str,
    version: str | None,
) -> NavigationContext:
    params = {k: v for k, v in (("releaseNamespace", namespace), ("releaseName", name)) if v}
    query = {k: v for k, v in (("repo", repo), ("chart", chart), ("version", version)) if v}
    return NavigationContext(segment=segment, params=params, query=query)


def _links(ctx: LifecycleContext) -> dict[str, str]:
    if ctx.mode is LifecycleMode.INSTALL or not (ctx.namespace and ctx.release_name):
        return {}
    return {
        "edit": ctx.edit_target().url,
        "reinstall": ctx.reinstall_target().url,
        "cancel": ctx.cancel_target().url,
    }


def show(
    segment: str = typer.Argument("view", help="Lifecycle mode: install, upgrade, reinstall or view"),
    repo: str = RepoOption,
    chart: str = ChartOption,
    version: Optional[str] = VersionOption,
    namespace: Optional[str] = NamespaceOption,
    name: Optional[str] = typer.Option(None, "--name", help="Release name (not used for install)"),
    output: str = OutputOption,
    api_url: Optional[str] = ApiUrlOption,
    show_values: bool = typer.Option(False, "--show-values", help="Display the values document"),
    show_readme: bool = typer.Option(False, "--show-readme", help="Display the chart README"),
) -> None:
    """Resolve the lifecycle mode and show chart, release, version and namespace data for it."""
    nav = _navigation_context(segment, namespace, name, repo, chart, version)

    async def _run() -> AggregatedViewData:
        async with open_orchestrator(api_url) as orch:
            return await orch.open_view(nav)

    data = run(_run())
    output_view(data, output, show_values=show_values, show_readme=show_readme, links=_links(resolve(nav)))
