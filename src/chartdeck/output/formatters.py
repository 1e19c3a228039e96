"""Table / JSON / YAML output dispatch."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.console import Console

from chartdeck.models.chart import ChartMetadata
from chartdeck.models.release import ReleaseRecord
from chartdeck.models.repo import Repository
from chartdeck.models.view import AggregatedViewData

console = Console()


def _emit(data: Any, fmt: str) -> bool:
    """Print structured output; return False when the caller should render a table."""
    if fmt == "json":
        console.print_json(json.dumps(data, indent=2, default=str))
        return True
    if fmt == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
        return True
    return False


def _release_to_dict(r: ReleaseRecord) -> dict[str, Any]:
    return {
        "name": r.name,
        "namespace": r.namespace,
        "status": r.status.value,
        "revision": r.version,
        "chart": r.chart_name,
        "chart_version": r.chart_version,
        "app_version": r.app_version,
        "updated": r.info.last_deployed,
        "description": r.info.description,
    }


def _view_to_dict(data: AggregatedViewData) -> dict[str, Any]:
    spec = data.chart_spec
    out: dict[str, Any] = {
        "mode": data.mode.value,
        "pending": data.pending,
        "available_versions": data.available_versions,
        "selected_version": data.selected_version,
        "namespaces": data.namespaces,
        "chart": {
            "name": spec.name,
            "version": spec.version,
            "description": spec.metadata.description,
        } if spec is not None else None,
        "release": _release_to_dict(data.release) if data.release is not None else None,
    }
    if data.release is not None:
        out["update_type"] = data.update_type
    if data.pending:
        out["notice"] = data.notice
    return out


def output_repositories(repos: list[Repository], fmt: str) -> None:
    if not _emit([{"name": r.name, "url": r.url} for r in repos], fmt):
        from chartdeck.output.tables import repository_table
        console.print(repository_table(repos))


def output_charts(repo_name: str, charts: list[ChartMetadata], fmt: str) -> None:
    data = [
        {"name": c.name, "version": c.version, "app_version": c.app_version, "description": c.description}
        for c in charts
    ]
    if not _emit(data, fmt):
        from chartdeck.output.tables import chart_catalog_table
        console.print(chart_catalog_table(repo_name, charts))


def output_versions(repo_name: str, chart_name: str, versions: list[str], fmt: str) -> None:
    if not _emit(versions, fmt):
        from chartdeck.output.tables import versions_table
        console.print(versions_table(repo_name, chart_name, versions))


def output_releases(releases: list[ReleaseRecord], fmt: str) -> None:
    if not _emit([_release_to_dict(r) for r in releases], fmt):
        from chartdeck.output.tables import release_list_table
        console.print(release_list_table(releases))


def output_view(
    data: AggregatedViewData,
    fmt: str,
    show_values: bool = False,
    show_readme: bool = False,
    links: dict[str, str] | None = None,
) -> None:
    structured = _view_to_dict(data)
    if links:
        structured["links"] = links
    if show_values:
        structured["values"] = data.values
    if show_readme:
        structured["readme"] = data.readme
    if _emit(structured, fmt):
        return
    from chartdeck.output.tables import readme_panel, values_panel, view_panel
    console.print(view_panel(data))
    for label, url in (links or {}).items():
        console.print(f"[dim]{label}: {url}[/dim]")
    if show_values:
        console.print(values_panel(data.values))
    if show_readme:
        console.print(readme_panel(data.readme))


def output_history(revisions: list[ReleaseRecord], fmt: str) -> None:
    if not _emit([_release_to_dict(r) for r in revisions], fmt):
        from chartdeck.output.tables import history_table
        console.print(history_table(revisions))
