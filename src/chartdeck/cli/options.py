"""Shared CLI options."""

from __future__ import annotations

import typer

OutputOption = typer.Option("table", "--output", "-o", help="Output format: table, json, yaml")
ApiUrlOption = typer.Option(None, "--api-url", envvar="CHARTDECK_API_URL", help="Backend API base URL")
NamespaceOption = typer.Option(None, "--namespace", "-n", help="Kubernetes namespace")
RepoOption = typer.Option(..., "--repo", "-r", help="Chart repository name")
ChartOption = typer.Option(..., "--chart", "-c", help="Chart name")
VersionOption = typer.Option(None, "--version", help="Chart version (default: latest)")
WaitOption = typer.Option(False, "--wait", "-w", help="Wait until the backend reports the change as reconciled")
