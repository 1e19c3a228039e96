"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

app = typer.Typer(
    name="chartdeck",
    help="chartdeck - Install, upgrade and inspect chart releases through the console backend.",
    no_args_is_help=True,
)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False, rich_tracebacks=True)],
    )
    # httpx logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _register_commands() -> None:
    from chartdeck.cli.commands.repos_cmd import repos
    from chartdeck.cli.commands.charts_cmd import charts, versions
    from chartdeck.cli.commands.list_cmd import list_releases
    from chartdeck.cli.commands.show_cmd import show
    from chartdeck.cli.commands.install_cmd import install, upgrade
    from chartdeck.cli.commands.delete_cmd import delete
    from chartdeck.cli.commands.history_cmd import history

    # Registered as commands, not sub-apps, so options may follow positional arguments
    app.command("repos", help="List chart repositories")(repos)
    app.command("charts", help="List charts in a repository")(charts)
    app.command("versions", help="List chart versions")(versions)
    app.command("list", help="List chart releases")(list_releases)
    app.command("show", help="Show release view data for a lifecycle mode")(show)
    app.command("install", help="Install a chart")(install)
    app.command("upgrade", help="Upgrade or reinstall a release")(upgrade)
    app.command("delete", help="Delete a release")(delete)
    app.command("history", help="Show release revision history")(history)


_register_commands()


def main() -> None:
    app()
