"""Run async orchestrator work from synchronous Typer commands."""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine, TypeVar

import typer
from rich.console import Console

from chartdeck.core.errors import ChartdeckError
from chartdeck.core.lifecycle import LifecycleContext
from chartdeck.core.orchestrator import ReleaseOrchestrator
from chartdeck.core.release_mutator import MutationOutcome, ReleaseForm, build_request

T = TypeVar("T")

console = Console()


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine, turning chartdeck errors into a clean exit code 1."""
    try:
        return asyncio.run(coro)
    except ChartdeckError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def open_orchestrator(api_url: str | None) -> ReleaseOrchestrator:
    return ReleaseOrchestrator.create(api_url)


async def submit(
    orch: ReleaseOrchestrator,
    ctx: LifecycleContext,
    form: ReleaseForm,
    wait: bool,
) -> MutationOutcome:
    """Build, submit and optionally follow an install/upgrade/reinstall."""
    request = build_request(ctx, form)
    outcome = await orch.mutator.install_or_upgrade(request, ctx.mode)
    console.print(f"[green]{outcome.message}[/green]")
    await report_refresh(outcome, wait)
    return outcome


async def report_refresh(outcome: MutationOutcome, wait: bool) -> None:
    if not wait:
        outcome.cancel()
        console.print(f"[dim]Follow progress at {outcome.redirect.url}[/dim]")
        return
    with console.status("[bold cyan]Waiting for the backend to reconcile…"):
        result = await outcome.wait()
    if result is not None and result.reconciled:
        console.print(f"[green]Reconciled after {result.attempts} check(s)[/green]")
    else:
        attempts = result.attempts if result is not None else 0
        console.print(f"[yellow]Not reconciled after {attempts} check(s); it may still complete[/yellow]")
