"""Assemble everything a release view needs for its lifecycle mode."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

from chartdeck.core.api_client import BackendClient
from chartdeck.core.chart_resolver import ChartVersionResolver
from chartdeck.core.errors import ValidationError
from chartdeck.models import LifecycleMode
from chartdeck.models.release import HelmChartDescriptor, ReleaseRecord
from chartdeck.models.view import AggregatedViewData

logger = logging.getLogger(__name__)


async def gather_fail_fast(*aws: Awaitable[Any]) -> list[Any]:
    """Run awaitables concurrently and return their results in order.

    The first failure cancels the remaining tasks and is re-raised as is.
    Cancelling the caller cancels every child.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        for task in tasks:
            if task in done and not task.cancelled() and task.exception() is not None:
                raise task.exception()  # type: ignore[misc]
        return [task.result() for task in tasks]
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Let cancelled siblings unwind before returning control
        await asyncio.gather(*tasks, return_exceptions=True)


class ReleaseDataAggregator:
    """Loads chart, release and namespace data for one lifecycle mode."""

    def __init__(self, backend: BackendClient, charts: ChartVersionResolver | None = None):
        self.backend = backend
        self.charts = charts or ChartVersionResolver(backend)

    async def load(
        self,
        mode: LifecycleMode,
        repo_name: str,
        chart_name: str,
        chart_version: str | None = None,
        namespace: str | None = None,
        release_name: str | None = None,
    ) -> AggregatedViewData:
        if mode.uses_chart:
            return await self._load_installable(mode, repo_name, chart_name, chart_version)

        if not namespace:
            raise ValidationError.missing("namespace")
        if not release_name:
            raise ValidationError.missing("release name")

        descriptor = await self.backend.get_helmchart(namespace, release_name)
        if not descriptor.installer_job_completed:
            logger.debug("Installer for %s/%s still running, loading chart data instead", namespace, release_name)
            data = await self._load_installable(mode, repo_name, chart_name, chart_version)
            data.descriptor = descriptor
            data.pending = True
            return data

        return await self._load_upgradable(
            mode, repo_name, chart_name, chart_version, namespace, release_name, descriptor,
        )

    async def _load_installable(
        self,
        mode: LifecycleMode,
        repo_name: str,
        chart_name: str,
        chart_version: str | None,
    ) -> AggregatedViewData:
        versions, namespaces, chart = await gather_fail_fast(
            self.charts.versions(repo_name, chart_name),
            self.backend.list_namespaces(),
            self.charts.spec(repo_name, chart_name, chart_version),
        )
        return AggregatedViewData(
            mode=mode,
            available_versions=versions,
            namespaces=namespaces,
            chart=chart,
            requested_version=chart_version,
        )

    async def _load_upgradable(
        self,
        mode: LifecycleMode,
        repo_name: str,
        chart_name: str,
        chart_version: str | None,
        namespace: str,
        release_name: str,
        descriptor: HelmChartDescriptor,
    ) -> AggregatedViewData:
        versions, namespaces, release = await gather_fail_fast(
            self.charts.versions(repo_name, chart_name),
            self.backend.list_namespaces(),
            self.backend.get_release(namespace, release_name),
        )
        return AggregatedViewData(
            mode=mode,
            available_versions=versions,
            namespaces=namespaces,
            release=release,
            descriptor=descriptor,
            requested_version=chart_version,
        )

    async def revisions(self, namespace: str, release_name: str) -> list[ReleaseRecord]:
        """Every stored revision of a release, oldest first."""
        revisions = await self.backend.get_release_revisions(namespace, release_name)
        revisions.sort(key=lambda r: r.version)
        return revisions
