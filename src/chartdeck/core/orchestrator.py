"""Wires the orchestrator components around a single backend connection."""

from __future__ import annotations

import time

import httpx

from chartdeck.config.settings import settings
from chartdeck.core.api_client import BackendClient
from chartdeck.core.chart_resolver import ChartVersionResolver
from chartdeck.core.lifecycle import NavigationContext, resolve
from chartdeck.core.release_loader import ReleaseDataAggregator
from chartdeck.core.release_mutator import RefreshPolicy, ReleaseMutationCoordinator
from chartdeck.core.repo_catalog import Clock, RepositoryCatalog
from chartdeck.models.view import AggregatedViewData


class ReleaseOrchestrator:
    def __init__(
        self,
        backend: BackendClient,
        *,
        repo_cache_ttl: float | None = None,
        clock: Clock = time.monotonic,
        policy: RefreshPolicy | None = None,
    ):
        self.backend = backend
        self.catalog = RepositoryCatalog(backend, ttl=repo_cache_ttl, clock=clock)
        self.charts = ChartVersionResolver(backend)
        self.loader = ReleaseDataAggregator(backend, self.charts)
        self.mutator = ReleaseMutationCoordinator(backend, self.catalog, policy=policy)

    @classmethod
    def create(
        cls,
        api_url: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        policy: RefreshPolicy | None = None,
    ) -> ReleaseOrchestrator:
        backend = BackendClient(api_url, http_client=http_client)
        return cls(backend, repo_cache_ttl=settings.repo_cache_ttl, policy=policy)

    async def aclose(self) -> None:
        await self.backend.aclose()

    async def __aenter__(self) -> ReleaseOrchestrator:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def open_view(self, nav: NavigationContext) -> AggregatedViewData:
        """Resolve the lifecycle mode for a navigation event and load its data."""
        ctx = resolve(nav)
        return await self.loader.load(
            ctx.mode,
            ctx.repo_name or "",
            ctx.chart_name or "",
            ctx.chart_version,
            ctx.namespace,
            ctx.release_name,
        )
