"""Chart version and specification lookups against the repository index."""

from __future__ import annotations

import logging

from chartdeck.core.api_client import BackendClient
from chartdeck.core.errors import NotFound
from chartdeck.models.chart import ChartMetadata, ChartSpecification

logger = logging.getLogger(__name__)


class ChartVersionResolver:
    """Resolves chart versions and specifications.

    Nothing is cached here: chart catalogs change often and a stale version
    list would misreport what can be installed.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend

    async def versions(self, repo_name: str, chart_name: str) -> list[str]:
        """All versions of a chart in index order (newest first); empty if the chart is unknown."""
        index = await self.backend.get_repository_index(repo_name)
        versions = index.versions(chart_name)
        logger.debug("%s/%s: %d versions", repo_name, chart_name, len(versions))
        return versions

    async def latest_version(self, repo_name: str, chart_name: str) -> str:
        versions = await self.versions(repo_name, chart_name)
        if not versions:
            raise NotFound.chart_versions(repo_name, chart_name)
        return versions[0]

    async def spec(
        self,
        repo_name: str,
        chart_name: str,
        version: str | None = None,
    ) -> ChartSpecification:
        """Fetch the chart specification, resolving "latest" when no version is given."""
        if not version:
            version = await self.latest_version(repo_name, chart_name)
        return await self.backend.get_chart_spec(repo_name, chart_name, version)

    async def latest_charts(self, repo_name: str) -> list[ChartMetadata]:
        """The current entry of every chart in a repository."""
        index = await self.backend.get_repository_index(repo_name)
        return index.latest()
