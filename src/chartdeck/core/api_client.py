"""Async wrapper around the backend HTTP API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from chartdeck.config.settings import settings
from chartdeck.core.errors import UpstreamError
from chartdeck.models.chart import ChartSpecification
from chartdeck.models.release import HelmChartDescriptor, ReleaseRecord
from chartdeck.models.repo import Repository, RepositoryIndex

logger = logging.getLogger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400


def _seg(value: str) -> str:
    return quote(value, safe="")


def _error_detail(response: httpx.Response) -> str:
    """Pull the backend's error message out of a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict):
        for key in ("error", "message"):
            if isinstance(body.get(key), str):
                return body[key]
    return ""


class BackendClient:
    """Thin async client for the console backend."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.timeout,
            headers={"Accept": "application/json", "User-Agent": settings.user_agent},
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=body)
        except httpx.HTTPError as e:
            raise UpstreamError.transport(url, e) from e
        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise UpstreamError.http_error(response.status_code, url, _error_detail(response))
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError.malformed(url, "body is not JSON") from e

    async def get_json(self, path: str) -> Any:
        return await self._request("GET", path)

    # -- catalog ---------------------------------------------------------

    async def list_repositories(self) -> list[Repository]:
        data = await self.get_json("/catalog/helm/repos")
        if not isinstance(data, list):
            raise UpstreamError.malformed(f"{self.base_url}/catalog/helm/repos", "expected a list")
        return [Repository.from_dict(r) for r in data if isinstance(r, dict)]

    async def get_repository_index(self, repo_name: str) -> RepositoryIndex:
        data = await self.get_json(f"/catalog/helm/repos/{_seg(repo_name)}/charts")
        return RepositoryIndex.from_dict(data if isinstance(data, dict) else {})

    async def get_chart_spec(self, repo_name: str, chart_name: str, version: str) -> ChartSpecification:
        data = await self.get_json(
            f"/catalog/helm/repos/{_seg(repo_name)}/charts/{_seg(chart_name)}/{_seg(version)}"
        )
        return ChartSpecification.from_dict(data if isinstance(data, dict) else {})

    # -- cluster ---------------------------------------------------------

    async def list_namespaces(self) -> list[str]:
        data = await self.get_json("/namespaces")
        return [str(ns) for ns in data or []]

    async def list_releases(self, namespace: str | None = None) -> list[ReleaseRecord]:
        path = f"/namespaces/{_seg(namespace)}/helmcharts" if namespace else "/helmcharts"
        data = await self.get_json(path)
        return [ReleaseRecord.from_dict(r) for r in data or []]

    async def get_release(self, namespace: str, name: str) -> ReleaseRecord:
        data = await self.get_json(f"/namespaces/{_seg(namespace)}/helmcharts/{_seg(name)}/workloads")
        return ReleaseRecord.from_dict(data if isinstance(data, dict) else {})

    async def get_release_revisions(self, namespace: str, name: str) -> list[ReleaseRecord]:
        data = await self.get_json(f"/namespaces/{_seg(namespace)}/helmcharts/{_seg(name)}/revisions")
        return [ReleaseRecord.from_dict(r) for r in data or []]

    # -- helm.cattle.io HelmChart resources ------------------------------

    async def get_helmchart(self, namespace: str, name: str) -> HelmChartDescriptor:
        data = await self.get_json(f"/cattle/namespaces/{_seg(namespace)}/helmcharts/{_seg(name)}")
        return HelmChartDescriptor.from_dict(data if isinstance(data, dict) else {})

    async def create_or_update_helmchart(self, namespace: str, body: dict[str, Any]) -> HelmChartDescriptor:
        data = await self._request("POST", f"/cattle/namespaces/{_seg(namespace)}/helmcharts", body)
        return HelmChartDescriptor.from_dict(data if isinstance(data, dict) else {})

    async def delete_helmchart(self, namespace: str, name: str) -> None:
        await self._request("DELETE", f"/cattle/namespaces/{_seg(namespace)}/helmcharts/{_seg(name)}")
