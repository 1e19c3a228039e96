"""Tests for the backend HTTP client."""

from __future__ import annotations

import httpx
import pytest

from chartdeck.core.api_client import BackendClient
from chartdeck.core.errors import NotFound, UpstreamError, UpstreamNotFound
from chartdeck.models.release import HelmChartDescriptor, HelmChartSpec

from conftest import BASE_URL, STABLE_URL, FakeBackend


async def test_list_repositories(client: BackendClient) -> None:
    repos = await client.list_repositories()

    assert [(r.name, r.url) for r in repos] == [("stable", STABLE_URL)]


async def test_repository_index_keeps_version_order(client: BackendClient) -> None:
    index = await client.get_repository_index("stable")

    assert index.versions("nginx") == ["1.2.0", "1.1.0"]
    assert index.versions("redis") == []


async def test_chart_spec_decodes_embedded_files(client: BackendClient) -> None:
    spec = await client.get_chart_spec("stable", "nginx", "1.2.0")

    readme = spec.find_file("readme.md")
    assert readme is not None
    assert readme.text.startswith("# nginx")


async def test_release_revision_accepts_numeric_string(backend: FakeBackend, client: BackendClient) -> None:
    backend.add(
        "GET",
        "/namespaces/web/helmcharts/my-app/revisions",
        [{"name": "my-app", "namespace": "web", "version": "3"}],
    )

    revisions = await client.get_release_revisions("web", "my-app")

    assert revisions[0].version == 3


async def test_404_maps_to_not_found(client: BackendClient) -> None:
    with pytest.raises(UpstreamNotFound) as exc_info:
        await client.get_helmchart("web", "missing")

    assert isinstance(exc_info.value, NotFound)
    assert exc_info.value.status_code == 404


async def test_error_body_message_is_surfaced(backend: FakeBackend, client: BackendClient) -> None:
    backend.add("GET", "/namespaces", {"error": "cluster unreachable"}, status=502)

    with pytest.raises(UpstreamError, match="cluster unreachable") as exc_info:
        await client.list_namespaces()

    assert exc_info.value.status_code == 502
    assert not isinstance(exc_info.value, NotFound)


async def test_transport_failure_is_upstream_error(backend: FakeBackend, client: BackendClient) -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend.add_handler("GET", "/namespaces", _refuse)

    with pytest.raises(UpstreamError, match="connection refused") as exc_info:
        await client.list_namespaces()

    assert exc_info.value.status_code is None


async def test_non_json_body_is_malformed(backend: FakeBackend, client: BackendClient) -> None:
    backend.add_handler("GET", "/namespaces", lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(UpstreamError, match="not JSON"):
        await client.list_namespaces()


async def test_repository_list_must_be_a_list(backend: FakeBackend, client: BackendClient) -> None:
    backend.add("GET", "/catalog/helm/repos", {"name": "stable"})

    with pytest.raises(UpstreamError, match="expected a list"):
        await client.list_repositories()


async def test_path_segments_are_quoted(backend: FakeBackend, client: BackendClient) -> None:
    with pytest.raises(UpstreamNotFound):
        await client.get_repository_index("team/charts")

    (request,) = backend.requests
    assert request.url.raw_path.decode() == "/api/v1/catalog/helm/repos/team%2Fcharts/charts"


async def test_create_or_update_posts_descriptor(backend: FakeBackend, client: BackendClient) -> None:
    backend.add_handler(
        "POST",
        "/cattle/namespaces/web/helmcharts",
        lambda request: httpx.Response(201, json=backend.json_body(request)),
    )
    descriptor = HelmChartDescriptor(
        name="my-app",
        namespace="web",
        spec=HelmChartSpec(chart="nginx", repo=STABLE_URL, target_namespace="web", version="1.2.0"),
    )

    created = await client.create_or_update_helmchart("web", descriptor.to_dict())

    body = backend.json_body(backend.calls("POST", "/cattle/namespaces/web/helmcharts")[0])
    assert body["kind"] == "HelmChart"
    assert body["spec"]["targetNamespace"] == "web"
    assert created.name == "my-app"
    assert created.spec.repo == STABLE_URL


async def test_delete_accepts_empty_response(backend: FakeBackend, client: BackendClient) -> None:
    backend.add("DELETE", "/cattle/namespaces/web/helmcharts/my-app", status=204)

    assert await client.delete_helmchart("web", "my-app") is None


async def test_owned_client_is_closed() -> None:
    client = BackendClient(BASE_URL)
    async with client:
        pass

    assert client._client.is_closed
