"""Shared fixtures: an in-memory backend served through httpx.MockTransport."""

from __future__ import annotations

import base64
import json
import typing as typ

import httpx
import pytest

from chartdeck.core.api_client import BackendClient

BASE_URL = "http://backend.test/api/v1"
STABLE_URL = "https://charts.example.com/stable"

Handler = typ.Callable[[httpx.Request], typ.Union[httpx.Response, typ.Awaitable[httpx.Response]]]


def encode_base64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeBackend:
    """Routes (method, path) pairs to canned JSON responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, typ.Any] | Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, payload: typ.Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, payload)

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and _local_path(r) == path]

    def json_body(self, request: httpx.Request) -> typ.Any:
        return json.loads(request.content.decode("utf-8"))

    def handle(self, request: httpx.Request) -> httpx.Response | typ.Awaitable[httpx.Response]:
        self.requests.append(request)
        route = self.routes.get((request.method, _local_path(request)))
        if route is None:
            return httpx.Response(404, json={"error": f"no route for {request.url.path}"})
        if callable(route):
            return route(request)
        status, payload = route
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def _local_path(request: httpx.Request) -> str:
    return request.url.path.removeprefix("/api/v1")


def chart_payload(
    name: str,
    version: str,
    *,
    readme: str = "",
    values_file: str = "",
    values: dict[str, typ.Any] | None = None,
) -> dict[str, typ.Any]:
    files = []
    if readme:
        files.append({"name": "README.md", "data": encode_base64(readme)})
    if values_file:
        files.append({"name": "values.yaml", "data": encode_base64(values_file)})
    return {
        "metadata": {"name": name, "version": version, "appVersion": "1.25.0", "description": f"{name} chart"},
        "values": values or {},
        "files": files,
        "templates": [],
    }


def helmchart_payload(
    name: str,
    namespace: str,
    *,
    completed: bool = True,
    version: str = "1.1.0",
    values_content: str = "",
) -> dict[str, typ.Any]:
    return {
        "apiVersion": "helm.cattle.io/v1",
        "kind": "HelmChart",
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "chart": "nginx",
            "repo": STABLE_URL,
            "targetNamespace": namespace,
            "version": version,
            "valuesContent": values_content,
        },
        "installer_job_completed": completed,
        "installer_job_logs": "",
    }


def release_payload(
    name: str,
    namespace: str,
    *,
    revision: int = 1,
    chart_version: str = "1.1.0",
    status: str = "deployed",
    config: dict[str, typ.Any] | None = None,
) -> dict[str, typ.Any]:
    return {
        "name": name,
        "namespace": namespace,
        "version": revision,
        "info": {
            "first_deployed": "2024-03-01T10:00:00Z",
            "last_deployed": "2024-03-02T11:30:00Z",
            "status": status,
            "description": "Upgrade complete",
        },
        "chart": chart_payload("nginx", chart_version),
        "config": config if config is not None else {"replicaCount": 2},
        "manifest": [],
        "workloads": [],
    }


@pytest.fixture
def backend() -> FakeBackend:
    """Backend stocked with one repository, one chart in two versions and one deployed release."""
    fake = FakeBackend()
    fake.add("GET", "/catalog/helm/repos", [{"name": "stable", "url": STABLE_URL}])
    fake.add(
        "GET",
        "/catalog/helm/repos/stable/charts",
        {
            "apiVersion": "v1",
            "entries": {
                "nginx": [
                    {"name": "nginx", "version": "1.2.0", "appVersion": "1.25.0"},
                    {"name": "nginx", "version": "1.1.0", "appVersion": "1.24.0"},
                ],
            },
        },
    )
    fake.add(
        "GET",
        "/catalog/helm/repos/stable/charts/nginx/1.2.0",
        chart_payload(
            "nginx",
            "1.2.0",
            readme="# nginx\n\nA web server.",
            values_file="replicaCount: 1\n",
            values={"replicaCount": 1},
        ),
    )
    fake.add(
        "GET",
        "/catalog/helm/repos/stable/charts/nginx/1.1.0",
        chart_payload("nginx", "1.1.0", values_file="replicaCount: 1\n", values={"replicaCount": 1}),
    )
    fake.add("GET", "/namespaces", ["default", "web"])
    fake.add("GET", "/cattle/namespaces/web/helmcharts/my-app", helmchart_payload("my-app", "web"))
    fake.add("GET", "/namespaces/web/helmcharts/my-app/workloads", release_payload("my-app", "web"))
    return fake


@pytest.fixture
async def client(backend: FakeBackend) -> typ.AsyncIterator[BackendClient]:
    http_client = backend.http_client()
    try:
        yield BackendClient(BASE_URL, http_client=http_client)
    finally:
        await http_client.aclose()
