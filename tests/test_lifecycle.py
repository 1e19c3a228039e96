"""Tests for lifecycle mode resolution and navigation targets."""

from __future__ import annotations

import pytest

from chartdeck.core.lifecycle import (
    LifecycleContext,
    NavigationContext,
    editable_fields,
    mode_for_segment,
    release_navigation,
    releases_list_navigation,
    resolve,
)
from chartdeck.models import EditableFields, LifecycleMode


@pytest.mark.parametrize(
    ("segment", "mode"),
    [
        ("install", LifecycleMode.INSTALL),
        ("upgrade", LifecycleMode.UPGRADE),
        ("reinstall", LifecycleMode.REINSTALL),
        ("my-app", LifecycleMode.VIEW),
        ("", LifecycleMode.VIEW),
    ],
)
def test_mode_for_segment(segment: str, mode: LifecycleMode) -> None:
    assert mode_for_segment(segment) is mode


def test_every_mode_has_editable_fields() -> None:
    for mode in LifecycleMode:
        assert isinstance(editable_fields(mode), EditableFields)


def test_install_edits_everything_and_view_nothing() -> None:
    assert editable_fields(LifecycleMode.INSTALL) == EditableFields(release_name=True, namespace=True, version=True)
    assert editable_fields(LifecycleMode.UPGRADE) == EditableFields(version=True)
    assert editable_fields(LifecycleMode.REINSTALL) == EditableFields(version=True)
    assert editable_fields(LifecycleMode.VIEW) == EditableFields()


def test_uses_chart_only_for_install_paths() -> None:
    assert {m for m in LifecycleMode if m.uses_chart} == {LifecycleMode.INSTALL, LifecycleMode.REINSTALL}


def test_resolve_upgrade_takes_identity_from_params() -> None:
    nav = NavigationContext(
        segment="upgrade",
        params={"releaseNamespace": "web", "releaseName": "my-app"},
        query={"repo": "stable", "chart": "nginx", "version": "1.2.0"},
    )

    ctx = resolve(nav)

    assert ctx == LifecycleContext(
        mode=LifecycleMode.UPGRADE,
        repo_name="stable",
        chart_name="nginx",
        chart_version="1.2.0",
        namespace="web",
        release_name="my-app",
    )
    assert ctx.editable.version
    assert not ctx.editable.release_name


def test_resolve_accepts_short_param_names() -> None:
    ctx = resolve(NavigationContext(segment="my-app", params={"namespace": "web", "name": "my-app"}))

    assert ctx.mode is LifecycleMode.VIEW
    assert (ctx.namespace, ctx.release_name) == ("web", "my-app")


def test_resolve_install_ignores_route_identity() -> None:
    nav = NavigationContext(
        segment="install",
        params={"releaseNamespace": "web", "releaseName": "stale"},
        query={"repo": "stable", "chart": "nginx"},
    )

    ctx = resolve(nav)

    assert ctx.namespace is None
    assert ctx.release_name is None
    assert ctx.chart_version is None


def test_release_navigation_urls() -> None:
    assert release_navigation("web", "my-app").url == "/apps/web/my-app"
    assert release_navigation("web", "my-app", "upgrade", {"chart": "nginx"}).url == "/apps/web/my-app/upgrade?chart=nginx"
    assert releases_list_navigation().url == "/apps"


def test_context_targets() -> None:
    ctx = LifecycleContext(
        mode=LifecycleMode.VIEW,
        repo_name="stable",
        chart_name="nginx",
        namespace="web",
        release_name="my-app",
    )

    assert ctx.edit_target().url == "/apps/web/my-app/upgrade?chart=nginx&repo=stable"
    assert ctx.reinstall_target().path == ("apps", "web", "my-app", "reinstall")
    assert ctx.cancel_target().path == ("apps", "web", "my-app")


def test_navigation_url_encodes_query_values() -> None:
    nav = release_navigation("web", "my-app", None, {"repo": "team charts", "version": "1.0.0+build&1"})

    assert nav.url == "/apps/web/my-app?repo=team+charts&version=1.0.0%2Bbuild%261"
