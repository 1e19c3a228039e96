"""Derive the lifecycle mode of a release view from its navigation context."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import quote, urlencode

from chartdeck.models import EditableFields, LifecycleMode

RELEASES_ROOT = "apps"

_SEGMENT_MODES: dict[str, LifecycleMode] = {
    "upgrade": LifecycleMode.UPGRADE,
    "install": LifecycleMode.INSTALL,
    "reinstall": LifecycleMode.REINSTALL,
}

# Every mode must have an entry
_EDITABLE_FIELDS: dict[LifecycleMode, EditableFields] = {
    LifecycleMode.INSTALL: EditableFields(release_name=True, namespace=True, version=True),
    LifecycleMode.UPGRADE: EditableFields(version=True),
    LifecycleMode.REINSTALL: EditableFields(version=True),
    LifecycleMode.VIEW: EditableFields(),
}


@dataclass(frozen=True)
class NavigationContext:
    """Plain description of where the user is: last path segment, route params, query params."""

    segment: str = ""
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Navigation:
    """A navigation target: path segments plus query parameters."""

    path: tuple[str, ...]
    query: dict[str, str] = field(default_factory=dict)

    @property
    def url(self) -> str:
        path = "/" + "/".join(quote(p, safe="") for p in self.path)
        if not self.query:
            return path
        return f"{path}?{urlencode(self.query)}"


@dataclass(frozen=True)
class LifecycleContext:
    mode: LifecycleMode
    repo_name: str | None = None
    chart_name: str | None = None
    chart_version: str | None = None
    namespace: str | None = None
    release_name: str | None = None

    @property
    def editable(self) -> EditableFields:
        return editable_fields(self.mode)

    def _query(self) -> dict[str, str]:
        query = {"chart": self.chart_name, "repo": self.repo_name, "version": self.chart_version}
        return {k: v for k, v in query.items() if v}

    def edit_target(self) -> Navigation:
        return release_navigation(self.namespace or "", self.release_name or "", "upgrade", self._query())

    def cancel_target(self) -> Navigation:
        return release_navigation(self.namespace or "", self.release_name or "", None, self._query())

    def reinstall_target(self) -> Navigation:
        return release_navigation(self.namespace or "", self.release_name or "", "reinstall", self._query())


def mode_for_segment(segment: str) -> LifecycleMode:
    return _SEGMENT_MODES.get(segment, LifecycleMode.VIEW)


def editable_fields(mode: LifecycleMode) -> EditableFields:
    return _EDITABLE_FIELDS[mode]


def resolve(nav: NavigationContext) -> LifecycleContext:
    """Compute the lifecycle context once per navigation event.

    Release identity comes from route params for every mode except install,
    where it is supplied later through the form.
    """
    mode = mode_for_segment(nav.segment)
    namespace = release_name = None
    if mode is not LifecycleMode.INSTALL:
        namespace = nav.params.get("releaseNamespace") or nav.params.get("namespace")
        release_name = nav.params.get("releaseName") or nav.params.get("name")
    return LifecycleContext(
        mode=mode,
        repo_name=nav.query.get("repo") or None,
        chart_name=nav.query.get("chart") or None,
        chart_version=nav.query.get("version") or None,
        namespace=namespace,
        release_name=release_name,
    )


def release_navigation(
    namespace: str,
    name: str,
    segment: str | None = None,
    query: dict[str, str] | None = None,
) -> Navigation:
    path = (RELEASES_ROOT, namespace, name) + ((segment,) if segment else ())
    return Navigation(path=path, query=dict(query or {}))


def releases_list_navigation() -> Navigation:
    return Navigation(path=(RELEASES_ROOT,))
