"""Release and deployed-chart descriptor models."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from chartdeck.models.chart import ChartSpecification

HELMCHART_API_VERSION = "helm.cattle.io/v1"
HELMCHART_KIND = "HelmChart"


class ReleaseStatus(enum.Enum):
    DEPLOYED = "deployed"
    FAILED = "failed"
    SUPERSEDED = "superseded"
    PENDING_INSTALL = "pending-install"
    PENDING_UPGRADE = "pending-upgrade"
    PENDING_ROLLBACK = "pending-rollback"
    UNINSTALLING = "uninstalling"
    UNINSTALLED = "uninstalled"
    UNKNOWN = "unknown"

    @classmethod
    def from_str(cls, s: str) -> ReleaseStatus:
        for member in cls:
            if member.value == s:
                return member
        return cls.UNKNOWN


@dataclass
class ReleaseInfo:
    first_deployed: str = ""
    last_deployed: str = ""
    status: ReleaseStatus = ReleaseStatus.UNKNOWN
    description: str = ""
    deleted: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> ReleaseInfo:
        if not d:
            return cls()
        return cls(
            first_deployed=d.get("first_deployed", ""),
            last_deployed=d.get("last_deployed", ""),
            status=ReleaseStatus.from_str(d.get("status", "unknown")),
            description=d.get("description", ""),
            deleted=str(d.get("deleted") or ""),
            notes=d.get("notes", ""),
        )


@dataclass
class ReleaseRecord:
    name: str = ""
    namespace: str = ""
    version: int = 0
    info: ReleaseInfo = field(default_factory=ReleaseInfo)
    chart: ChartSpecification = field(default_factory=ChartSpecification)
    config: dict[str, Any] | str = field(default_factory=dict)

    @property
    def chart_name(self) -> str:
        return self.chart.metadata.name

    @property
    def chart_version(self) -> str:
        return self.chart.metadata.version

    @property
    def app_version(self) -> str:
        return self.chart.metadata.app_version

    @property
    def status(self) -> ReleaseStatus:
        return self.info.status

    @property
    def updated_short(self) -> str:
        """Return a human-readable short timestamp."""
        raw = self.info.last_deployed
        if not raw:
            return ""
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            return dt.strftime("%Y-%m-%d %H:%M:%S")
        except (ValueError, AttributeError):
            return raw[:19] if len(raw) > 19 else raw

    @classmethod
    def from_dict(cls, d: dict) -> ReleaseRecord:
        # The backend sends the revision as a number or a numeric string
        try:
            revision = int(d.get("version") or 0)
        except (TypeError, ValueError):
            revision = 0
        return cls(
            name=d.get("name", ""),
            namespace=d.get("namespace", ""),
            version=revision,
            info=ReleaseInfo.from_dict(d.get("info") or {}),
            chart=ChartSpecification.from_dict(d.get("chart") or {}),
            config=d.get("config") or {},
        )


@dataclass
class HelmChartSpec:
    chart: str = ""
    repo: str = ""
    target_namespace: str = ""
    version: str = ""
    values_content: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> HelmChartSpec:
        if not d:
            return cls()
        return cls(
            chart=d.get("chart", ""),
            repo=d.get("repo", ""),
            target_namespace=d.get("targetNamespace", ""),
            version=d.get("version", ""),
            values_content=d.get("valuesContent") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "chart": self.chart,
            "repo": self.repo,
            "targetNamespace": self.target_namespace,
            "version": self.version,
            "valuesContent": self.values_content,
        }


@dataclass
class HelmChartDescriptor:
    """Backend-tracked HelmChart resource, also the install/upgrade request body."""

    name: str = ""
    namespace: str = ""
    spec: HelmChartSpec = field(default_factory=HelmChartSpec)
    installer_job_completed: bool = False
    installer_job_logs: str = ""
    api_version: str = HELMCHART_API_VERSION
    kind: str = HELMCHART_KIND

    @classmethod
    def from_dict(cls, d: dict) -> HelmChartDescriptor:
        metadata = d.get("metadata") or {}
        return cls(
            name=metadata.get("name", ""),
            namespace=metadata.get("namespace", ""),
            spec=HelmChartSpec.from_dict(d.get("spec") or {}),
            installer_job_completed=d.get("installer_job_completed") is True,
            installer_job_logs=d.get("installer_job_logs") or "",
            api_version=d.get("apiVersion") or HELMCHART_API_VERSION,
            kind=d.get("kind") or HELMCHART_KIND,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {"name": self.name, "namespace": self.namespace},
            "spec": self.spec.to_dict(),
        }
