"""Aggregated data handed to the presentation layer for one release view."""

from __future__ import annotations

from dataclasses import dataclass, field

from chartdeck.models import LifecycleMode
from chartdeck.models.chart import ChartSpecification
from chartdeck.models.release import HelmChartDescriptor, ReleaseRecord
from chartdeck.utils.encoding import values_to_yaml
from chartdeck.utils.version_compare import classify_update

README_FILE = "readme.md"
VALUES_FILE = "values.yaml"


@dataclass
class AggregatedViewData:
    mode: LifecycleMode
    available_versions: list[str] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)
    release: ReleaseRecord | None = None
    chart: ChartSpecification | None = None
    descriptor: HelmChartDescriptor | None = None
    # Installer job of an existing release has not finished; data comes from the install path
    pending: bool = False
    requested_version: str | None = None

    @property
    def chart_spec(self) -> ChartSpecification | None:
        """The chart being rendered, whether standalone or embedded in the release."""
        if self.chart is not None:
            return self.chart
        if self.release is not None:
            return self.release.chart
        return None

    @property
    def selected_version(self) -> str:
        if self.requested_version:
            return self.requested_version
        return self.available_versions[0] if self.available_versions else ""

    @property
    def readme(self) -> str:
        spec = self.chart_spec
        if spec is None:
            return ""
        f = spec.find_file(README_FILE)
        return f.text if f else ""

    @property
    def values(self) -> str:
        if self.mode is LifecycleMode.INSTALL or (self.pending and self.chart is not None):
            if self.chart is None:
                return ""
            f = self.chart.find_file(VALUES_FILE)
            return f.text if f else ""
        if self.release is not None:
            return values_to_yaml(self.release.config)
        if self.chart is not None:
            return values_to_yaml(self.chart.values)
        return ""

    @property
    def custom_values(self) -> str:
        """Values text a mutation form starts from."""
        if self.release is not None:
            return values_to_yaml(self.release.config)
        if self.descriptor is not None:
            return self.descriptor.spec.values_content
        return ""

    @property
    def update_type(self) -> str:
        if self.release is None or not self.available_versions:
            return "unknown"
        return classify_update(self.release.chart_version, self.available_versions[0])

    @property
    def notice(self) -> str:
        if not self.pending:
            return ""
        verb = "install" if self.mode is LifecycleMode.VIEW else self.mode.value
        return f"{verb} not yet complete"
