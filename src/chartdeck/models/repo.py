"""Repository and index models."""

from __future__ import annotations

from dataclasses import dataclass, field

from chartdeck.models.chart import ChartMetadata


@dataclass(frozen=True)
class Repository:
    name: str
    url: str

    @classmethod
    def from_dict(cls, d: dict) -> Repository:
        return cls(name=d.get("name", ""), url=d.get("url", ""))


@dataclass
class RepositoryIndex:
    api_version: str = ""
    entries: dict[str, list[ChartMetadata]] = field(default_factory=dict)

    def versions(self, chart_name: str) -> list[str]:
        """Versions of a chart in index order, empty when the chart is absent."""
        return [c.version for c in self.entries.get(chart_name, [])]

    def latest(self) -> list[ChartMetadata]:
        """The first (current) entry of every chart."""
        return [charts[0] for charts in self.entries.values() if charts]

    @classmethod
    def from_dict(cls, d: dict) -> RepositoryIndex:
        if not d:
            return cls()
        entries = d.get("entries") or {}
        return cls(
            api_version=d.get("apiVersion", ""),
            entries={
                name: [ChartMetadata.from_dict(c) for c in charts or []]
                for name, charts in entries.items()
            },
        )
