"""Chart specification models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from chartdeck.utils.encoding import decode_base64


@dataclass
class Maintainer:
    name: str = ""
    email: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Maintainer:
        return cls(
            name=d.get("name", ""),
            email=d.get("email", ""),
            url=d.get("url", ""),
        )


@dataclass
class ChartDependency:
    name: str = ""
    version: str = ""
    repository: str = ""
    condition: str = ""
    alias: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> ChartDependency:
        return cls(
            name=d.get("name", ""),
            version=d.get("version", ""),
            repository=d.get("repository", ""),
            condition=d.get("condition", ""),
            alias=d.get("alias", ""),
            tags=d.get("tags") or [],
        )


@dataclass
class ChartMetadata:
    name: str = ""
    version: str = ""
    app_version: str = ""
    description: str = ""
    api_version: str = ""
    home: str = ""
    icon: str = ""
    created: str = ""
    digest: str = ""
    keywords: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    urls: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    dependencies: list[ChartDependency] = field(default_factory=list)
    annotations: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> ChartMetadata:
        if not d:
            return cls()
        return cls(
            name=d.get("name", ""),
            version=d.get("version", ""),
            app_version=d.get("appVersion", ""),
            description=d.get("description", ""),
            api_version=d.get("apiVersion", ""),
            home=d.get("home", ""),
            icon=d.get("icon", ""),
            created=d.get("created", ""),
            digest=d.get("digest", ""),
            keywords=d.get("keywords") or [],
            sources=d.get("sources") or [],
            urls=d.get("urls") or [],
            maintainers=[Maintainer.from_dict(m) for m in d.get("maintainers") or []],
            dependencies=[ChartDependency.from_dict(dep) for dep in d.get("dependencies") or []],
            annotations=d.get("annotations") or {},
        )


@dataclass
class ChartFile:
    name: str = ""
    data: str = ""  # base64, as transported by the backend

    @property
    def text(self) -> str:
        return decode_base64(self.data)

    @classmethod
    def from_dict(cls, d: dict) -> ChartFile:
        return cls(name=d.get("name", ""), data=d.get("data") or "")


@dataclass
class ChartLock:
    digest: str = ""
    generated: str = ""
    dependencies: list[ChartDependency] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict | None) -> ChartLock:
        if not d:
            return cls()
        return cls(
            digest=d.get("digest", ""),
            generated=d.get("generated", ""),
            dependencies=[ChartDependency.from_dict(dep) for dep in d.get("dependencies") or []],
        )


@dataclass
class ChartSpecification:
    metadata: ChartMetadata = field(default_factory=ChartMetadata)
    values: dict[str, Any] = field(default_factory=dict)
    files: list[ChartFile] = field(default_factory=list)
    templates: list[ChartFile] = field(default_factory=list)
    lock: ChartLock = field(default_factory=ChartLock)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def version(self) -> str:
        return self.metadata.version

    def find_file(self, name: str) -> ChartFile | None:
        """Return the first embedded file whose name matches case-insensitively."""
        wanted = name.lower()
        for f in self.files:
            if f.name.lower() == wanted:
                return f
        return None

    @classmethod
    def from_dict(cls, d: dict) -> ChartSpecification:
        if not d:
            return cls()
        return cls(
            metadata=ChartMetadata.from_dict(d.get("metadata") or {}),
            values=d.get("values") or {},
            files=[ChartFile.from_dict(f) for f in d.get("files") or []],
            templates=[ChartFile.from_dict(t) for t in d.get("templates") or []],
            lock=ChartLock.from_dict(d.get("lock")),
        )
