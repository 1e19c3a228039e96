"""Data models for chartdeck."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class LifecycleMode(enum.Enum):
    INSTALL = "install"
    UPGRADE = "upgrade"
    VIEW = "view"
    REINSTALL = "reinstall"

    @property
    def uses_chart(self) -> bool:
        """True for modes that render a chart specification rather than a deployed release."""
        return self in (LifecycleMode.INSTALL, LifecycleMode.REINSTALL)


@dataclass(frozen=True)
class EditableFields:
    release_name: bool = False
    namespace: bool = False
    version: bool = False
