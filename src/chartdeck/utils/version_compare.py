"""Semver comparison utilities."""

from __future__ import annotations

from packaging.version import InvalidVersion, Version


def parse_version(v: str) -> Version | None:
    """Parse a chart version, tolerating a leading 'v'."""
    if not v:
        return None
    try:
        return Version(v.removeprefix("v"))
    except InvalidVersion:
        return None


def classify_update(current: str, latest: str) -> str:
    """Classify the move from a deployed chart version to the newest available one.

    Returns: "major", "minor", "patch", "up-to-date", or "unknown".
    """
    cur = parse_version(current)
    lat = parse_version(latest)

    if cur is None or lat is None:
        return "unknown"
    if lat <= cur:
        return "up-to-date"
    if lat.major > cur.major:
        return "major"
    if lat.minor > cur.minor:
        return "minor"
    return "patch"
