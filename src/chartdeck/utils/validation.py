"""Kubernetes name validation."""

from __future__ import annotations

import re

from chartdeck.core.errors import ValidationError

MAX_NAME_LENGTH = 253
_NAME_RE = re.compile(r"[a-z0-9]([-a-z0-9]*[a-z0-9])?")


def is_kubernetes_name(value: str | None) -> bool:
    return bool(value) and len(value) <= MAX_NAME_LENGTH and _NAME_RE.fullmatch(value) is not None  # type: ignore[arg-type]


def validate_kubernetes_name(value: str | None, field: str = "release name") -> str:
    """Return ``value`` unchanged, or raise ValidationError if it is not a valid resource name."""
    if not value:
        raise ValidationError.missing(field)
    if not is_kubernetes_name(value):
        raise ValidationError.invalid_name(field, value)
    return value
