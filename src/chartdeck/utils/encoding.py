"""Base64 / YAML helpers for chart files and release values."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def decode_base64(data: str) -> str:
    """Decode a base64 payload to text.

    Chart files arrive base64-encoded because the backend serializes raw
    bytes.  Undecodable input yields an empty string.
    """
    if not data:
        return ""
    try:
        return base64.b64decode(data.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        logger.debug("Failed to decode base64 payload", exc_info=True)
        return ""


def values_to_yaml(values: Any) -> str:
    """Serialize a values document to YAML.

    Release configs are sometimes already a string (raw valuesContent), in
    which case they pass through untouched.
    """
    if values is None or values == {}:
        return ""
    if isinstance(values, str):
        return values
    return yaml.safe_dump(values, default_flow_style=False, sort_keys=False)
