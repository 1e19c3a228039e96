"""Tests for encoding, version comparison and name validation helpers."""

from __future__ import annotations

import pytest

from chartdeck.core.errors import ValidationError
from chartdeck.utils.encoding import decode_base64, values_to_yaml
from chartdeck.utils.validation import MAX_NAME_LENGTH, is_kubernetes_name, validate_kubernetes_name
from chartdeck.utils.version_compare import classify_update, parse_version

from conftest import encode_base64


def test_decode_base64_reads_utf8_text() -> None:
    assert decode_base64(encode_base64("replicaCount: 1\n")) == "replicaCount: 1\n"


@pytest.mark.parametrize("payload", ["", "not base64!!", "//8="])
def test_decode_base64_returns_empty_for_bad_input(payload: str) -> None:
    assert decode_base64(payload) == ""


def test_values_to_yaml_passes_strings_through() -> None:
    assert values_to_yaml("a: 1\n") == "a: 1\n"


def test_values_to_yaml_keeps_key_order() -> None:
    assert values_to_yaml({"b": 1, "a": {"c": True}}) == "b: 1\na:\n  c: true\n"


@pytest.mark.parametrize("empty", [None, {}])
def test_values_to_yaml_empty(empty: object) -> None:
    assert values_to_yaml(empty) == ""


def test_parse_version_strips_leading_v() -> None:
    assert parse_version("v1.2.3") == parse_version("1.2.3")
    assert parse_version("") is None
    assert parse_version("not-a-version") is None


@pytest.mark.parametrize(
    ("current", "latest", "expected"),
    [
        ("1.0.0", "2.0.0", "major"),
        ("1.0.0", "1.1.0", "minor"),
        ("1.0.0", "1.0.1", "patch"),
        ("1.2.0", "1.2.0", "up-to-date"),
        ("1.3.0", "1.2.0", "up-to-date"),
        ("garbage", "1.2.0", "unknown"),
    ],
)
def test_classify_update(current: str, latest: str, expected: str) -> None:
    assert classify_update(current, latest) == expected


@pytest.mark.parametrize("name", ["my-app", "a", "web1", "x" * MAX_NAME_LENGTH])
def test_valid_kubernetes_names(name: str) -> None:
    assert is_kubernetes_name(name)
    assert validate_kubernetes_name(name) == name


@pytest.mark.parametrize("name", ["My_App", "-app", "app-", "my.app", "my-app\n", "x" * (MAX_NAME_LENGTH + 1)])
def test_invalid_kubernetes_names(name: str) -> None:
    assert not is_kubernetes_name(name)
    with pytest.raises(ValidationError) as exc_info:
        validate_kubernetes_name(name, "namespace")
    assert exc_info.value.field == "namespace"


def test_missing_name_is_reported_as_missing() -> None:
    with pytest.raises(ValidationError, match="release name is required"):
        validate_kubernetes_name("")
