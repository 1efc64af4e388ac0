"""Tests for extension-based content dispatch and parse error wrapping."""

import json

import pytest

from i18n_gcs_backend.application.content_dispatcher import (
    detect_format,
    dispatch,
    extension_of,
)
from i18n_gcs_backend.domain.exceptions import ParseError, UnsupportedFormatError
from i18n_gcs_backend.shared.enums import ResourceFormat


@pytest.mark.parametrize(
    ("object_key", "expected"),
    [
        ("nb-NO.json", "json"),
        ("somepath/en-US.json", "json"),
        ("nb-NO.bar", "bar"),
        ("archive.tar.gz", "gz"),
        ("README", ""),
        ("somepath.v2/en-US", ""),
    ],
)
def test_extension_of(object_key: str, expected: str) -> None:
    assert extension_of(object_key) == expected


def test_detect_format_json() -> None:
    assert detect_format("sv-SV/backend.json") is ResourceFormat.JSON


def test_dispatch_parses_json() -> None:
    assert dispatch("nb-NO.json", '{"hello": "Hei"}', json.loads) == {"hello": "Hei"}


def test_dispatch_uses_supplied_parser() -> None:
    assert dispatch("nb-NO.json", "raw", lambda text: {"raw": text}) == {"raw": "raw"}


@pytest.mark.parametrize("content", ['{"hello": "Hei"}', "not json at all", ""])
def test_unsupported_extension_regardless_of_content(content: str) -> None:
    with pytest.raises(UnsupportedFormatError) as exc_info:
        dispatch("nb-NO.bar", content, json.loads)
    assert exc_info.value.details == {"extension": "bar", "object_key": "nb-NO.bar"}


def test_missing_extension_is_unsupported() -> None:
    with pytest.raises(UnsupportedFormatError) as exc_info:
        dispatch("nb-NO", "{}", json.loads)
    assert exc_info.value.details["extension"] == ""


def test_parse_failure_is_wrapped_with_object_key() -> None:
    with pytest.raises(ParseError) as exc_info:
        dispatch("de-DE.json", '{"hello": "Hallo",', json.loads)
    message = str(exc_info.value)
    assert message.startswith("error parsing de-DE.json: ")
    assert "parsing" in message
    assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


def test_custom_parser_failure_is_wrapped() -> None:
    def parse(_: str):
        raise RuntimeError("custom parser failed")

    with pytest.raises(ParseError, match="error parsing x.json: custom parser failed"):
        dispatch("x.json", "{}", parse)
