"""Content dispatch: pick a parser by object-key extension and parse.

Formats form a closed registry keyed by extension. Adding a format means
adding a ResourceFormat member and a registry entry; call sites do not change.
"""

from __future__ import annotations

from typing import Any

from i18n_gcs_backend.core.config import ParseFunction
from i18n_gcs_backend.domain.exceptions import ParseError, UnsupportedFormatError
from i18n_gcs_backend.shared.enums import ResourceFormat

FORMATS_BY_EXTENSION: dict[str, ResourceFormat] = {
    "json": ResourceFormat.JSON,
}


def extension_of(object_key: str) -> str:
    """Text after the last "." of the key's final segment ("" if none)."""
    filename = object_key.rsplit("/", 1)[-1]
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1]


def detect_format(object_key: str) -> ResourceFormat:
    """Return the format for object_key or raise UnsupportedFormatError."""
    extension = extension_of(object_key)
    resource_format = FORMATS_BY_EXTENSION.get(extension)
    if resource_format is None:
        raise UnsupportedFormatError(extension, object_key)
    return resource_format


def dispatch(object_key: str, raw_content: str, parse: ParseFunction) -> Any:
    """Parse raw_content according to the format implied by object_key.

    Args:
        object_key: Key the content was read from; selects the format.
        raw_content: Decoded object content.
        parse: Parser for structured (JSON) content.

    Returns:
        The parser's output.

    Raises:
        UnsupportedFormatError: Extension has no registered format.
        ParseError: The parser failed; message starts with
            "error parsing {object_key}: ".
    """
    resource_format = detect_format(object_key)
    if resource_format is ResourceFormat.JSON:
        try:
            return parse(raw_content)
        except Exception as e:
            raise ParseError(object_key, str(e)) from e
    raise UnsupportedFormatError(extension_of(object_key), object_key)
