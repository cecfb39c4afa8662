"""Format dispatch: maps file extensions and content types to parsers.

The mapping is total. Anything unrecognized is ``RAW_TEXT`` and is returned
verbatim, so callers never see a silent fallthrough.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from src.libs.loader.parsers import parse_delimited, parse_json, parse_markdown_table


class DataFormat(str, Enum):
    JSON = "json"
    DELIMITED = "delimited"
    MARKDOWN_TABLE = "markdown_table"
    RAW_TEXT = "raw_text"


_EXTENSION_FORMATS: dict[str, DataFormat] = {
    "json": DataFormat.JSON,
    "csv": DataFormat.DELIMITED,
    "md": DataFormat.MARKDOWN_TABLE,
}

# Checked in order; the first substring found in the content type wins.
_CONTENT_TYPE_FORMATS: tuple[tuple[str, DataFormat], ...] = (
    ("application/json", DataFormat.JSON),
    ("text/csv", DataFormat.DELIMITED),
)

_DECODERS: dict[DataFormat, Callable[[str], Any]] = {
    DataFormat.JSON: parse_json,
    DataFormat.DELIMITED: parse_delimited,
    DataFormat.MARKDOWN_TABLE: parse_markdown_table,
    DataFormat.RAW_TEXT: lambda text: text,
}


def format_for_extension(extension: str | None) -> DataFormat:
    normalized = (extension or "").strip().lower().lstrip(".")
    return _EXTENSION_FORMATS.get(normalized, DataFormat.RAW_TEXT)


def format_for_content_type(content_type: str | None) -> DataFormat:
    normalized = (content_type or "").lower()
    for marker, data_format in _CONTENT_TYPE_FORMATS:
        if marker in normalized:
            return data_format
    return DataFormat.RAW_TEXT


def decode_content(text: str, data_format: DataFormat) -> Any:
    """Apply the transform registered for ``data_format`` to ``text``."""

    return _DECODERS[data_format](text)
