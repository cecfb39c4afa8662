"""Text -> record parsers for delimited text, Markdown tables and JSON.

The tabular parsers never raise: malformed numeric cells fall back to strings
and short rows produce records missing their trailing keys. Only JSON decoding
is a hard error.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Sequence

from src.core.errors import ParseError
from src.core.types import Record, Scalar, TabularResult

# Non-empty decimal number: optional sign, digits with optional fraction
# (or a bare fraction), optional exponent.
_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def is_numeric(value: str) -> bool:
    return bool(value) and _NUMBER_RE.fullmatch(value) is not None


def coerce_cell(value: str) -> Scalar:
    """Return ``value`` as int/float when it is a decimal number, else unchanged.

    Numbers Python cannot represent as a finite value (integers past the
    int-string digit limit, floats that overflow to infinity) stay strings.
    """

    if not is_numeric(value):
        return value
    try:
        if not any(ch in value for ch in ".eE"):
            return int(value)
        number = float(value)
    except ValueError:
        return value
    return number if math.isfinite(number) else value


def _to_record(headers: Sequence[str], values: Sequence[str]) -> Record:
    # zip() stops at the shorter side: extra values are dropped and missing
    # trailing values become absent keys.
    return {header: coerce_cell(value) for header, value in zip(headers, values)}


def parse_delimited(text: str) -> TabularResult:
    """Parse comma-delimited text with a header row into records."""

    content = text.strip()
    if not content:
        return []

    lines = content.split("\n")
    headers = [cell.strip() for cell in lines[0].split(",")]

    records: TabularResult = []
    for line in lines[1:]:
        values = [cell.strip() for cell in line.split(",")]
        records.append(_to_record(headers, values))
    return records


def _split_pipe_row(line: str) -> list[str]:
    return [cell.strip() for cell in line.split("|") if cell.strip()]


def parse_markdown_table(text: str) -> TabularResult:
    """Parse the first Markdown table found in ``text`` into records.

    The table is the first contiguous run of lines starting with ``|``; the
    second line of the run is treated as the separator row and skipped.
    """

    table_lines: list[str] = []
    for line in text.split("\n"):
        if line.strip().startswith("|"):
            table_lines.append(line)
        elif table_lines:
            break

    if len(table_lines) < 2:
        return []

    headers = _split_pipe_row(table_lines[0])

    records: TabularResult = []
    for line in table_lines[2:]:
        values = _split_pipe_row(line)
        if not values:
            continue
        records.append(_to_record(headers, values))
    return records


def parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as error:
        raise ParseError(f"Invalid JSON: {error}") from error
