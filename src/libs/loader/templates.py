"""Boilerplate text for new data loaders.

Only ``script`` templates can be executed by the sandbox. The ``python``, ``r``
and ``query`` templates are starting points for external tools and are never
run here.
"""

from __future__ import annotations

_SCRIPT_TEMPLATE = """\
# Dashboard data loader
# Runs in the loader sandbox: only `fetch` and `FileAttachment` are in scope.

response = await fetch("https://api.example.com/data")
data = await response.json()

# Process data
processed = [{"name": item["name"], "value": item["value"]} for item in data]

# Return the processed data
return processed
"""

_PYTHON_TEMPLATE = """\
# Python Data Loader
# This loader processes data using pandas

import pandas as pd
import json

# Read data
df = pd.read_csv("data.csv")

# Process data
result = df.groupby("category").agg({"value": "sum"}).reset_index()

# Output as JSON
print(json.dumps(result.to_dict(orient="records")))
"""

_R_TEMPLATE = """\
# R Data Loader
# This loader processes data using R

library(jsonlite)

# Read data
df <- read.csv("data.csv")

# Process data
result <- aggregate(value ~ category, data=df, sum)

# Output as JSON
cat(toJSON(result, pretty=FALSE, auto_unbox=TRUE))
"""

_QUERY_TEMPLATE = """\
-- SQL Data Loader
-- This loader queries a database

SELECT
    category,
    SUM(value) as total_value
FROM data_table
GROUP BY category
ORDER BY total_value DESC;
"""

_TEMPLATES: dict[str, str] = {
    "script": _SCRIPT_TEMPLATE,
    "python": _PYTHON_TEMPLATE,
    "r": _R_TEMPLATE,
    "query": _QUERY_TEMPLATE,
}

_EXTENSIONS: dict[str, str] = {
    "query": "sql",
}


def loader_kinds() -> list[str]:
    return list(_TEMPLATES)


def _check_kind(kind: str) -> str:
    if kind not in _TEMPLATES:
        available = ", ".join(loader_kinds())
        raise ValueError(f"Unsupported loader kind '{kind}'. Available kinds: {available}")
    return kind


def template_for(kind: str) -> str:
    """Return the boilerplate text for ``kind``."""

    return _TEMPLATES[_check_kind(kind)]


def template_extension(kind: str) -> str:
    """File extension for a loader file of ``kind`` (without the dot).

    ``query`` files use ``sql``; every other kind uses its own name, so
    sandbox scripts are ``.script`` files rather than importable modules.
    """

    return _EXTENSIONS.get(_check_kind(kind), kind)
