"""Dashboard documents: code block extraction and the new-dashboard template."""

from __future__ import annotations

import re

DEFAULT_BLOCK_LANGUAGE = "dashboard"

DASHBOARD_TEMPLATE = """\
# Dashboard

## Data Visualization

This dashboard shows data produced by loader scripts.

```dashboard
# Inline data
data = [
    {"category": "A", "value": 10},
    {"category": "B", "value": 20},
    {"category": "C", "value": 15},
    {"category": "D", "value": 25},
]
return data
```

## Data from Vault

```dashboard
# Load a file from the vault
return await FileAttachment("data.csv").csv()
```

## External API Example

```dashboard
# Fetch data from an external API
response = await fetch("https://api.example.com/data")
return await response.json()
```
"""


def _block_pattern(language: str) -> re.Pattern[str]:
    return re.compile(rf"```{re.escape(language)}[ \t]*\r?\n(.*?)```", re.DOTALL)


def extract_dashboard_blocks(content: str, language: str = DEFAULT_BLOCK_LANGUAGE) -> list[str]:
    """Return the bodies of all ``language`` fenced code blocks, in order."""

    return [match.group(1).strip() for match in _block_pattern(language).finditer(content)]
