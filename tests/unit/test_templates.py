"""Tests for loader templates and template file naming."""

from __future__ import annotations

import pytest

from src.libs.loader.script_sandbox import compile_script
from src.libs.loader.templates import loader_kinds, template_extension, template_for


@pytest.mark.unit
def test_four_kinds_in_order() -> None:
    """Test the available loader kinds."""
    assert loader_kinds() == ["script", "python", "r", "query"]


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind, marker",
    [
        ("script", "await fetch("),
        ("python", "import pandas as pd"),
        ("r", "library(jsonlite)"),
        ("query", "GROUP BY category"),
    ],
)
def test_template_content(kind: str, marker: str) -> None:
    """Test a marker in each template."""
    assert marker in template_for(kind)


@pytest.mark.unit
def test_templates_are_stable() -> None:
    """Test that templates do not change between calls."""
    assert template_for("script") == template_for("script")


@pytest.mark.unit
@pytest.mark.parametrize(
    "kind, extension",
    [("script", "script"), ("python", "python"), ("r", "r"), ("query", "sql")],
)
def test_template_extension(kind: str, extension: str) -> None:
    """Test the file extension per kind."""
    assert template_extension(kind) == extension


@pytest.mark.unit
def test_unknown_kind_lists_available_kinds() -> None:
    """Test the error for an unknown kind."""
    with pytest.raises(ValueError, match="Available kinds: script, python, r, query"):
        template_for("javascript")
    with pytest.raises(ValueError):
        template_extension("javascript")


@pytest.mark.unit
def test_script_template_compiles_in_sandbox() -> None:
    """Test that the script template compiles as a loader script."""
    assert compile_script(template_for("script")) is not None
