"""Tests for dashboard code block extraction."""

from __future__ import annotations

import pytest

from src.core.dashboard import DASHBOARD_TEMPLATE, extract_dashboard_blocks
from src.libs.loader.script_sandbox import compile_script


@pytest.mark.unit
class TestExtractDashboardBlocks:
    """Test dashboard code block extraction."""

    def test_blocks_in_document_order(self) -> None:
        """Test that blocks come back in document order."""
        content = "intro\n```dashboard\nreturn 1\n```\ntext\n```dashboard\n  return 2  \n```\n"
        assert extract_dashboard_blocks(content) == ["return 1", "return 2"]

    def test_other_languages_are_ignored(self) -> None:
        """Test that other fence languages are skipped."""
        content = "```python\nprint(1)\n```\n```dashboards\nx\n```\n```dashboard\nreturn 3\n```"
        assert extract_dashboard_blocks(content) == ["return 3"]

    def test_custom_language(self) -> None:
        """Test extraction with a custom block language."""
        content = "```observable\nconst x = 1\n```"
        assert extract_dashboard_blocks(content, language="observable") == ["const x = 1"]

    def test_no_blocks(self) -> None:
        """Test a document without blocks."""
        assert extract_dashboard_blocks("# Empty\n") == []

    def test_crlf_line_endings(self) -> None:
        """Test CRLF line endings."""
        assert extract_dashboard_blocks("```dashboard\r\nreturn 4\r\n```") == ["return 4"]

    def test_unclosed_block_is_ignored(self) -> None:
        """Test that an unclosed fence is ignored."""
        assert extract_dashboard_blocks("```dashboard\nreturn 5\n") == []


@pytest.mark.unit
def test_template_blocks_are_valid_scripts() -> None:
    """Test that the dashboard template blocks compile as loader scripts."""
    blocks = extract_dashboard_blocks(DASHBOARD_TEMPLATE)
    assert len(blocks) == 3
    for block in blocks:
        compile_script(block)
