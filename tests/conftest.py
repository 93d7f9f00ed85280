"""Pytest configuration and fixtures."""

import io

import pytest
from rich.console import Console


@pytest.fixture
def make_file(tmp_path):
    """Factory writing content to a temporary text file and returning its path."""

    def _make(content, name="test.txt", encoding="utf-8"):
        path = tmp_path / name
        path.write_bytes(content.encode(encoding))
        return path

    return _make


@pytest.fixture
def console():
    """A plain-text console that records what the previewer prints."""
    return Console(file=io.StringIO(), color_system=None, highlight=False, width=200)