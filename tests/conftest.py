"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_beats.core import Beat, Note


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def c5() -> Note:
    return Note("C", 5)


@pytest.fixture
def e5() -> Note:
    return Note("E", 5)


@pytest.fixture
def beat() -> Beat:
    """An empty beat."""
    return Beat()


@pytest.fixture
def library_path() -> Path:
    """Path to the built-in preset library."""
    return Path(__file__).parent.parent / "src" / "chuk_mcp_beats" / "presets" / "library"
