from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: sample tree listings, built hierarchies, a manual
   clock for transition playback and a complete configuration dictionary.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from gitscape.core.analysis.tree_builder import build_diagram_tree  # noqa: E402
from gitscape.domain.config import get_default_config  # noqa: E402
from gitscape.domain.diagram_models import DiagramNode, PathEntry  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "gui: tests touching the customtkinter interface layer")


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
class ManualClock:
    """Deterministic clock for TransitionPlayer; advance it explicitly."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_entries() -> List[PathEntry]:
    """Two files, one nested one level deeper."""
    return [
        PathEntry(path="a/b.txt", kind="blob", size=10),
        PathEntry(path="a/c/d.txt", kind="blob", size=20),
    ]


@pytest.fixture
def sample_root(sample_entries: List[PathEntry]) -> DiagramNode:
    return build_diagram_tree(sample_entries, "org/repo")


@pytest.fixture
def wide_entries() -> List[PathEntry]:
    """A small but realistic repository listing with nested directories."""
    return [
        PathEntry("README.md", "blob", 1200),
        PathEntry("setup.py", "blob", 800),
        PathEntry("docs", "tree"),
        PathEntry("docs/index.md", "blob", 300),
        PathEntry("src/pkg/__init__.py", "blob", 0),
        PathEntry("src/pkg/core.py", "blob", 5400),
        PathEntry("src/pkg/util/helpers.py", "blob", 900),
        PathEntry("tests/test_core.py", "blob", 2100),
    ]


@pytest.fixture
def wide_root(wide_entries: List[PathEntry]) -> DiagramNode:
    return build_diagram_tree(wide_entries, "octo/project")


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """A valid, complete configuration dictionary."""
    return get_default_config()
