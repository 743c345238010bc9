"""Shared fixtures for arraykit tests."""

from __future__ import annotations

import os
import sys

import pytest


@pytest.fixture(autouse=True)
def _add_examples_to_path():
    """Ensure examples/ is importable."""
    examples_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "examples"))
    if examples_dir not in sys.path:
        sys.path.insert(0, examples_dir)
    yield
    if examples_dir in sys.path:
        sys.path.remove(examples_dir)
