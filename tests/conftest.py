"""Pytest configuration for the pilgrimage trip planner."""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that import tirthyatra works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Shared fakes live beside the tests.
TESTS = Path(__file__).resolve().parent
if str(TESTS) not in sys.path:
    sys.path.insert(0, str(TESTS))
