# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudograde" imports without an install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

SAMPLE_PUZZLE = "096040001100060004504810390007950043030080000405023018010630059059070830003590007"


@pytest.fixture
def sample_puzzle():
    return SAMPLE_PUZZLE


@pytest.fixture
def blank_state():
    """All 81 cells empty with every candidate still open."""
    values = [0] * 81
    cands = [set(range(1, 10)) for _ in range(81)]
    return values, cands


@pytest.fixture
def solved_grid():
    return [[(r * 3 + r // 3 + c) % 9 + 1 for c in range(9)] for r in range(9)]
