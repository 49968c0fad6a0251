from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from director_stub import DirectorStub, ExpectedRequest  # noqa: E402


@pytest.fixture
def director_stub():
    """Factory for an in-process director answering an ordered request list."""

    def _make(*expected: ExpectedRequest) -> DirectorStub:
        return DirectorStub(*expected)

    return _make
