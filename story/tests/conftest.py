from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the story modules importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mindset import HistoricalPerspective, MindsetContext, MindsetStore  # noqa: E402


@pytest.fixture
def store() -> MindsetStore:
    return MindsetStore()


@pytest.fixture
def intel_mindset() -> MindsetContext:
    return MindsetContext(
        year=1971,
        known_technology=["transistor", "integrated circuit"],
        unknown_technology=["internet", "smartphone", "cloud computing"],
        historical_perspective=HistoricalPerspective(
            current_knowledge="You are at Intel",
            future_blind="You do not know the future",
        ),
    )
