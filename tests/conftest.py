import sys, os

# Ensure src and the repo root are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
for path in (SRC, ROOT):
    if path not in sys.path:
        sys.path.insert(0, path)

import pytest

from match_engine.events.bus import EventBus
from tests.helpers import CONFIG, ScriptedRandom, stalemate_rows, three_run_rows

__all__ = [
    "CONFIG",
    "ScriptedRandom",
    "stalemate_rows",
    "three_run_rows",
]


@pytest.fixture
def bus():
    return EventBus()
