# tests/conftest.py
import random
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so the top-level modules can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def rng():
    return random.Random(1234)
