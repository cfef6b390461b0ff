import os
import sys

import pytest

# Add src to path so tests can run without installing package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from turbobloom import BloomFilter


@pytest.fixture(autouse=True)
def reset_debug():
    """Debug output is class-level state; keep it off between tests."""
    BloomFilter.set_debug(False)
    yield
    BloomFilter.set_debug(False)


@pytest.fixture
def filled_filter():
    """A filter sized for 1000 items holding member-0 .. member-999."""
    bf = BloomFilter(1000, 0.01)
    for i in range(1000):
        bf.set(f"member-{i}")
    return bf
