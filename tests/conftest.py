"""Root conftest - shared test configuration.

Invariants:
    - Every test starts with an empty process-wide relationship cache
    - Settings are re-read from the environment for every test
"""

import os

import pytest

from graphload.config import get_settings
from graphload.core.relationship_cache import relationship_cache

# Ensure tests never touch a developer's database file
os.environ.setdefault("GRAPHLOAD_DATABASE_URL", "sqlite://")


@pytest.fixture(autouse=True)
def _isolate_process_state():
    relationship_cache.clear()
    get_settings.cache_clear()
    yield
    relationship_cache.clear()
    get_settings.cache_clear()
