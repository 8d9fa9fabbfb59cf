"""
Shared pytest fixtures for string analyzer tests.

Every test gets its own in-memory store, so nothing leaks between tests.
"""

import pytest
from fastapi.testclient import TestClient

from string_analyzer.config import Settings
from string_analyzer.crud import StringStore
from string_analyzer.main import create_app
from string_analyzer.utils import analyze_string


@pytest.fixture
def store():
    """Fresh, empty store."""
    s = StringStore()
    yield s
    s.close()


@pytest.fixture
def add(store):
    """Analyze a value and put it in the store, returning the record."""
    def _add(value: str):
        properties = analyze_string(value)
        return store.create(properties["id"], value, properties)
    return _add


@pytest.fixture
def client(store):
    app = create_app(store=store, settings=Settings())
    with TestClient(app) as c:
        yield c
