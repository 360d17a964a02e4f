"""Shared pytest fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from database import init_db, dispose_engine, StateStorage, MemoryStorage
from state import QuoteBuilder


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database file per test."""
    dispose_engine()
    init_db(f"sqlite:///{tmp_path / 'test_quote_builder.db'}")
    yield tmp_path
    dispose_engine()


@pytest.fixture
def storage(db):
    return StateStorage()


@pytest.fixture
def memory_storage():
    return MemoryStorage()


@pytest.fixture
def builder(memory_storage):
    """QuoteBuilder on in-memory storage with default settings."""
    return QuoteBuilder(memory_storage)
