"""Shared test fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from mongomock_motor import AsyncMongoMockClient

from mongodb_path.repositories.alias_repo import AliasStore
from mongodb_path.repositories.sequence_repo import SequenceRepo


@pytest.fixture
def db():
    """A fresh in-memory database per test."""
    return AsyncMongoMockClient()["mongodb_path_test"]


@pytest.fixture
def store(db) -> AliasStore:
    return AliasStore(db)


@pytest.fixture
def sequences(db) -> SequenceRepo:
    return SequenceRepo(db)


@pytest.fixture
def failing_db():
    """A database whose every collection is the same AsyncMock-backed collection.

    Tests set side effects on `failing_db.col` to simulate store failures.
    """
    col = MagicMock()
    col.find_one_and_update = AsyncMock()
    col.find_one = AsyncMock()
    database = MagicMock()
    database.__getitem__.return_value = col
    database.col = col
    return database
