"""Shared pytest fixtures for chainql unit and integration tests."""
from __future__ import annotations

import pytest

from chainql.grammar.postgres import PostgresGrammar
from chainql.grammar.sqlite import SQLiteGrammar
from chainql.query.builder import Builder
from tests.fixtures import RecordingDriver


@pytest.fixture(scope="session")
def pg() -> PostgresGrammar:
    return PostgresGrammar()


@pytest.fixture(scope="session")
def sq() -> SQLiteGrammar:
    return SQLiteGrammar()


@pytest.fixture()
def driver() -> RecordingDriver:
    """Fresh recording driver (postgres dialect) per test."""
    return RecordingDriver()


@pytest.fixture()
def db(driver: RecordingDriver) -> Builder:
    """Root builder with no table selected, bound to ``driver``."""
    return Builder(driver)
