"""Shared pytest fixtures for fluentQL unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest

from fluentql import BuilderConfig, QueryBuilder
from tests.fixtures import SAMPLE_DDL, SAMPLE_TEAMS, SAMPLE_USERS, RecordingExecutor


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def qb(executor: RecordingExecutor) -> QueryBuilder:
    """Builder over a recording executor with default (qmark, strict) config."""
    return QueryBuilder(executor)


@pytest.fixture()
def make_builder():
    """Factory for builders with a custom executor and/or config."""

    def _make(executor: Any = None, **config: Any) -> QueryBuilder:
        return QueryBuilder(executor or RecordingExecutor(), BuilderConfig(**config))

    return _make


@pytest.fixture()
def db() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database seeded with the sample users/teams."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(SAMPLE_DDL)
    conn.executemany("INSERT INTO teams VALUES (?, ?)", SAMPLE_TEAMS)
    conn.executemany(
        "INSERT INTO users (name, age, email, team_id) VALUES (?, ?, ?, ?)",
        SAMPLE_USERS,
    )
    yield conn
    conn.close()
