"""Test fixtures: a recording statement executor and the sample schema DDL."""

from __future__ import annotations

from typing import Any

SAMPLE_DDL = """
CREATE TABLE users (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    name    TEXT    NOT NULL UNIQUE,
    age     INTEGER,
    email   TEXT,
    team_id INTEGER
);
CREATE TABLE teams (
    id   INTEGER PRIMARY KEY,
    name TEXT NOT NULL
);
"""

SAMPLE_TEAMS = [(1, "core"), (2, "infra")]

SAMPLE_USERS = [
    ("alice", 34, "alice@example.com", 1),
    ("bob", 17, None, 1),
    ("carol", 52, "carol@example.com", 2),
    ("dave", 65, None, None),
    ("erin", 29, "erin@example.com", 2),
]


class FakeResult:
    def __init__(self, rows: list[dict[str, Any]], rowcount: int) -> None:
        self._rows = rows
        self.rowcount = rowcount

    def rows(self) -> list[dict[str, Any]]:
        return list(self._rows)


class FakeStatement:
    def __init__(self, executor: RecordingExecutor, text: str) -> None:
        self._executor = executor
        self.text = text

    def execute(self, parameters: list[Any]) -> FakeResult:
        self._executor.executed.append((self.text, list(parameters)))
        if self._executor.error is not None:
            raise self._executor.error
        return FakeResult(self._executor.rows, self._executor.rowcount)


class RecordingExecutor:
    """Statement executor fake that records every (text, parameters) pair."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        rowcount: int = 0,
        insert_id: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.rowcount = rowcount
        self.insert_id = insert_id
        self.error = error
        self.prepared: list[str] = []
        self.executed: list[tuple[str, list[Any]]] = []

    def prepare(self, text: str) -> FakeStatement:
        self.prepared.append(text)
        return FakeStatement(self, text)

    def last_insert_id(self) -> Any:
        return self.insert_id


class FakeCursor:
    """DB-API cursor fake that records whether it was closed."""

    def __init__(self, connection: FakeConnection) -> None:
        self._connection = connection
        self.closed = False
        self.description: list[tuple[str, ...]] | None = None
        self.rowcount = -1
        self.lastrowid: Any = None

    def execute(self, text: str, parameters: tuple[Any, ...]) -> None:
        self._connection.executed.append((text, parameters))
        if self._connection.error is not None:
            raise self._connection.error
        if self._connection.rows:
            self.description = [(name,) for name in self._connection.rows[0]]
        self.rowcount = self._connection.rowcount
        self.lastrowid = self._connection.lastrowid

    def fetchall(self) -> list[tuple[Any, ...]]:
        return [tuple(row.values()) for row in self._connection.rows]

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """DB-API connection fake that keeps every cursor it hands out."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        rowcount: int = 0,
        lastrowid: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.rows = rows or []
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.error = error
        self.cursors: list[FakeCursor] = []
        self.executed: list[tuple[str, tuple[Any, ...]]] = []

    def cursor(self) -> FakeCursor:
        cursor = FakeCursor(self)
        self.cursors.append(cursor)
        return cursor
