"""Statement executor for PEP 249 (DB-API 2.0) connections.

Works with drivers whose ``cursor.lastrowid`` is the generated key of the
inserted row, such as ``sqlite3`` and ``PyMySQL``.  Pick the builder's
``paramstyle`` to match the driver's (``sqlite3.paramstyle`` is ``qmark``,
``pymysql.paramstyle`` is ``pyformat`` but accepts ``format``).

Each execute opens one cursor, reads everything it needs from it and closes
it again.  The adapter never commits, rolls back or closes the connection.
"""
from __future__ import annotations

from typing import Any

from fluentql.errors import ExecutionError


class DBAPIResult:
    """Rows and row count read from an executed cursor."""

    def __init__(self, rows: list[dict[str, Any]], rowcount: int) -> None:
        self._rows = rows
        self._rowcount = rowcount

    @property
    def rowcount(self) -> int:
        return self._rowcount

    def rows(self) -> list[dict[str, Any]]:
        return list(self._rows)


class DBAPIPreparedStatement:
    """A statement bound to one connection; each execute opens a cursor."""

    def __init__(self, executor: DBAPIExecutor, text: str) -> None:
        self._executor = executor
        self.text = text

    def execute(self, parameters: list[Any]) -> DBAPIResult:
        cursor = self._executor.connection.cursor()
        try:
            cursor.execute(self.text, tuple(parameters))
            rows: list[dict[str, Any]] = []
            if cursor.description is not None:
                names = [col[0] for col in cursor.description]
                rows = [dict(zip(names, row)) for row in cursor.fetchall()]
            self._executor._last_rowid = getattr(cursor, "lastrowid", None)
            return DBAPIResult(rows, cursor.rowcount)
        finally:
            cursor.close()


class DBAPIExecutor:
    """:class:`~fluentql.execute.protocols.StatementExecutor` for a DB-API connection.

    Args:
        connection: An open PEP 249 connection owned by the caller.
    """

    def __init__(self, connection: Any) -> None:
        self.connection = connection
        self._last_rowid: Any = None

    def prepare(self, text: str) -> DBAPIPreparedStatement:
        return DBAPIPreparedStatement(self, text)

    def last_insert_id(self) -> Any:
        """Return the key generated by the last INSERT.

        Raises:
            ExecutionError: If the driver reported no ``lastrowid``.
        """
        if self._last_rowid is None:
            raise ExecutionError("The driver reported no generated key for the last INSERT.")
        return self._last_rowid
