"""Statement executor for SQLAlchemy connections.

Compiled text is passed to :meth:`sqlalchemy.engine.Connection.exec_driver_sql`
unchanged, so the builder's ``paramstyle`` must match the underlying DBAPI
(``qmark`` for the ``sqlite`` dialect, ``format`` for ``pymysql``).  ``insert()``
returns ``CursorResult.lastrowid``, so it needs a DBAPI that reports the
generated key there.

Install the optional dependency before using this module::

    pip install "fluentql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from fluentql import QueryBuilder
    from fluentql.execute.sqlalchemy_executor import SQLAlchemyExecutor

    engine = create_engine("sqlite:///app.db")
    with engine.begin() as conn:
        rows = QueryBuilder(SQLAlchemyExecutor(conn)).table("users").get()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fluentql.errors import ExecutionError

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult


class SQLAlchemyResult:
    """Wraps a :class:`~sqlalchemy.engine.CursorResult`."""

    def __init__(self, result: CursorResult) -> None:
        self._result = result

    @property
    def rowcount(self) -> int:
        return self._result.rowcount

    def rows(self) -> list[dict[str, Any]]:
        if not self._result.returns_rows:
            return []
        return [dict(row) for row in self._result.mappings().all()]


class SQLAlchemyPreparedStatement:
    def __init__(self, executor: SQLAlchemyExecutor, text: str) -> None:
        self._executor = executor
        self.text = text

    def execute(self, parameters: list[Any]) -> SQLAlchemyResult:
        result = self._executor.connection.exec_driver_sql(self.text, tuple(parameters))
        if not result.returns_rows:
            self._executor._last_rowid = result.lastrowid
        return SQLAlchemyResult(result)


class SQLAlchemyExecutor:
    """:class:`~fluentql.execute.protocols.StatementExecutor` for a SQLAlchemy connection.

    Args:
        connection: A :class:`sqlalchemy.engine.Connection` owned by the
            caller.  Transaction boundaries (``engine.begin()``,
            ``conn.commit()``) stay with the caller.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection
        self._last_rowid: Any = None

    def prepare(self, text: str) -> SQLAlchemyPreparedStatement:
        return SQLAlchemyPreparedStatement(self, text)

    def last_insert_id(self) -> Any:
        if self._last_rowid is None:
            raise ExecutionError("The driver reported no generated key for the last INSERT.")
        return self._last_rowid
