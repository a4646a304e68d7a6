"""``qmark`` placeholder compiler."""
from __future__ import annotations

from fluentql.compile.base import SQLCompiler


class QmarkCompiler(SQLCompiler):
    """Renders positional parameters as ``?``.

    Compatible with Python's built-in ``sqlite3`` and with SQLAlchemy's
    ``Connection.exec_driver_sql`` on SQLite.
    """

    @property
    def paramstyle(self) -> str:
        return "qmark"

    def param_placeholder(self) -> str:
        return "?"
