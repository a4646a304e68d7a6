"""``format`` placeholder compiler."""

from __future__ import annotations

from fluentql.compile.base import SQLCompiler


class FormatCompiler(SQLCompiler):
    """Renders positional parameters as ``%s``.

    Parameter style: ``%s`` – compatible with ``psycopg2``, ``psycopg``,
    ``PyMySQL`` and ``mysqlclient`` positional execution.  Literal ``%``
    characters never appear in compiled text because every value is bound.
    """

    @property
    def paramstyle(self) -> str:
        return "format"

    def param_placeholder(self) -> str:
        return "%s"
