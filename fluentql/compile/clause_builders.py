"""Clause-level SQL builders.

Each class handles exactly one SQL clause.  Builders that bind values
receive the statement's shared :class:`RuntimeContext`, so their
placeholders and parameters interleave correctly with the rest of the
statement.

Classes
-------
SelectClauseBuilder    ``SELECT <columns> FROM <table>``
JoinClauseBuilder      ``<kind> JOIN … ON …``
OrderByClauseBuilder   ``ORDER BY <col> <dir>, …``
LimitClauseBuilder     ``LIMIT <n> [OFFSET <n>]``
InsertClauseBuilder    ``INSERT INTO <table> (<cols>) VALUES (…)``
SetClauseBuilder       ``SET <col> = ?, …``
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fluentql.compile.context import CompilationContext
from fluentql.compile.expression_builder import RuntimeContext
from fluentql.errors import StateError
from fluentql.schema.query_state import JoinSpec, OrderSpec

logger = logging.getLogger(__name__)


class SelectClauseBuilder:
    """Builds the ``SELECT <columns> FROM <table>`` head."""

    def build(self, table: str, columns: list[str]) -> str:
        return f"SELECT {', '.join(columns or ['*'])} FROM {table}"


class JoinClauseBuilder:
    """Builds a single ``<kind> JOIN … ON …`` fragment."""

    def build(self, join: JoinSpec) -> str:
        return f"{join.kind} JOIN {join.table} ON {join.left} {join.operator} {join.right}"


class OrderByClauseBuilder:
    """Builds the ``ORDER BY`` list."""

    def build(self, order_by: list[OrderSpec]) -> str:
        return "ORDER BY " + ", ".join(f"{o.column} {o.direction}" for o in order_by)


class LimitClauseBuilder:
    """Builds ``LIMIT <n>`` and, when a limit is present, ``OFFSET <n>``.

    An OFFSET without a LIMIT raises :class:`StateError` when the context
    is strict; otherwise a warning is logged and the OFFSET is omitted.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, limit: int | None, offset: int | None) -> str:
        if limit is None:
            if offset is not None:
                if self._ctx.strict_offset:
                    raise StateError(
                        f"OFFSET {offset} requires a LIMIT; call limit() as well.",
                        clause="OFFSET",
                    )
                logger.warning("OFFSET %d ignored because no LIMIT is set", offset)
            return ""
        sql = f"LIMIT {limit}"
        if offset is not None:
            sql += f" OFFSET {offset}"
        return sql


class InsertClauseBuilder:
    """Builds ``INSERT INTO <table> (<cols>) VALUES (<placeholders>)``."""

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, table: str, values: Mapping[str, Any]) -> str:
        columns = ", ".join(values)
        placeholders = self._runtime.bind_all(list(values.values()))
        return f"INSERT INTO {table} ({columns}) VALUES ({placeholders})"


class SetClauseBuilder:
    """Builds ``SET <col> = ?, …`` for UPDATE, binding values in mapping order."""

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, values: Mapping[str, Any]) -> str:
        assignments = [f"{col} = {self._runtime.bind(val)}" for col, val in values.items()]
        return "SET " + ", ".join(assignments)
