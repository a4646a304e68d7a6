"""Core QueryState → SQL compilation logic.

``StatementCompiler`` is the top-level orchestrator.  It wires together the
clause-level and predicate-level sub-builders for one statement and drives
the compilation algorithm.  Placeholder syntax is delegated to the injected
``SQLCompiler``; clause rendering is delegated to the sub-builders.

Sub-builder hierarchy
---------------------
StatementCompiler
  ├── PredicateClauseBuilder  (expression_builder.py)  WHERE / HAVING
  ├── SelectClauseBuilder     (clause_builders.py)
  ├── JoinClauseBuilder       (clause_builders.py)
  ├── OrderByClauseBuilder    (clause_builders.py)
  ├── LimitClauseBuilder      (clause_builders.py)
  ├── InsertClauseBuilder     (clause_builders.py)
  └── SetClauseBuilder        (clause_builders.py)

Parameter alignment
-------------------
A single :class:`~fluentql.compile.expression_builder.RuntimeContext` is
created per compile call and threaded through every sub-builder that binds
values.  Clauses are rendered strictly left to right, so the parameter list
is in placeholder order by construction: SET values before WHERE values,
WHERE values before HAVING values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fluentql.compile.base import CompiledQuery, SQLCompiler
from fluentql.compile.clause_builders import (
    InsertClauseBuilder,
    JoinClauseBuilder,
    LimitClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
    SetClauseBuilder,
)
from fluentql.compile.context import CompilationContext
from fluentql.compile.expression_builder import PredicateClauseBuilder, RuntimeContext
from fluentql.errors import ArgumentError, StateError
from fluentql.schema.query_state import QueryState, Verb

logger = logging.getLogger(__name__)


class StatementCompiler:
    """Compiles a :class:`QueryState` to positional-parameter SQL.

    Args:
        compiler: Placeholder-style compiler instance.
        strict_offset: When ``True`` an OFFSET without LIMIT raises
            :class:`~fluentql.errors.StateError`; otherwise it is dropped
            with a warning.
    """

    def __init__(self, compiler: SQLCompiler, strict_offset: bool = True) -> None:
        self._ctx = CompilationContext(compiler=compiler, strict_offset=strict_offset)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile(
        self,
        state: QueryState,
        verb: Verb | str,
        values: Mapping[str, Any] | None = None,
    ) -> CompiledQuery:
        """Compile ``state`` for ``verb``.

        Args:
            state: The accumulated query state.  Never modified.
            verb: One of :class:`~fluentql.schema.query_state.Verb` (or its
                string value, case-insensitive).
            values: Column → value mapping for INSERT and UPDATE.

        Returns:
            :class:`~fluentql.compile.base.CompiledQuery`.

        Raises:
            ArgumentError: If ``verb`` is not supported, ``values`` is
                empty for INSERT / UPDATE, or given for SELECT / DELETE.
            StateError: If no table is set.
        """
        resolved = _resolve_verb(verb)
        if values is not None and resolved in (Verb.SELECT, Verb.DELETE):
            raise ArgumentError(
                f"{resolved.value} takes no column → value mapping.", argument="values"
            )
        if resolved is Verb.SELECT:
            return self.compile_select(state)
        if resolved is Verb.INSERT:
            return self.compile_insert(state, values or {})
        if resolved is Verb.UPDATE:
            return self.compile_update(state, values or {})
        return self.compile_delete(state)

    def compile_select(self, state: QueryState) -> CompiledQuery:
        table = _require_table(state)
        runtime = RuntimeContext(self._ctx)

        parts: list[str] = [SelectClauseBuilder().build(table, state.columns)]

        join_builder = JoinClauseBuilder()
        for join in state.joins:
            parts.append(join_builder.build(join))

        if state.predicates:
            parts.append(f"WHERE {PredicateClauseBuilder(runtime).build(state.predicates)}")

        if state.group_by:
            parts.append(f"GROUP BY {', '.join(state.group_by)}")

        if state.having_predicates:
            having_builder = PredicateClauseBuilder(runtime, honor_combinators=False)
            parts.append(f"HAVING {having_builder.build(state.having_predicates)}")

        if state.order_by:
            parts.append(OrderByClauseBuilder().build(state.order_by))

        limit_sql = LimitClauseBuilder(self._ctx).build(state.limit, state.offset)
        if limit_sql:
            parts.append(limit_sql)

        return self._finish(" ".join(parts), runtime, Verb.SELECT)

    def compile_insert(self, state: QueryState, values: Mapping[str, Any]) -> CompiledQuery:
        _require_values(values, Verb.INSERT)
        table = _require_table(state)
        runtime = RuntimeContext(self._ctx)
        sql = InsertClauseBuilder(runtime).build(table, values)
        return self._finish(sql, runtime, Verb.INSERT)

    def compile_update(self, state: QueryState, values: Mapping[str, Any]) -> CompiledQuery:
        _require_values(values, Verb.UPDATE)
        table = _require_table(state)
        runtime = RuntimeContext(self._ctx)
        parts = [f"UPDATE {table}", SetClauseBuilder(runtime).build(values)]
        if state.predicates:
            parts.append(f"WHERE {PredicateClauseBuilder(runtime).build(state.predicates)}")
        return self._finish(" ".join(parts), runtime, Verb.UPDATE)

    def compile_delete(self, state: QueryState) -> CompiledQuery:
        table = _require_table(state)
        runtime = RuntimeContext(self._ctx)
        parts = [f"DELETE FROM {table}"]
        if state.predicates:
            parts.append(f"WHERE {PredicateClauseBuilder(runtime).build(state.predicates)}")
        return self._finish(" ".join(parts), runtime, Verb.DELETE)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _finish(self, sql: str, runtime: RuntimeContext, verb: Verb) -> CompiledQuery:
        logger.debug("compiled %s (%d params): %s", verb.value, len(runtime.parameters), sql)
        return CompiledQuery(text=sql, parameters=runtime.parameters, verb=verb)


def _resolve_verb(verb: Verb | str) -> Verb:
    if isinstance(verb, Verb):
        return verb
    try:
        return Verb(str(verb).upper())
    except ValueError as exc:
        supported = [v.value for v in Verb]
        raise ArgumentError(
            f"Unsupported verb: '{verb}'. Supported verbs: {supported}.",
            argument="verb",
        ) from exc


def _require_table(state: QueryState) -> str:
    if not state.table:
        raise StateError("No table set; call table() before a terminal operation.", clause="FROM")
    return state.table


def _require_values(values: Mapping[str, Any], verb: Verb) -> None:
    if not isinstance(values, Mapping) or not values:
        raise ArgumentError(
            f"{verb.value} requires a non-empty column → value mapping.",
            argument="values",
        )
