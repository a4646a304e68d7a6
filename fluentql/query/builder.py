"""Fluent query builder: clause accumulation plus terminal operations.

Every mutator records into the builder's :class:`QueryState` and returns the
same builder, so calls chain::

    users = (
        QueryBuilder(executor)
        .table("users")
        .select("id", "name")
        .where("active", 1)
        .or_where("role", "=", "admin")
        .order_by("name")
        .limit(10)
        .get()
    )

Mutators validate their own arguments and raise
:class:`~fluentql.errors.ArgumentError` before recording anything.
Cross-clause checks (a table is set, OFFSET has a LIMIT) happen when a
terminal operation compiles the state.

The builder keeps its state after a terminal call; call :meth:`reset` (or
set ``BuilderConfig.auto_reset``) before building an unrelated statement.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fluentql.compile.base import CompiledQuery
from fluentql.config import BuilderConfig
from fluentql.errors import ArgumentError
from fluentql.execute.dbapi import DBAPIExecutor
from fluentql.execute.dispatch import dispatch
from fluentql.execute.protocols import StatementExecutor
from fluentql.schema.predicates import (
    COMPARISON_OPERATORS,
    BetweenPredicate,
    Combinator,
    InPredicate,
    NullPredicate,
    Predicate,
    SimplePredicate,
)
from fluentql.schema.query_state import (
    DIRECTIONS,
    JOIN_KINDS,
    JoinSpec,
    OrderSpec,
    QueryState,
    Verb,
)


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


_MISSING: Any = _Missing()


class QueryBuilder:
    """Accumulates clauses for one statement and executes it.

    Args:
        executor: Statement executor collaborator.  The builder neither owns
            nor closes the handle behind it.
        config: Optional :class:`~fluentql.config.BuilderConfig`; defaults
            to ``BuilderConfig()`` (``qmark`` placeholders, strict OFFSET).
    """

    def __init__(
        self,
        executor: StatementExecutor,
        config: BuilderConfig | None = None,
    ) -> None:
        self._executor = executor
        self._config = config or BuilderConfig()
        self._compiler = self._config.statement_compiler()
        self._state = QueryState()
        self._last_compiled: CompiledQuery | None = None

    @classmethod
    def for_connection(
        cls,
        connection: Any,
        config: BuilderConfig | None = None,
    ) -> "QueryBuilder":
        """Return a builder executing through a PEP 249 ``connection``."""
        return cls(DBAPIExecutor(connection), config)

    @property
    def state(self) -> QueryState:
        """The accumulated state.  Mutate it only through the builder."""
        return self._state

    @property
    def config(self) -> BuilderConfig:
        return self._config

    # ------------------------------------------------------------------
    # Clause accumulation
    # ------------------------------------------------------------------

    def table(self, name: str) -> "QueryBuilder":
        """Set the target table."""
        self._state.table = name
        return self

    def select(self, *columns: str | Sequence[str]) -> "QueryBuilder":
        """Replace the selected columns.

        Accepts varargs (``select("id", "name")``) or a single list.  Calling
        with nothing restores ``*``.
        """
        if len(columns) == 1 and isinstance(columns[0], (list, tuple)):
            columns = tuple(columns[0])
        self._state.columns = [str(c) for c in columns] or ["*"]
        return self

    def where(
        self,
        column: str | Mapping[str, Any],
        operator: Any = _MISSING,
        value: Any = _MISSING,
    ) -> "QueryBuilder":
        """Add an ``AND`` predicate.

        ``where("age", ">", 18)``, ``where("id", 5)`` (implies ``=``), or
        ``where({"status": "open", "owner": 3})`` for one ``=`` predicate per
        entry in mapping order.
        """
        self._state.predicates.extend(self._comparisons(column, operator, value, "AND"))
        return self

    def or_where(
        self,
        column: str | Mapping[str, Any],
        operator: Any = _MISSING,
        value: Any = _MISSING,
    ) -> "QueryBuilder":
        """Same as :meth:`where` but joined with ``OR``.

        As the first predicate of the clause it behaves like :meth:`where`.
        """
        self._state.predicates.extend(self._comparisons(column, operator, value, "OR"))
        return self

    def where_in(self, column: str, values: Iterable[Any]) -> "QueryBuilder":
        """Add ``column IN (?, …)``, one parameter per value."""
        if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
            raise ArgumentError(
                f"where_in('{column}') expects a list of values, got {type(values).__name__}.",
                argument="values",
            )
        items = list(values)
        if not items:
            raise ArgumentError(
                f"where_in('{column}') needs at least one value.", argument="values"
            )
        self._state.predicates.append(InPredicate(column=column, values=items))
        return self

    def where_null(self, column: str) -> "QueryBuilder":
        """Add ``column IS NULL``."""
        self._state.predicates.append(NullPredicate(column=column))
        return self

    def where_not_null(self, column: str) -> "QueryBuilder":
        """Add ``column IS NOT NULL``."""
        self._state.predicates.append(NullPredicate(column=column, negated=True))
        return self

    def where_between(self, column: str, bounds: Sequence[Any]) -> "QueryBuilder":
        """Add ``column BETWEEN ? AND ?`` from a ``[low, high]`` pair."""
        if isinstance(bounds, (str, bytes)) or not isinstance(bounds, Sequence) or len(bounds) != 2:
            raise ArgumentError(
                f"where_between('{column}') expects exactly two values [low, high], "
                f"got {bounds!r}.",
                argument="bounds",
            )
        low, high = bounds
        self._state.predicates.append(BetweenPredicate(column=column, low=low, high=high))
        return self

    def join(
        self,
        table: str,
        left: str,
        operator: str = _MISSING,
        right: str = _MISSING,
        kind: str = "INNER",
    ) -> "QueryBuilder":
        """Add ``<kind> JOIN table ON left operator right``.

        ``join("orders", "users.id", "orders.user_id")`` implies ``=``.
        """
        if right is _MISSING:
            if operator is _MISSING:
                raise ArgumentError(
                    f"join('{table}') needs a right-hand ON expression.", argument="right"
                )
            operator, right = "=", operator
        join_kind = str(kind).upper()
        if join_kind not in JOIN_KINDS:
            raise ArgumentError(
                f"Unsupported join kind '{kind}'. Allowed: {sorted(JOIN_KINDS)}.",
                argument="kind",
            )
        self._state.joins.append(
            JoinSpec(
                table=table,
                left=left,
                operator=_normalize_operator(operator),
                right=right,
                kind=join_kind,
            )
        )
        return self

    def left_join(
        self,
        table: str,
        left: str,
        operator: str = _MISSING,
        right: str = _MISSING,
    ) -> "QueryBuilder":
        """Add ``LEFT JOIN``; see :meth:`join`."""
        return self.join(table, left, operator, right, kind="LEFT")

    def right_join(
        self,
        table: str,
        left: str,
        operator: str = _MISSING,
        right: str = _MISSING,
    ) -> "QueryBuilder":
        """Add ``RIGHT JOIN``; see :meth:`join`."""
        return self.join(table, left, operator, right, kind="RIGHT")

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """Append ``column ASC|DESC`` to ORDER BY."""
        normalized = str(direction).upper()
        if normalized not in DIRECTIONS:
            raise ArgumentError(
                f"Invalid order direction '{direction}'. Use 'ASC' or 'DESC'.",
                argument="direction",
            )
        self._state.order_by.append(OrderSpec(column=column, direction=normalized))
        return self

    def group_by(self, *columns: str | Sequence[str]) -> "QueryBuilder":
        """Append GROUP BY columns; repeated calls accumulate."""
        if len(columns) == 1 and isinstance(columns[0], (list, tuple)):
            columns = tuple(columns[0])
        self._state.group_by.extend(str(c) for c in columns)
        return self

    def having(
        self,
        column: str | Mapping[str, Any],
        operator: Any = _MISSING,
        value: Any = _MISSING,
    ) -> "QueryBuilder":
        """Add a HAVING predicate; same call forms as :meth:`where`.

        HAVING predicates are always joined with ``AND``.
        """
        self._state.having_predicates.extend(self._comparisons(column, operator, value, "AND"))
        return self

    def limit(self, n: int) -> "QueryBuilder":
        """Set LIMIT."""
        self._state.limit = _non_negative_int(n, "limit")
        return self

    def offset(self, n: int) -> "QueryBuilder":
        """Set OFFSET.  Compiling requires a LIMIT unless ``strict_offset`` is off."""
        self._state.offset = _non_negative_int(n, "offset")
        return self

    def reset(self) -> "QueryBuilder":
        """Discard every registered clause and the last compiled query."""
        self._state = QueryState()
        self._last_compiled = None
        return self

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    def compile(
        self,
        verb: Verb | str = Verb.SELECT,
        values: Mapping[str, Any] | None = None,
    ) -> CompiledQuery:
        """Compile the current state for ``verb`` without executing it."""
        self._last_compiled = self._compiler.compile(self._state, verb, values)
        return self._last_compiled

    def get(self) -> list[dict[str, Any]]:
        """Execute the SELECT and return every row (``[]`` when none match)."""
        return self._run(self.compile(Verb.SELECT))

    def first(self) -> dict[str, Any] | None:
        """Execute the SELECT with ``LIMIT 1``; ``None`` when no row matches.

        The builder's own LIMIT is left as it was; an explicit ``limit(0)``
        still fetches nothing.
        """
        limit = 1 if self._state.limit is None else min(self._state.limit, 1)
        compiled = self._compiler.compile_select(self._state.model_copy(update={"limit": limit}))
        self._last_compiled = compiled
        rows = self._run(compiled)
        return rows[0] if rows else None

    def insert(self, values: Mapping[str, Any]) -> Any:
        """Insert one row and return its generated identity key."""
        return self._run(self.compile(Verb.INSERT, values))

    def update(self, values: Mapping[str, Any]) -> int:
        """Update rows matching the WHERE clause; return the affected count."""
        return self._run(self.compile(Verb.UPDATE, values))

    def delete(self) -> int:
        """Delete rows matching the WHERE clause; return the affected count."""
        return self._run(self.compile(Verb.DELETE))

    def to_sql(self) -> dict[str, Any]:
        """Return ``{"query": text, "params": [...]}`` without executing.

        Shows the most recently compiled statement; before any compile it
        previews the current state as a SELECT, or an empty query while no
        table is set.
        """
        if self._last_compiled is None and not self._state.table:
            return {"query": "", "params": []}
        compiled = self._last_compiled or self._compiler.compile_select(self._state)
        return compiled.to_dict()

    get_query = to_sql

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _run(self, compiled: CompiledQuery) -> Any:
        result = dispatch(self._executor, compiled)
        if self._config.auto_reset:
            self._state = QueryState()
        return result

    @staticmethod
    def _comparisons(
        column: str | Mapping[str, Any],
        operator: Any,
        value: Any,
        combinator: Combinator,
    ) -> list[Predicate]:
        if isinstance(column, Mapping):
            if operator is not _MISSING or value is not _MISSING:
                raise ArgumentError(
                    "A column → value mapping cannot be combined with operator/value.",
                    argument="column",
                )
            return [
                SimplePredicate(combinator=combinator, column=col, operator="=", value=val)
                for col, val in column.items()
            ]
        if value is _MISSING:
            if operator is _MISSING:
                raise ArgumentError(f"No value given for column '{column}'.", argument="value")
            operator, value = "=", operator
        return [
            SimplePredicate(
                combinator=combinator,
                column=column,
                operator=_normalize_operator(operator),
                value=value,
            )
        ]


def _normalize_operator(operator: Any) -> str:
    normalized = " ".join(str(operator).upper().split())
    if normalized not in COMPARISON_OPERATORS:
        raise ArgumentError(
            f"Unsupported operator '{operator}'. Allowed: {sorted(COMPARISON_OPERATORS)}.",
            argument="operator",
        )
    return normalized


def _non_negative_int(n: Any, argument: str) -> int:
    if isinstance(n, bool) or not isinstance(n, int):
        raise ArgumentError(f"{argument} must be an integer, got {n!r}.", argument=argument)
    if n < 0:
        raise ArgumentError(f"{argument} must be non-negative, got {n}.", argument=argument)
    return n
