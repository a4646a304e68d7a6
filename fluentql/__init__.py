"""fluentQL – a fluent SQL query builder with positional parameter binding.

Chain clauses. Bind in order.

Public API
----------
``QueryBuilder``
    Accumulates clauses through chained calls and, on ``get`` / ``first`` /
    ``insert`` / ``update`` / ``delete``, compiles them to SQL plus an
    aligned parameter list and runs it through a statement executor.

``compile_query``
    Compile a ``QueryState`` for one verb without a builder or executor.

Re-exported types
-----------------
``QueryState``, ``CompiledQuery``, ``BuilderConfig``, the executor adapters
and protocols, and all error classes.

Extensibility
-------------
New placeholder styles can be registered via::

    from fluentql.compile.registry import CompilerFactory

    @CompilerFactory.register("numeric")
    class NumericCompiler(SQLCompiler):
        ...

After registration, ``BuilderConfig(paramstyle="numeric")`` picks it up
automatically.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fluentql.compile.base import CompiledQuery, SQLCompiler
from fluentql.compile.builder import StatementCompiler
from fluentql.compile.format import FormatCompiler
from fluentql.compile.qmark import QmarkCompiler
from fluentql.compile.registry import CompilerFactory
from fluentql.config import BuilderConfig
from fluentql.errors import (
    ArgumentError,
    ExecutionError,
    FluentQLError,
    StateError,
)
from fluentql.execute.dbapi import DBAPIExecutor
from fluentql.execute.dispatch import dispatch
from fluentql.execute.protocols import (
    PreparedStatement,
    StatementExecutor,
    StatementResult,
)
from fluentql.execute.sqlalchemy_executor import SQLAlchemyExecutor
from fluentql.query.builder import QueryBuilder
from fluentql.schema.predicates import (
    BetweenPredicate,
    InPredicate,
    NullPredicate,
    Predicate,
    SimplePredicate,
)
from fluentql.schema.query_state import JoinSpec, OrderSpec, QueryState, Verb

# ---------------------------------------------------------------------------
# Register built-in compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("qmark", QmarkCompiler)
CompilerFactory.register_class("format", FormatCompiler)

__all__ = [
    # Core
    "QueryBuilder",
    "compile_query",
    "BuilderConfig",
    # State types
    "QueryState",
    "JoinSpec",
    "OrderSpec",
    "Verb",
    "Predicate",
    "SimplePredicate",
    "InPredicate",
    "NullPredicate",
    "BetweenPredicate",
    # Compilation
    "CompiledQuery",
    "SQLCompiler",
    "StatementCompiler",
    "CompilerFactory",
    "QmarkCompiler",
    "FormatCompiler",
    # Execution
    "StatementExecutor",
    "PreparedStatement",
    "StatementResult",
    "DBAPIExecutor",
    "SQLAlchemyExecutor",
    "dispatch",
    # Errors
    "FluentQLError",
    "ArgumentError",
    "StateError",
    "ExecutionError",
]


def compile_query(
    state: QueryState,
    verb: Verb | str = Verb.SELECT,
    values: Mapping[str, Any] | None = None,
    config: BuilderConfig | None = None,
) -> CompiledQuery:
    """Compile ``state`` for ``verb`` without executing anything::

        state = QueryState(table="users", limit=10)
        compiled = fluentql.compile_query(state)
        cursor.execute(compiled.text, compiled.parameters)

    Args:
        state: The query state to compile.  Not modified.
        verb: ``SELECT`` (default), ``INSERT``, ``UPDATE`` or ``DELETE``.
        values: Column → value mapping for INSERT / UPDATE.
        config: Optional builder configuration (paramstyle, strict OFFSET).

    Returns:
        ``CompiledQuery`` with ``text`` and aligned ``parameters``.

    Raises:
        ArgumentError: For an unsupported verb or paramstyle, or an empty
            INSERT / UPDATE payload.
        StateError: If ``state`` has no table, or an OFFSET without LIMIT
            under ``strict_offset``.
    """
    if config is None:
        config = BuilderConfig()
    return config.statement_compiler().compile(state, verb, values)
