"""Predicate SQL compilers.

``PredicateBuilder`` renders one predicate variant; ``PredicateClauseBuilder``
renders a whole WHERE or HAVING clause from an ordered predicate list.

Both receive a :class:`~fluentql.compile.context.CompilationContext`
(static config) and a :class:`RuntimeContext` (per-statement parameter
state).  Every placeholder is emitted through :meth:`RuntimeContext.bind`,
so the parameter list grows in exactly the order placeholders are written.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fluentql.compile.context import CompilationContext
from fluentql.errors import ArgumentError
from fluentql.schema.predicates import (
    BetweenPredicate,
    InPredicate,
    NullPredicate,
    Predicate,
    SimplePredicate,
)


# ---------------------------------------------------------------------------
# Runtime parameter accumulator (shared across all sub-builders in one run)
# ---------------------------------------------------------------------------


@dataclass
class RuntimeContext:
    """Accumulates positional parameters during a single compilation run.

    A single instance is threaded through every sub-builder of one
    statement, so SET values, WHERE values and HAVING values end up in one
    list in text order.
    """

    compiler_ctx: CompilationContext
    parameters: list[Any] = field(default_factory=list)

    def bind(self, value: Any) -> str:
        """Store ``value`` and return the placeholder to write in its place."""
        self.parameters.append(value)
        return self.compiler_ctx.compiler.param_placeholder()

    def bind_all(self, values: list[Any]) -> str:
        """Bind each of ``values`` and return their comma-separated placeholders."""
        return ", ".join(self.bind(v) for v in values)


# ---------------------------------------------------------------------------
# Single predicate
# ---------------------------------------------------------------------------


class PredicateBuilder:
    """Compiles one predicate node to a SQL fragment (without combinator).

    Args:
        runtime: Shared parameter accumulator for this statement.
    """

    def __init__(self, runtime: RuntimeContext) -> None:
        self._runtime = runtime

    def build(self, pred: Predicate) -> str:
        """Compile ``pred`` to SQL, binding its values left to right."""
        if isinstance(pred, SimplePredicate):
            return f"{pred.column} {pred.operator} {self._runtime.bind(pred.value)}"
        if isinstance(pred, InPredicate):
            return f"{pred.column} IN ({self._runtime.bind_all(pred.values)})"
        if isinstance(pred, NullPredicate):
            return f"{pred.column} IS NOT NULL" if pred.negated else f"{pred.column} IS NULL"
        if isinstance(pred, BetweenPredicate):
            low = self._runtime.bind(pred.low)
            high = self._runtime.bind(pred.high)
            return f"{pred.column} BETWEEN {low} AND {high}"
        raise ArgumentError(
            f"Unknown predicate type: {type(pred).__name__}", argument="predicate"
        )


# ---------------------------------------------------------------------------
# WHERE / HAVING clause
# ---------------------------------------------------------------------------


class PredicateClauseBuilder:
    """Builds the body of a WHERE or HAVING clause.

    The first predicate is written without a combinator; each following
    predicate is prefixed with its own combinator, or with ``AND`` when
    ``honor_combinators`` is off (HAVING).  The leading combinator is never
    produced and then removed, so column text is never touched.

    Args:
        runtime: Shared parameter accumulator for this statement.
        honor_combinators: Use each predicate's stored combinator.
    """

    def __init__(self, runtime: RuntimeContext, honor_combinators: bool = True) -> None:
        self._pred = PredicateBuilder(runtime)
        self._honor_combinators = honor_combinators

    def build(self, predicates: list[Predicate]) -> str:
        parts: list[str] = []
        for index, pred in enumerate(predicates):
            fragment = self._pred.build(pred)
            if index == 0:
                parts.append(fragment)
                continue
            combinator = pred.combinator if self._honor_combinators else "AND"
            parts.append(f"{combinator} {fragment}")
        return " ".join(parts)
