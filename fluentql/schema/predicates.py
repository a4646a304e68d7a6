"""Pydantic models for WHERE / HAVING predicate nodes.

Each predicate is a tagged variant discriminated by ``kind`` and carries its
own ``combinator``.  The combinator of the first predicate in a clause is
never rendered; position in the list decides that, not the stored value.

Placeholder contribution per variant
------------------------------------
``SimplePredicate``   one (``col op ?``)
``InPredicate``       one per value (``col IN (?, ?, …)``)
``NullPredicate``     none (``col IS [NOT] NULL``)
``BetweenPredicate``  two, low then high (``col BETWEEN ? AND ?``)
"""
from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

#: Logical join placed between two predicates.
Combinator = Literal["AND", "OR"]

#: Comparison operators accepted by ``where`` / ``or_where`` / ``having``.
COMPARISON_OPERATORS: frozenset[str] = frozenset(
    {"=", "!=", "<>", "<", "<=", ">", ">=", "LIKE", "NOT LIKE", "ILIKE"}
)


class SimplePredicate(BaseModel):
    """``column <operator> ?`` with a single bound value.

    Attributes:
        combinator: ``AND`` or ``OR``.
        column: Column expression, emitted verbatim.
        operator: One of :data:`COMPARISON_OPERATORS`.
        value: The bound value.
    """

    model_config = ConfigDict(extra="forbid")

    kind: Literal["simple"] = "simple"
    combinator: Combinator = "AND"
    column: str
    operator: str = "="
    value: Any = None


class InPredicate(BaseModel):
    """``column IN (?, ?, …)``; each value is its own parameter."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["in"] = "in"
    combinator: Combinator = "AND"
    column: str
    values: list[Any]


class NullPredicate(BaseModel):
    """``column IS NULL`` or, when ``negated``, ``column IS NOT NULL``."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["null"] = "null"
    combinator: Combinator = "AND"
    column: str
    negated: bool = False


class BetweenPredicate(BaseModel):
    """``column BETWEEN ? AND ?`` bound as ``(low, high)``."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["between"] = "between"
    combinator: Combinator = "AND"
    column: str
    low: Any
    high: Any


Predicate = Annotated[
    Union[SimplePredicate, InPredicate, NullPredicate, BetweenPredicate],
    Field(discriminator="kind"),
]
