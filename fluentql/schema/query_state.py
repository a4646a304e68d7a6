"""Pydantic models for the accumulated state of one fluent query.

``QueryState`` is mutated only by :class:`~fluentql.query.builder.QueryBuilder`
and read by :class:`~fluentql.compile.builder.StatementCompiler`.  The
compiler never writes to it.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fluentql.schema.predicates import Predicate

JoinKind = Literal["INNER", "LEFT", "RIGHT"]
Direction = Literal["ASC", "DESC"]

JOIN_KINDS: frozenset[str] = frozenset({"INNER", "LEFT", "RIGHT"})
DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})


class Verb(str, Enum):
    """The terminal operation a statement is compiled for."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class JoinSpec(BaseModel):
    """A single ``<kind> JOIN <table> ON <left> <operator> <right>`` entry.

    Attributes:
        table: Joined table, emitted verbatim.
        left: Left-hand ON expression.
        operator: Comparison operator between ``left`` and ``right``.
        right: Right-hand ON expression.
        kind: Join type.
    """

    model_config = ConfigDict(extra="forbid")

    table: str
    left: str
    operator: str = "="
    right: str
    kind: JoinKind = "INNER"


class OrderSpec(BaseModel):
    """A single ORDER BY entry."""

    model_config = ConfigDict(extra="forbid")

    column: str
    direction: Direction = "ASC"


class QueryState(BaseModel):
    """Everything registered on a builder since creation or the last reset.

    Attributes:
        table: Target relation; required before any terminal call.
        columns: Selected columns, ``["*"]`` by default.
        predicates: WHERE predicates in registration order.
        joins: JOIN entries in registration order.
        group_by: GROUP BY columns, accumulated across calls.
        having_predicates: HAVING predicates in registration order.
        order_by: ORDER BY entries in registration order.
        limit: Optional LIMIT.
        offset: Optional OFFSET; only rendered when ``limit`` is set.
    """

    model_config = ConfigDict(extra="forbid")

    table: str | None = None
    columns: list[str] = Field(default_factory=lambda: ["*"])
    predicates: list[Predicate] = Field(default_factory=list)
    joins: list[JoinSpec] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    having_predicates: list[Predicate] = Field(default_factory=list)
    order_by: list[OrderSpec] = Field(default_factory=list)
    limit: int | None = None
    offset: int | None = None
