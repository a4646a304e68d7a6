"""fluentQL state models: predicates and the accumulated QueryState."""
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

__all__ = [
    "COMPARISON_OPERATORS",
    "DIRECTIONS",
    "JOIN_KINDS",
    "BetweenPredicate",
    "Combinator",
    "InPredicate",
    "JoinSpec",
    "NullPredicate",
    "OrderSpec",
    "Predicate",
    "QueryState",
    "SimplePredicate",
    "Verb",
]
