"""fluentQL fluent builder: clause accumulation and terminal operations."""
from fluentql.query.builder import QueryBuilder

__all__ = ["QueryBuilder"]
