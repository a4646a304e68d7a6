"""fluentQL execution layer: statement executor protocols and adapters."""
from fluentql.execute.dbapi import DBAPIExecutor
from fluentql.execute.dispatch import dispatch
from fluentql.execute.protocols import PreparedStatement, StatementExecutor, StatementResult
from fluentql.execute.sqlalchemy_executor import SQLAlchemyExecutor

__all__ = [
    "DBAPIExecutor",
    "PreparedStatement",
    "SQLAlchemyExecutor",
    "StatementExecutor",
    "StatementResult",
    "dispatch",
]
