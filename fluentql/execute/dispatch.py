"""Run a compiled statement and normalise its result by verb.

Classification comes from :attr:`CompiledQuery.verb`, i.e. from which
terminal operation compiled the statement, never from the SQL text:

======  ==============================================
SELECT  ``list[dict]`` of rows (possibly empty)
INSERT  identity key from ``executor.last_insert_id()``
UPDATE  affected row count
DELETE  affected row count
======  ==============================================
"""
from __future__ import annotations

import logging
from typing import Any

from fluentql.compile.base import CompiledQuery
from fluentql.errors import ExecutionError
from fluentql.execute.protocols import StatementExecutor
from fluentql.schema.query_state import Verb

logger = logging.getLogger(__name__)


def dispatch(executor: StatementExecutor, compiled: CompiledQuery) -> Any:
    """Prepare, bind, execute and classify ``compiled``.

    Args:
        executor: The statement executor collaborator.
        compiled: Output of :class:`~fluentql.compile.builder.StatementCompiler`.

    Returns:
        Rows, identity key, or affected row count depending on the verb.

    Raises:
        ExecutionError: If the executor fails at any step.  The driver
            exception is chained as ``__cause__``; nothing is retried.
    """
    logger.debug(
        "executing %s (%d params): %s",
        compiled.verb.value,
        len(compiled.parameters),
        compiled.text,
    )
    try:
        statement = executor.prepare(compiled.text)
        result = statement.execute(list(compiled.parameters))
        if compiled.verb is Verb.SELECT:
            return result.rows()
        if compiled.verb is Verb.INSERT:
            return executor.last_insert_id()
        return result.rowcount
    except Exception as exc:
        raise ExecutionError(
            f"Query execution failed: {exc}",
            sql=compiled.text,
            params=list(compiled.parameters),
        ) from exc
