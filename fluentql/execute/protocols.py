"""Protocol interfaces for the statement executor boundary.

The builder never talks to a driver directly.  It receives one object that
satisfies :class:`StatementExecutor`; adapters for PEP 249 connections and
SQLAlchemy connections live next to this module, and tests pass fakes that
record what they were asked to run.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StatementResult(Protocol):
    """The outcome of executing one prepared statement."""

    @property
    def rowcount(self) -> int:
        """Number of rows affected (UPDATE / DELETE)."""
        ...

    def rows(self) -> list[dict[str, Any]]:
        """Return all result rows as column name → value mappings."""
        ...


@runtime_checkable
class PreparedStatement(Protocol):
    """A SQL statement ready to be executed with positional parameters."""

    def execute(self, parameters: list[Any]) -> StatementResult:
        """Bind ``parameters`` in order and execute.

        Args:
            parameters: Values aligned with the statement's placeholders.

        Returns:
            The statement result.
        """
        ...


@runtime_checkable
class StatementExecutor(Protocol):
    """Prepares statements against a database handle the caller owns."""

    def prepare(self, text: str) -> PreparedStatement:
        """Prepare ``text`` for execution."""
        ...

    def last_insert_id(self) -> Any:
        """Return the identity key generated by the most recent INSERT."""
        ...
