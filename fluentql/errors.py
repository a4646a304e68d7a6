"""Custom exception hierarchy for fluentQL.

All public errors inherit from FluentQLError so callers can catch the base
class for any fluentQL-specific failure.
"""
from __future__ import annotations

from typing import Any


class FluentQLError(Exception):
    """Base exception for all fluentQL errors."""


class ArgumentError(FluentQLError):
    """Raised when a builder or compiler call receives malformed input.

    Raised before anything is recorded, so the builder state is unchanged
    after a rejected call.

    Args:
        message: Human-readable description.
        argument: Name of the offending argument (e.g. ``"direction"``).
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.argument = argument


class StateError(FluentQLError):
    """Raised when the accumulated query state cannot be compiled.

    Typical causes: no table was set before a terminal call, or an OFFSET
    was registered without a LIMIT while ``strict_offset`` is enabled.

    Args:
        message: Human-readable description.
        clause: The clause that made the state invalid.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class ExecutionError(FluentQLError):
    """Raised when the statement executor reports a failure.

    The driver exception is always chained as ``__cause__``.

    Args:
        message: Human-readable description, including the driver message.
        sql: The compiled SQL text that failed.
        params: The positional parameters bound to ``sql``.
    """

    def __init__(
        self,
        message: str,
        sql: str | None = None,
        params: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.sql = sql
        self.params: list[Any] = params or []

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured description of the failed statement."""
        return {
            "error": "EXECUTION_FAILED",
            "message": str(self),
            "sql": self.sql,
            "params": self.params,
        }
