"""Compiler abstractions: CompiledQuery and the SQLCompiler ABC.

The Strategy pattern is used:
- ``StatementCompiler`` owns the clause ordering and parameter alignment.
- ``SQLCompiler`` subclasses supply the only driver-specific step, the
  positional placeholder token (``?`` for ``qmark``, ``%s`` for ``format``).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from fluentql.schema.query_state import Verb


@dataclass
class CompiledQuery:
    """The output of a successful compilation.

    Attributes:
        text: The compiled SQL string with positional placeholders.
        parameters: Values for the placeholders, in the order the
            placeholders appear in ``text`` (left to right).
        verb: The terminal operation the statement was compiled for.
    """

    text: str
    parameters: list[Any] = field(default_factory=list)
    verb: Verb = Verb.SELECT

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{"query": ..., "params": ...}`` introspection shape."""
        return {"query": self.text, "params": list(self.parameters)}


class SQLCompiler(ABC):
    """Abstract base for placeholder-style compilers.

    Subclasses implement the driver-specific methods; ``StatementCompiler``
    uses this interface for every bound value it renders.
    """

    @abstractmethod
    def param_placeholder(self) -> str:
        """Return the positional placeholder token.

        Returns:
            Driver-specific placeholder string (e.g. ``'?'``).
        """

    @property
    @abstractmethod
    def paramstyle(self) -> str:
        """Return the PEP 249 ``paramstyle`` name (``'qmark'``, ``'format'``)."""
