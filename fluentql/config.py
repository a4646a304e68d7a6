"""Runtime configuration for :class:`~fluentql.query.builder.QueryBuilder`.

Example: a builder for a psycopg connection that tolerates a bare OFFSET::

    config = BuilderConfig(paramstyle="format", strict_offset=False)
    users = QueryBuilder.for_connection(pg_conn, config)
"""

from __future__ import annotations

from dataclasses import dataclass

from fluentql.compile.base import SQLCompiler
from fluentql.compile.builder import StatementCompiler
from fluentql.compile.registry import CompilerFactory


@dataclass
class BuilderConfig:
    """Behaviour switches applied to every statement a builder compiles.

    Attributes:
        paramstyle: PEP 249 paramstyle name used to pick the placeholder
            compiler from :class:`~fluentql.compile.registry.CompilerFactory`
            (``"qmark"`` → ``?``, ``"format"`` → ``%s``).
        strict_offset: If ``True``, compiling a SELECT with an OFFSET but no
            LIMIT raises :class:`~fluentql.errors.StateError`.  If ``False``,
            a warning is logged and the OFFSET is left out.
        auto_reset: If ``True``, the builder resets its state after every
            terminal operation that executed successfully.
    """

    paramstyle: str = "qmark"
    strict_offset: bool = True
    auto_reset: bool = False

    def compiler(self) -> SQLCompiler:
        """Return a fresh placeholder compiler for :attr:`paramstyle`."""
        return CompilerFactory.create(self.paramstyle)

    def statement_compiler(self) -> StatementCompiler:
        """Return a :class:`StatementCompiler` configured from this object."""
        return StatementCompiler(self.compiler(), strict_offset=self.strict_offset)
