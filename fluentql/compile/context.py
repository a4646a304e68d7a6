"""Compilation context value object.

Packages the ``(compiler, strict_offset)`` pair that ``StatementCompiler``
and every clause-level sub-builder need into a single cohesive object.
"""
from __future__ import annotations

from dataclasses import dataclass

from fluentql.compile.base import SQLCompiler


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context shared by all compilation runs of one compiler.

    Attributes:
        compiler: Placeholder-style compiler instance.
        strict_offset: Reject OFFSET without LIMIT instead of dropping it.
    """

    compiler: SQLCompiler
    strict_offset: bool = True
