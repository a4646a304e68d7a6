"""fluentQL compilation layer: QueryState → positional-parameter SQL."""
from fluentql.compile.base import CompiledQuery, SQLCompiler
from fluentql.compile.builder import StatementCompiler
from fluentql.compile.format import FormatCompiler
from fluentql.compile.qmark import QmarkCompiler
from fluentql.compile.registry import CompilerFactory

__all__ = [
    "CompiledQuery",
    "SQLCompiler",
    "StatementCompiler",
    "FormatCompiler",
    "QmarkCompiler",
    "CompilerFactory",
]
