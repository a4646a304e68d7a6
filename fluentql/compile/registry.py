"""Placeholder compilers keyed by PEP 249 ``paramstyle`` name.

:class:`~fluentql.config.BuilderConfig` resolves its ``paramstyle`` here, so
a compiler registered once is usable from every builder::

    @CompilerFactory.register("numeric")
    class NumericCompiler(SQLCompiler):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from fluentql.compile.base import SQLCompiler
from fluentql.errors import ArgumentError


class CompilerFactory:
    _compilers: ClassVar[dict[str, type[SQLCompiler]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[SQLCompiler]], type[SQLCompiler]]:
        """Class decorator form of :meth:`register_class`."""

        def decorator(compiler_cls: type[SQLCompiler]) -> type[SQLCompiler]:
            cls.register_class(name, compiler_cls)
            return compiler_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, compiler_cls: type[SQLCompiler]) -> None:
        cls._compilers[name] = compiler_cls

    @classmethod
    def create(cls, name: str) -> SQLCompiler:
        """Instantiate the compiler for ``name``; ``ArgumentError`` if unknown."""
        try:
            compiler_cls = cls._compilers[name]
        except KeyError:
            raise ArgumentError(
                f"Unsupported paramstyle: '{name}'. Known: {', '.join(sorted(cls._compilers))}.",
                argument="paramstyle",
            ) from None
        return compiler_cls()
