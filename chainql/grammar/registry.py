"""Dialect name → grammar lookup.

A :class:`~chainql.query.builder.Builder` built without an explicit grammar asks
this registry for the one matching its driver's ``dialect`` attribute.  The
built-in grammars register themselves when :mod:`chainql.grammar` is
imported; third-party dialects do the same with the decorator::

    @GrammarFactory.register("duckdb")
    class DuckDBGrammar(Grammar):
        ...
"""
from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from chainql.errors import CompilationError
from chainql.grammar.base import Grammar

GrammarT = type[Grammar]


class GrammarFactory:
    """Class-level table of dialect grammars; never instantiated."""

    _by_dialect: ClassVar[dict[str, GrammarT]] = {}

    @classmethod
    def register(cls, dialect: str) -> Callable[[GrammarT], GrammarT]:
        """Class decorator filing the grammar under ``dialect``.

        Registering a name twice replaces the earlier grammar, which lets
        applications swap a built-in dialect for a subclass.
        """

        def bind(grammar_cls: GrammarT) -> GrammarT:
            cls._by_dialect[dialect] = grammar_cls
            return grammar_cls

        return bind

    @classmethod
    def create(cls, dialect: str) -> Grammar:
        """Return a fresh grammar for ``dialect``.

        Raises:
            CompilationError: When ``dialect`` was never registered.
        """
        try:
            grammar_cls = cls._by_dialect[dialect]
        except KeyError:
            raise CompilationError(
                f"No grammar registered for dialect '{dialect}' "
                f"(known: {', '.join(cls.dialects()) or 'none'})."
            ) from None
        return grammar_cls()

    @classmethod
    def dialects(cls) -> list[str]:
        """Registered dialect names, sorted."""
        return sorted(cls._by_dialect)
