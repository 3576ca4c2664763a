"""
Grammar — Immutable view of a tree-sitter language.

A Grammar is a cheap, copyable value over an engine-owned
`tree_sitter.Language`. Many parsers and trees may share one; arbor never
releases it.

Usage:
    from tree_sitter_language_pack import get_language
    from arbor.core.grammar import Grammar

    grammar = Grammar(get_language("json"), name="json")
    grammar.check_compatible()
    grammar.symbol_name(grammar.symbol_for_name("array", True))  # "array"
"""

from typing import Optional

import tree_sitter

from ..errors import IncompatibleGrammarError, InvalidSymbolError


# ABI window of the linked engine
ENGINE_MAX_VERSION: int = tree_sitter.LANGUAGE_VERSION
ENGINE_MIN_VERSION: int = tree_sitter.MIN_COMPATIBLE_LANGUAGE_VERSION


class Grammar:
    """
    A language's symbol table and ABI version.

    Attributes:
        raw: The wrapped tree_sitter.Language
    """

    __slots__ = ('raw', '_name')

    def __init__(self, raw: tree_sitter.Language, name: Optional[str] = None):
        """
        Wrap an engine language.

        Args:
            raw: Language obtained from a grammar provider
            name: Display name; defaults to the name embedded in the grammar
        """
        self.raw = raw
        self._name = name or getattr(raw, 'name', None)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def symbol_count(self) -> int:
        """Number of symbols (node kinds) defined by the grammar."""
        return self.raw.node_kind_count

    @property
    def version(self) -> int:
        """ABI version the grammar was generated against."""
        version = getattr(self.raw, 'abi_version', None)
        if version is None:
            version = self.raw.version
        return version

    def _check_symbol(self, symbol: int) -> None:
        count = self.symbol_count
        if not 0 <= symbol < count:
            raise InvalidSymbolError(symbol, count, self._name)

    def symbol_name(self, symbol: int) -> str:
        """
        Get the textual name of a symbol.

        Raises:
            InvalidSymbolError: If symbol is outside [0, symbol_count)
        """
        self._check_symbol(symbol)
        name = self.raw.node_kind_for_id(symbol)
        if name is None:
            raise InvalidSymbolError(symbol, self.symbol_count, self._name)
        return name

    def symbol_is_named(self, symbol: int) -> bool:
        """
        Check whether a symbol is a named rule rather than an anonymous token.

        Raises:
            InvalidSymbolError: If symbol is outside [0, symbol_count)
        """
        self._check_symbol(symbol)
        return self.raw.node_kind_is_named(symbol)

    def symbol_for_name(self, name: str, is_named: bool) -> Optional[int]:
        """
        Look up a symbol id by name.

        Args:
            name: Node type name (e.g., "array", or "[" for a token)
            is_named: Match named rules (True) or anonymous tokens (False)

        Returns:
            Symbol id, or None when the grammar has no such symbol
        """
        if not name:
            return None
        symbol = self.raw.id_for_node_kind(name, is_named)
        return symbol or None

    @property
    def is_compatible(self) -> bool:
        """True if the linked engine can load this grammar."""
        return ENGINE_MIN_VERSION <= self.version <= ENGINE_MAX_VERSION

    def check_compatible(self) -> None:
        """
        Verify the grammar's ABI version against the linked engine.

        Raises:
            IncompatibleGrammarError: If the version is outside the engine's window
        """
        if not self.is_compatible:
            raise IncompatibleGrammarError(
                self.version, ENGINE_MIN_VERSION, ENGINE_MAX_VERSION, self._name
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grammar):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Grammar(name={self._name!r}, version={self.version}, symbols={self.symbol_count})"
