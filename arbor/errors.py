"""
Errors — Exception taxonomy for arbor.

Structural queries on nodes and cursors never raise: absent data comes back
as a null Node, None, or False. Only grammar/symbol lookups, construction
and use of released resources are reported as exceptions.
"""

from typing import Optional


class ArborError(Exception):
    """Base class for every error raised by arbor."""


class InvalidSymbolError(ArborError, LookupError):
    """Raised when a symbol id is outside a grammar's symbol table."""

    def __init__(self, symbol: int, symbol_count: int, grammar_name: Optional[str] = None):
        self.symbol = symbol
        self.symbol_count = symbol_count
        self.grammar_name = grammar_name
        where = f" in grammar '{grammar_name}'" if grammar_name else ""
        super().__init__(
            f"Symbol {symbol} out of range{where} (valid: 0..{symbol_count - 1})"
        )


class IncompatibleGrammarError(ArborError):
    """
    Raised when a grammar's ABI version falls outside what the linked
    tree-sitter engine can load.
    """

    def __init__(self, version: int, min_version: int, max_version: int,
                 grammar_name: Optional[str] = None):
        self.version = version
        self.min_version = min_version
        self.max_version = max_version
        self.grammar_name = grammar_name
        label = grammar_name or "grammar"
        super().__init__(
            f"{label} has ABI version {version}, engine supports "
            f"{min_version}..{max_version}"
        )


class UnknownGrammarError(ArborError, LookupError):
    """Raised when a language name is not registered."""

    def __init__(self, name: str, known=()):
        self.name = name
        self.known = sorted(known)
        hint = f". Known: {', '.join(self.known)}" if self.known else ""
        super().__init__(f"Unknown language '{name}'{hint}")


class GrammarUnavailableError(ArborError):
    """Raised when a registered grammar cannot be loaded from its provider."""


class SourceTooLargeError(ArborError, ValueError):
    """Raised when a source buffer exceeds the parser's size limit."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Source is {size} bytes, limit is {limit}")


class ParseError(ArborError):
    """Raised when the engine produces no tree for a buffer."""


class ResourceClosedError(ArborError):
    """Raised when a released engine resource is used."""


class TreeClosedError(ResourceClosedError):
    """The owning Tree was closed; its nodes and cursors are invalid."""


class CursorClosedError(ResourceClosedError):
    """The Cursor was closed."""


class ParserClosedError(ResourceClosedError):
    """The Parser was closed."""
