"""
Parser — Exclusive owner of one tree-sitter parser bound to one Grammar.

A Parser is bound to its Grammar for life; parsing another language
means constructing another Parser. Every call to `parse` runs a full,
synchronous parse and returns an independent Tree that outlives the
Parser if needed.

Malformed input still yields a Tree: syntax errors are recorded as ERROR
and MISSING nodes and surfaced through `Tree.has_error`.

Usage:
    from arbor import Parser
    from arbor.languages import default_registry

    with Parser(default_registry().grammar("json")) as parser:
        tree = parser.parse('[1, null]')
"""

import logging
from typing import Optional, Union

import tree_sitter

from ..errors import IncompatibleGrammarError, ParseError, ParserClosedError, SourceTooLargeError
from .grammar import Grammar
from .tree import Tree

logger = logging.getLogger(__name__)

# The engine addresses buffers with 32-bit lengths
ENGINE_MAX_SOURCE_BYTES = 2 ** 32 - 1


class Parser:
    """
    Parses source buffers into Trees for a single Grammar.

    Not thread-safe: use one Parser per thread.
    """

    def __init__(
        self,
        grammar: Grammar,
        max_source_bytes: int = ENGINE_MAX_SOURCE_BYTES,
        strict_version: bool = True,
    ):
        """
        Create a parser bound to grammar.

        Args:
            grammar: Language to parse
            max_source_bytes: Reject larger buffers (capped at the engine limit)
            strict_version: Raise on ABI skew instead of logging a warning

        Raises:
            IncompatibleGrammarError: If strict_version and the grammar's ABI
                version is outside the engine's supported window
            ValueError: If max_source_bytes is not positive
        """
        if max_source_bytes <= 0:
            raise ValueError(f"max_source_bytes must be positive, got {max_source_bytes}")

        try:
            grammar.check_compatible()
        except IncompatibleGrammarError as e:
            if strict_version:
                raise
            logger.warning("Using grammar despite version skew: %s", e)

        self._grammar = grammar
        self._max_source_bytes = min(max_source_bytes, ENGINE_MAX_SOURCE_BYTES)
        self._raw: Optional[tree_sitter.Parser] = tree_sitter.Parser(grammar.raw)

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def max_source_bytes(self) -> int:
        return self._max_source_bytes

    @property
    def closed(self) -> bool:
        return self._raw is None

    def parse(self, source: Union[str, bytes]) -> Tree:
        """
        Parse a whole buffer.

        Args:
            source: Source bytes, or text to be encoded as UTF-8

        Returns:
            A new Tree owning the parse result; may contain error nodes

        Raises:
            ParserClosedError: If the parser was closed
            SourceTooLargeError: If the buffer exceeds max_source_bytes
            ParseError: If the engine returns no tree
            TypeError: If source is neither text nor a bytes-like buffer
        """
        if self._raw is None:
            raise ParserClosedError("Parser has been closed")

        if isinstance(source, str):
            data = source.encode('utf-8')
        elif isinstance(source, (bytes, bytearray, memoryview)):
            data = bytes(source)
        else:
            raise TypeError(f"source must be str or bytes, not {type(source).__name__}")
        if len(data) > self._max_source_bytes:
            raise SourceTooLargeError(len(data), self._max_source_bytes)

        raw_tree = self._raw.parse(data)
        if raw_tree is None:
            raise ParseError(f"Engine returned no tree for {len(data)} bytes")

        tree = Tree(raw_tree, self._grammar, data)
        logger.debug(
            "Parsed %d bytes with %s grammar (errors: %s)",
            len(data), self._grammar.name, tree.has_error,
        )
        return tree

    def close(self) -> None:
        """Release the engine parser. Trees already returned stay valid."""
        self._raw = None

    def __enter__(self) -> 'Parser':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("Parser cannot be copied; construct a new Parser")

    def __deepcopy__(self, memo):
        raise TypeError("Parser cannot be copied; construct a new Parser")

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<Parser grammar={self._grammar.name!r} {state}>"
