"""
Tree — Exclusive owner of one parsed tree-sitter tree.

A Tree holds the engine tree and the source buffer it was parsed from.
It cannot be copied; closing it (directly or by leaving a `with` block)
releases the engine tree and invalidates every Node and Cursor derived
from it.

Usage:
    with parser.parse(b"[1, null]") as tree:
        print(tree.root.string_expression())
        print(tree.has_error)
    # Nodes from `tree` raise TreeClosedError from here on
"""

from typing import TYPE_CHECKING, Optional

import tree_sitter

from ..errors import TreeClosedError
from .grammar import Grammar
from .node import Node

if TYPE_CHECKING:
    from .cursor import Cursor


class Tree:
    """A parsed syntax tree with scoped ownership of the engine resource."""

    def __init__(self, raw: tree_sitter.Tree, grammar: Grammar, source: bytes):
        """
        Take ownership of an engine tree. Called by Parser.parse.

        Args:
            raw: Engine tree
            grammar: Grammar the tree was parsed with
            source: The exact buffer handed to the engine
        """
        self._raw: Optional[tree_sitter.Tree] = raw
        self._grammar = grammar
        self._source = source

    def _check_open(self) -> None:
        if self._raw is None:
            raise TreeClosedError("Tree has been closed; its nodes and cursors are invalid")

    @property
    def closed(self) -> bool:
        return self._raw is None

    @property
    def root(self) -> Node:
        """Root node; never fails."""
        self._check_open()
        return Node(self._raw.root_node, self)

    @property
    def grammar(self) -> Grammar:
        return self._grammar

    @property
    def has_error(self) -> bool:
        """True if any node in the tree is an error or missing node."""
        return self.root.has_error

    @property
    def source(self) -> bytes:
        """The buffer this tree was parsed from."""
        self._check_open()
        return self._source

    def walk(self) -> 'Cursor':
        """Create a Cursor positioned at the root."""
        return self.root.cursor()

    def close(self) -> None:
        """Release the engine tree. Safe to call more than once."""
        self._raw = None
        self._source = b""

    def __enter__(self) -> 'Tree':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("Tree owns its engine resource and cannot be copied; re-parse instead")

    def __deepcopy__(self, memo):
        raise TypeError("Tree owns its engine resource and cannot be copied; re-parse instead")

    def __reduce__(self):
        raise TypeError("Tree cannot be pickled")

    def __repr__(self) -> str:
        if self.closed:
            return f"<Tree grammar={self._grammar.name!r} closed>"
        return f"<Tree grammar={self._grammar.name!r} bytes={len(self._source)}>"
