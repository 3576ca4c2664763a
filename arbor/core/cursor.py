"""
Cursor — Stateful depth-first walker over a Tree.

A Cursor remembers the path from the node it was created (or reset) at
down to its current position, so parent/sibling/child steps cost O(1)
amortized. That makes it the cheap way to enumerate whole subtrees.

Cursors are move-only: `copy.copy` is refused so two names never alias
one mutable position by accident. Use `cursor.copy()` (or
`copy.deepcopy`) for an independent walker.

Moves never leave the cursor's traversal root: `goto_parent()` returns
False at the node the cursor was created or reset at.
"""

from typing import TYPE_CHECKING, Optional

import tree_sitter

from ..errors import CursorClosedError

if TYPE_CHECKING:
    from .node import Node
    from .tree import Tree


def _clone(raw: tree_sitter.TreeCursor) -> tree_sitter.TreeCursor:
    # TreeCursor.copy() leaves the new cursor's node unset in py-tree-sitter;
    # reset_to copies the full stack, traversal root included.
    fresh = raw.node.walk()
    fresh.reset_to(raw)
    return fresh


class Cursor:
    """Mutable traversal state bound to one Tree at a time."""

    def __init__(self, node: 'Node'):
        """
        Create a cursor positioned at node.

        A null node yields a cursor on a null position where every move
        returns False.
        """
        self._tree: 'Tree' = node._tree
        raw_node = node._engine()
        self._raw: Optional[tree_sitter.TreeCursor] = (
            raw_node.walk() if raw_node is not None else None
        )
        self._closed = False

    @classmethod
    def _adopt(cls, raw: Optional[tree_sitter.TreeCursor], tree: 'Tree') -> 'Cursor':
        cursor = cls.__new__(cls)
        cursor._tree = tree
        cursor._raw = raw
        cursor._closed = False
        return cursor

    def _check_not_closed(self) -> None:
        if self._closed:
            raise CursorClosedError("Cursor has been closed")

    def _engine(self) -> Optional[tree_sitter.TreeCursor]:
        self._check_not_closed()
        self._tree._check_open()
        return self._raw

    # =========================================================================
    # Position
    # =========================================================================

    @property
    def node(self) -> 'Node':
        """The node at the current position; never fails."""
        from .node import Node
        raw = self._engine()
        return Node(raw.node if raw is not None else None, self._tree)

    @property
    def tree(self) -> 'Tree':
        return self._tree

    @property
    def depth(self) -> int:
        """Steps below the traversal root."""
        raw = self._engine()
        return raw.depth if raw is not None else 0

    @property
    def field_name(self) -> Optional[str]:
        """Field role of the current node under its parent, if any."""
        raw = self._engine()
        return raw.field_name if raw is not None else None

    def reset(self, node: 'Node') -> None:
        """Reposition at node, which becomes the new traversal root."""
        self._check_not_closed()
        raw_node = node._engine()
        same_tree = node._tree is self._tree
        self._tree = node._tree
        if raw_node is None:
            self._raw = None
        elif self._raw is None or not same_tree:
            self._raw = raw_node.walk()
        else:
            self._raw.reset(raw_node)

    def reset_to(self, other: 'Cursor') -> None:
        """Take over other's position and path; other is unchanged."""
        self._check_not_closed()
        other_raw = other._engine()
        same_tree = other._tree is self._tree
        self._tree = other._tree
        if other_raw is None:
            self._raw = None
        elif self._raw is None or not same_tree:
            self._raw = _clone(other_raw)
        else:
            self._raw.reset_to(other_raw)

    # =========================================================================
    # Navigation
    # =========================================================================

    def goto_parent(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.goto_parent()

    def goto_next_sibling(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.goto_next_sibling()

    def goto_previous_sibling(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.goto_previous_sibling()

    def goto_first_child(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.goto_first_child()

    def goto_last_child(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.goto_last_child()

    # =========================================================================
    # Ownership
    # =========================================================================

    def copy(self) -> 'Cursor':
        """Deep, independent copy at the same position with the same path."""
        raw = self._engine()
        return Cursor._adopt(_clone(raw) if raw is not None else None, self._tree)

    def close(self) -> None:
        """Release the engine cursor. Safe to call more than once."""
        self._raw = None
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> 'Cursor':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __copy__(self):
        raise TypeError("Cursor is move-only; use cursor.copy() for an independent walker")

    def __deepcopy__(self, memo) -> 'Cursor':
        return self.copy()

    def __reduce__(self):
        raise TypeError("Cursor cannot be pickled")

    def __repr__(self) -> str:
        if self._closed or self._tree.closed:
            return "<Cursor closed>"
        return f"<Cursor at {self.node!r} depth={self.depth}>"
