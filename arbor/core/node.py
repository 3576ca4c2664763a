"""
Node — Non-owning view of a position in a parsed Tree.

A Node is a lightweight value: copying it is free and it never holds an
engine resource of its own. It is meaningful only while the Tree that
produced it is open; once the Tree is closed every query raises
TreeClosedError.

Absent data propagates as a *null* Node instead of an exception:

    node.child(99).parent.next_sibling.is_null   # True, nothing raised

This lets traversal code chain lookups without guarding every step.
"""

from typing import TYPE_CHECKING, List, Optional, TypeVar

import tree_sitter

from .extent import Extent, Point

if TYPE_CHECKING:
    from .cursor import Cursor
    from .grammar import Grammar
    from .tree import Tree

SourceT = TypeVar('SourceT', str, bytes)

_EMPTY_BYTES = Extent(0, 0)
_EMPTY_POINTS = Extent(Point(0, 0), Point(0, 0))


class Node:
    """
    A position in a Tree.

    Properties cover flags, attributes and one-step navigation; methods
    cover indexed and named lookups. On a null Node flags are False,
    counts are 0 and navigation returns another null Node.
    """

    __slots__ = ('_raw', '_tree')

    def __init__(self, raw: Optional[tree_sitter.Node], tree: 'Tree'):
        self._raw = raw
        self._tree = tree

    def _engine(self) -> Optional[tree_sitter.Node]:
        self._tree._check_open()
        return self._raw

    def _wrap(self, raw: Optional[tree_sitter.Node]) -> 'Node':
        return Node(raw, self._tree)

    # =========================================================================
    # Flags
    # =========================================================================

    @property
    def is_null(self) -> bool:
        """True if this Node does not refer to any node."""
        return self._engine() is None

    @property
    def is_named(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.is_named

    @property
    def is_missing(self) -> bool:
        """True for tokens inserted by error recovery."""
        raw = self._engine()
        return raw is not None and raw.is_missing

    @property
    def is_extra(self) -> bool:
        """True for nodes allowed anywhere, such as comments."""
        raw = self._engine()
        return raw is not None and raw.is_extra

    @property
    def is_error(self) -> bool:
        raw = self._engine()
        return raw is not None and raw.is_error

    @property
    def has_error(self) -> bool:
        """True if this node or any descendant is an error or missing node."""
        raw = self._engine()
        return raw is not None and raw.has_error

    def __bool__(self) -> bool:
        return not self.is_null

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def parent(self) -> 'Node':
        raw = self._engine()
        return self._wrap(raw.parent if raw is not None else None)

    @property
    def prev_sibling(self) -> 'Node':
        raw = self._engine()
        return self._wrap(raw.prev_sibling if raw is not None else None)

    @property
    def next_sibling(self) -> 'Node':
        raw = self._engine()
        return self._wrap(raw.next_sibling if raw is not None else None)

    @property
    def child_count(self) -> int:
        raw = self._engine()
        return raw.child_count if raw is not None else 0

    @property
    def named_child_count(self) -> int:
        raw = self._engine()
        return raw.named_child_count if raw is not None else 0

    def child(self, index: int) -> 'Node':
        """
        Get a child by position, counting anonymous tokens.

        Returns:
            The child, or a null Node if index is out of range
        """
        raw = self._engine()
        if raw is None or not 0 <= index < raw.child_count:
            return self._wrap(None)
        return self._wrap(raw.child(index))

    def named_child(self, index: int) -> 'Node':
        """
        Get a child by position among named children only.

        Returns:
            The child, or a null Node if index is out of range
        """
        raw = self._engine()
        if raw is None or not 0 <= index < raw.named_child_count:
            return self._wrap(None)
        return self._wrap(raw.named_child(index))

    @property
    def children(self) -> List['Node']:
        raw = self._engine()
        if raw is None:
            return []
        return [self._wrap(child) for child in raw.children]

    @property
    def named_children(self) -> List['Node']:
        raw = self._engine()
        if raw is None:
            return []
        return [self._wrap(child) for child in raw.named_children]

    # =========================================================================
    # Fields
    # =========================================================================

    def field_name_for_child(self, index: int) -> Optional[str]:
        """
        Get the field name of the child at a raw child index.

        Returns:
            Field name, or None if the child has no field or index is out of range
        """
        raw = self._engine()
        if raw is None or not 0 <= index < raw.child_count:
            return None
        return raw.field_name_for_child(index)

    def child_by_field_name(self, name: str) -> 'Node':
        """Get the first child playing the given field role (null if none)."""
        raw = self._engine()
        if raw is None or not name:
            return self._wrap(None)
        return self._wrap(raw.child_by_field_name(name))

    def cursor(self) -> 'Cursor':
        """Create an independent Cursor positioned at this node."""
        from .cursor import Cursor
        return Cursor(self)

    # =========================================================================
    # Attributes
    # =========================================================================

    @property
    def id(self) -> int:
        """
        Identity of this node within its tree.

        Stable while the tree is open; never compare ids across trees.
        Null nodes report 0.
        """
        raw = self._engine()
        return raw.id if raw is not None else 0

    @property
    def symbol(self) -> int:
        raw = self._engine()
        return raw.kind_id if raw is not None else 0

    @property
    def type(self) -> str:
        """Node type name, e.g. "array" or "["; empty for a null Node."""
        raw = self._engine()
        return raw.type if raw is not None else ""

    @property
    def byte_range(self) -> Extent[int]:
        raw = self._engine()
        if raw is None:
            return _EMPTY_BYTES
        return Extent(raw.start_byte, raw.end_byte)

    @property
    def point_range(self) -> Extent[Point]:
        raw = self._engine()
        if raw is None:
            return _EMPTY_POINTS
        start, end = raw.start_point, raw.end_point
        return Extent(Point(start[0], start[1]), Point(end[0], end[1]))

    def string_expression(self) -> str:
        """S-expression of the subtree, e.g. "(document (array (number)))"."""
        raw = self._engine()
        return str(raw) if raw is not None else ""

    def source_slice(self, source: SourceT) -> SourceT:
        """
        Slice the text this node spans out of the parsed buffer.

        Offsets are UTF-8 byte offsets, so str input is encoded, sliced and
        decoded back.

        Args:
            source: The same buffer the tree was parsed from

        Returns:
            Slice of the same type as source

        Raises:
            ValueError: If source ends before the node does
        """
        start, end = self.byte_range
        data = source.encode('utf-8') if isinstance(source, str) else source
        if len(data) < end:
            raise ValueError(
                f"Source is {len(data)} bytes but node ends at byte {end}"
            )
        piece = data[start:end]
        return piece.decode('utf-8') if isinstance(source, str) else piece

    @property
    def text(self) -> bytes:
        """Bytes this node spans in the tree's own source buffer."""
        return self.source_slice(self._tree.source)

    @property
    def grammar(self) -> 'Grammar':
        return self._tree.grammar

    @property
    def tree(self) -> 'Tree':
        """The Tree that owns this node."""
        return self._tree

    # =========================================================================
    # Value semantics
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._tree is other._tree and self._raw == other._raw

    def __hash__(self) -> int:
        return hash((id(self._tree), self._raw))

    # Nodes are immutable views; copies share the owning Tree
    def __copy__(self) -> 'Node':
        return self

    def __deepcopy__(self, memo) -> 'Node':
        return self

    def __repr__(self) -> str:
        if self._tree.closed:
            return "<Node (tree closed)>"
        if self._raw is None:
            return "<Node null>"
        start, end = self.byte_range
        return f"<Node type={self.type!r} bytes={start}..{end}>"
