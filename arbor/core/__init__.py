"""
Core object model: Grammar, Parser, Tree, Node, Cursor.

Ownership:
- Grammar: shared, immutable, never released by arbor
- Parser, Tree, Cursor: each owns one engine resource, released once by
  close() or by leaving a `with` block; copying is refused
  (Cursor offers an explicit deep copy())
- Node: plain value, valid while its Tree is open
"""

from .extent import Extent, Point
from .grammar import Grammar
from .node import Node
from .tree import Tree
from .cursor import Cursor
from .parser import Parser
from .traversal import iter_nodes

__all__ = [
    'Extent',
    'Point',
    'Grammar',
    'Node',
    'Tree',
    'Cursor',
    'Parser',
    'iter_nodes',
]
