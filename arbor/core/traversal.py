"""
Cursor-driven subtree enumeration.
"""

from typing import Iterator

from .node import Node


def iter_nodes(node: Node, named_only: bool = False) -> Iterator[Node]:
    """
    Yield node and its descendants in depth-first pre-order.

    Uses a single Cursor, closed when iteration ends or the generator is
    closed. Visits the same nodes in the same order as recursing through
    Node.children.

    Args:
        node: Subtree root; a null node yields nothing
        named_only: Skip anonymous tokens (their named descendants are still visited)
    """
    if node.is_null:
        return

    with node.cursor() as cursor:
        while True:
            current = cursor.node
            if not named_only or current.is_named:
                yield current

            if cursor.goto_first_child():
                continue
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    return
