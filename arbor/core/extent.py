"""
Span value types shared by nodes.

Byte extents are start-inclusive, end-exclusive. Point extents use the same
convention on (row, column) pairs, both zero-based.
"""

from dataclasses import dataclass
from typing import Generic, Iterator, NamedTuple, TypeVar

T = TypeVar('T')


class Point(NamedTuple):
    """A zero-based (row, column) position; column counts bytes."""
    row: int
    column: int


@dataclass(frozen=True)
class Extent(Generic[T]):
    """A start/end pair describing a node's span."""
    start: T
    end: T

    @property
    def length(self) -> int:
        """Size of a byte extent (end - start); point extents have no length."""
        if isinstance(self.start, tuple):
            raise TypeError("length is only defined for byte extents")
        return self.end - self.start

    def __iter__(self) -> Iterator[T]:
        yield self.start
        yield self.end
