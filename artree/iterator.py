"""Ordered, double-ended iteration over the leaves of an adaptive radix tree."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, Optional

from artree.nodes import InnerNode, LeafNode, Node

_Children = Deque[tuple[Optional[int], Node]]


class TreeIterator:
    """Iterate over all leaves of a tree in ascending key order.

    Leaves can also be taken from the back with `next_back`; both ends share
    one state, so every leaf is produced exactly once. The tree must not be
    modified while an iterator is in use.
    """

    def __init__(self, root: Node) -> None:
        start: _Children = deque([(None, root)])
        self._node_iters: Deque[_Children] = deque([start])

    def __iter__(self) -> TreeIterator:
        return self

    def __next__(self) -> LeafNode:
        while self._node_iters:
            front = self._node_iters[0]
            if not front:
                self._node_iters.popleft()
                continue
            _, child = front.popleft()
            if isinstance(child, InnerNode):
                self._node_iters.appendleft(deque(child))
            else:
                return child
        raise StopIteration

    def next_back(self) -> LeafNode:
        """Return the largest remaining leaf; raise StopIteration when none is left."""
        while self._node_iters:
            back = self._node_iters[-1]
            if not back:
                self._node_iters.pop()
                continue
            _, child = back.pop()
            if isinstance(child, InnerNode):
                self._node_iters.append(deque(child))
            else:
                return child
        raise StopIteration

    def __reversed__(self) -> Iterator[LeafNode]:
        """Yield the remaining leaves from the back, sharing this iterator's state."""
        while True:
            try:
                yield self.next_back()
            except StopIteration:
                return