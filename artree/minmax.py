"""Minimum and maximum leaves of an adaptive radix tree."""

from __future__ import annotations

from typing import Callable, Iterator

from artree.nodes import InnerNode, LeafNode, Node


def _descend(root: Node, children: Callable[[InnerNode], Iterator]) -> LeafNode:
    current = root
    while isinstance(current, InnerNode):
        try:
            _, current = next(children(current))
        except StopIteration:
            raise ValueError(
                "an inner node must always have at least one child"
            ) from None
    return current


def minimum(root: Node) -> LeafNode:
    """Return the leaf with the lexicographically smallest key.

    Raises ValueError if an inner node on the way has no children.
    """
    return _descend(root, iter)


def maximum(root: Node) -> LeafNode:
    """Return the leaf with the lexicographically largest key.

    Raises ValueError if an inner node on the way has no children.
    """
    return _descend(root, reversed)