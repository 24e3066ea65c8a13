"""Key lookup in an adaptive radix tree."""

from __future__ import annotations

from typing import Optional

from artree.nodes import InnerNode, LeafNode, Node


def _check_prefix_lookup_child(
    inner: InnerNode, key: bytes, depth: int
) -> Optional[tuple[Node, int]]:
    """Match the node prefix against `key` at `depth`, then find the child.

    Returns the child and the depth after its key byte, or None when the
    prefix does not match, the key runs out, or there is no such child.
    """
    header = inner.header
    matched = header.match_prefix(key[depth:])
    if matched != header.prefix_size:
        return None
    depth += matched
    if depth >= len(key):
        # Keys in the tree are never prefixes of one another, so a key that
        # ends here cannot be stored below this node.
        return None
    child = inner.lookup_child(key[depth])
    if child is None:
        return None
    return child, depth + 1


def search(root: Node, key: bytes) -> Optional[LeafNode]:
    """Return the leaf stored under `key` in the tree at `root`, or None."""
    key = bytes(key)
    current = root
    depth = 0
    while isinstance(current, InnerNode):
        found = _check_prefix_lookup_child(current, key, depth)
        if found is None:
            return None
        current, depth = found
    return current if current.matches_full_key(key) else None