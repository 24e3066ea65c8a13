"""Removal of leaves from an adaptive radix tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from artree.nodes import InnerNode, LeafNode, Node


@dataclass
class DeleteResult:
    """The outcome of a successful delete."""

    new_root: Optional[Node]
    """The tree root after the delete, or None if the tree is now empty."""
    deleted_leaf: LeafNode
    """The leaf that was removed."""


@dataclass
class _DeleteSearchResult:
    grandparent: Optional[tuple[int, InnerNode]]
    parent: Optional[tuple[int, InnerNode]]
    leaf: LeafNode


def _search_for_node_to_delete(root: Node, key: bytes) -> Optional[_DeleteSearchResult]:
    grandparent: Optional[tuple[int, InnerNode]] = None
    parent: Optional[tuple[int, InnerNode]] = None
    current = root
    depth = 0

    while isinstance(current, InnerNode):
        header = current.header
        matched = header.match_prefix(key[depth:])
        if matched != header.prefix_size:
            return None
        depth += matched
        if depth >= len(key):
            return None
        key_byte = key[depth]
        child = current.lookup_child(key_byte)
        if child is None:
            return None
        depth += 1
        grandparent = parent
        parent = (key_byte, current)
        current = child

    if not current.matches_full_key(key):
        return None
    return _DeleteSearchResult(grandparent, parent, current)


def _find_edge_to_delete(
    root: Node, children: Callable[[InnerNode], Iterator[tuple[int, Node]]]
) -> _DeleteSearchResult:
    grandparent: Optional[tuple[int, InnerNode]] = None
    parent: Optional[tuple[int, InnerNode]] = None
    current = root

    while isinstance(current, InnerNode):
        try:
            key_byte, child = next(children(current))
        except StopIteration:
            raise ValueError(
                "an inner node must always have at least one child"
            ) from None
        grandparent = parent
        parent = (key_byte, current)
        current = child

    return _DeleteSearchResult(grandparent, parent, current)


def _remove_child_and_compress(inner: InnerNode, key_byte: int) -> Optional[Node]:
    """Remove a child; return the node that replaces `inner`, if it changed."""
    if inner.remove_child(key_byte) is None:
        raise ValueError(f"child with key byte {key_byte} should be present")

    remaining = inner.num_children
    if remaining == 1:
        child_key_byte, child = next(iter(inner))
        if isinstance(child, InnerNode):
            # prepend_prefix writes to the front, so go in reverse order
            child.header.prepend_prefix([child_key_byte])
            child.header.prepend_prefix(inner.header.read_prefix())
        return child
    if inner.TYPE.should_shrink_inner_node(remaining):
        return inner.shrink()
    return None


def _delete_found(root: Node, found: _DeleteSearchResult) -> DeleteResult:
    if found.parent is None:
        return DeleteResult(new_root=None, deleted_leaf=found.leaf)

    parent_key_byte, parent = found.parent
    new_parent = _remove_child_and_compress(parent, parent_key_byte)

    if new_parent is not None and found.grandparent is not None:
        grandparent_key_byte, grandparent = found.grandparent
        grandparent.write_child(grandparent_key_byte, new_parent)

    if new_parent is not None and found.grandparent is None:
        new_root: Node = new_parent
    else:
        new_root = root
    return DeleteResult(new_root=new_root, deleted_leaf=found.leaf)


def delete(root: Node, key: bytes) -> Optional[DeleteResult]:
    """Remove `key` from the tree at `root`; return None if it is not present."""
    key = bytes(key)
    found = _search_for_node_to_delete(root, key)
    if found is None:
        return None
    return _delete_found(root, found)


def delete_minimum(root: Node) -> DeleteResult:
    """Remove the leaf with the smallest key from the tree at `root`.

    Raises ValueError if an inner node on the way has no children.
    """
    return _delete_found(root, _find_edge_to_delete(root, iter))


def delete_maximum(root: Node) -> DeleteResult:
    """Remove the leaf with the largest key from the tree at `root`.

    Raises ValueError if an inner node on the way has no children.
    """
    return _delete_found(root, _find_edge_to_delete(root, reversed))