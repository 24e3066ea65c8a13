"""Insertion of key-value pairs into an adaptive radix tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from artree.nodes import InnerNode, InnerNode4, LeafNode, Node


class InsertPrefixError(ValueError):
    """The key is a prefix of an existing key, or an existing key is a prefix of it."""

    def __init__(self, byte_repr: bytes) -> None:
        self.byte_repr = bytes(byte_repr)
        super().__init__(
            f"Attempted to insert a key [{list(self.byte_repr)}] which is either a "
            "prefix of an existing key or an existing key is a prefix of the new key."
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InsertPrefixError):
            return NotImplemented
        return self.byte_repr == other.byte_repr

    def __hash__(self) -> int:
        return hash(self.byte_repr)


@dataclass
class InsertResult:
    """The outcome of a successful insert."""

    existing_leaf: Optional[LeafNode]
    """The leaf that was replaced, if the key was already present."""
    new_root: Node
    """The tree root after the insert."""


@dataclass
class MismatchPrefix:
    """The search stopped at an inner node whose prefix differs from the key."""

    matched_prefix_size: int
    mismatched_inner_node: InnerNode


@dataclass
class SplitLeaf:
    """The search reached a leaf, which will be split or overwritten."""

    leaf_node: LeafNode


@dataclass
class IntoExisting:
    """The search stopped at an inner node lacking a child for the next key byte."""

    inner_node: InnerNode


InsertType = Union[MismatchPrefix, SplitLeaf, IntoExisting]


@dataclass
class InsertSearchResult:
    """Everything needed to perform an insert at the located point."""

    parent_and_child_key_byte: Optional[tuple[InnerNode, int]]
    """The parent of the insert point and the key byte leading to it, if any."""
    insert_type: InsertType
    key_bytes_used: int
    """How many key bytes were consumed to reach the insert point."""


def search_for_insert_point(root: Node, key: bytes) -> InsertSearchResult:
    """Find where `key` belongs in the tree at `root`.

    Raises InsertPrefixError if the key runs out inside an inner node, which
    means it is a prefix of an existing key.
    """
    key = bytes(key)
    parent: Optional[tuple[InnerNode, int]] = None
    current: Node = root
    depth = 0

    while isinstance(current, InnerNode):
        header = current.header
        matched = header.match_prefix(key[depth:])
        if matched != header.prefix_size:
            return InsertSearchResult(parent, MismatchPrefix(matched, current), depth)

        depth += matched
        if depth >= len(key):
            raise InsertPrefixError(key)

        child = current.lookup_child(key[depth])
        if child is None:
            return InsertSearchResult(parent, IntoExisting(current), depth)

        parent = (current, key[depth])
        current = child
        depth += 1

    return InsertSearchResult(parent, SplitLeaf(current), depth)


def _split_prefix(
    found: MismatchPrefix, key: bytes, value: Any, depth: int
) -> InnerNode:
    mismatched = found.mismatched_inner_node
    matched = found.matched_prefix_size
    header = mismatched.header
    if depth + matched >= len(key):
        raise InsertPrefixError(key)

    prefix = header.read_prefix()
    new_node = InnerNode4()
    new_node.write_child(prefix[matched], mismatched)
    new_node.write_child(key[depth + matched], LeafNode(key, value))
    new_node.header.extend_prefix(prefix[:matched])
    header.ltrim_prefix(matched + 1)
    return new_node


def _split_leaf(leaf: LeafNode, key: bytes, value: Any, depth: int) -> InnerNode:
    common = 0
    for existing_byte, new_byte in zip(leaf.key[depth:], key[depth:]):
        if existing_byte != new_byte:
            break
        common += 1

    new_node = InnerNode4()
    new_node.header.extend_prefix(key[depth : depth + common])
    depth += common
    if depth >= len(key) or depth >= len(leaf.key):
        raise InsertPrefixError(key)

    new_node.write_child(leaf.key[depth], leaf)
    new_node.write_child(key[depth], LeafNode(key, value))
    return new_node


def _write_into_existing(
    inner: InnerNode, key: bytes, value: Any, depth: int
) -> InnerNode:
    new_leaf = LeafNode(key, value)
    if inner.is_full():
        grown = inner.grow()
        grown.write_child(key[depth], new_leaf)
        return grown
    inner.write_child(key[depth], new_leaf)
    return inner


def insert(root: Node, key: bytes, value: Any) -> InsertResult:
    """Insert `key` with `value` into the tree at `root`.

    An existing entry with the same key is overwritten in place and returned
    as `existing_leaf`. Raises InsertPrefixError if the key is a prefix of an
    existing key or an existing key is a prefix of it.
    """
    key = bytes(key)
    found = search_for_insert_point(root, key)
    insert_type = found.insert_type
    depth = found.key_bytes_used

    if isinstance(insert_type, MismatchPrefix):
        new_node: Node = _split_prefix(insert_type, key, value, depth)
    elif isinstance(insert_type, SplitLeaf):
        leaf = insert_type.leaf_node
        if leaf.matches_full_key(key):
            old_leaf = LeafNode(leaf.key, leaf.value)
            leaf.key = key
            leaf.value = value
            return InsertResult(existing_leaf=old_leaf, new_root=root)
        new_node = _split_leaf(leaf, key, value, depth)
    else:
        new_node = _write_into_existing(insert_type.inner_node, key, value, depth)

    if found.parent_and_child_key_byte is not None:
        parent, key_byte = found.parent_and_child_key_byte
        parent.write_child(key_byte, new_node)
        return InsertResult(existing_leaf=None, new_root=root)
    return InsertResult(existing_leaf=None, new_root=new_node)