"""Node types of an adaptive radix tree: leaves and the four inner node sizes."""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Iterator, Optional, Union


class NodeType(enum.Enum):
    """The kind of a tree node."""

    NODE4 = "node4"
    NODE16 = "node16"
    NODE48 = "node48"
    NODE256 = "node256"
    LEAF = "leaf"

    def should_shrink_inner_node(self, num_children: int) -> bool:
        """Return True if an inner node of this type holding `num_children`
        children should be replaced by the next smaller node type."""
        if self is NodeType.LEAF:
            raise ValueError("a leaf node has no children to shrink")
        if self is NodeType.NODE4:
            return False
        if self is NodeType.NODE16:
            return num_children <= InnerNode4.CAPACITY
        if self is NodeType.NODE48:
            return num_children <= InnerNode16.CAPACITY
        return num_children <= InnerNode48.CAPACITY


class Header:
    """The compressed key prefix shared by all children of an inner node."""

    def __init__(self, prefix: Iterable[int] = b"") -> None:
        self._prefix = bytearray(prefix)

    def __repr__(self) -> str:
        return f"Header(prefix={bytes(self._prefix)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Header):
            return NotImplemented
        return self._prefix == other._prefix

    @property
    def prefix_size(self) -> int:
        """Number of bytes in the prefix."""
        return len(self._prefix)

    def read_prefix(self) -> bytes:
        """Return the prefix bytes."""
        return bytes(self._prefix)

    def match_prefix(self, key: bytes) -> int:
        """Return how many leading bytes of `key` match the prefix."""
        matched = 0
        for ours, theirs in zip(self._prefix, key):
            if ours != theirs:
                break
            matched += 1
        return matched

    def extend_prefix(self, data: Iterable[int]) -> None:
        """Append bytes to the end of the prefix."""
        self._prefix.extend(data)

    def prepend_prefix(self, data: Iterable[int]) -> None:
        """Insert bytes at the front of the prefix."""
        self._prefix[:0] = bytes(data)

    def ltrim_prefix(self, count: int) -> None:
        """Remove `count` bytes from the front of the prefix."""
        if count < 0 or count > len(self._prefix):
            raise ValueError(
                f"cannot trim {count} bytes from a prefix of {len(self._prefix)} bytes"
            )
        del self._prefix[:count]


@dataclass(eq=False)
class LeafNode:
    """A leaf holding a full key and its value."""

    key: bytes
    value: Any

    def __post_init__(self) -> None:
        self.key = bytes(self.key)

    def matches_full_key(self, key: bytes) -> bool:
        """Return True if `key` equals the key stored in this leaf."""
        return self.key == bytes(key)


def _check_key_byte(key_byte: int) -> int:
    if not 0 <= key_byte <= 255:
        raise ValueError(f"key byte {key_byte} is out of range 0..=255")
    return key_byte


class InnerNode:
    """Behaviour shared by all inner nodes.

    Children are keyed by a single byte and iterate in ascending key order.
    """

    TYPE: ClassVar[NodeType]
    CAPACITY: ClassVar[int]

    def __init__(self, header: Optional[Header] = None) -> None:
        self.header = header if header is not None else Header()

    def __repr__(self) -> str:
        keys = [key_byte for key_byte, _ in self]
        return f"{type(self).__name__}(header={self.header!r}, keys={keys})"

    @property
    def num_children(self) -> int:
        raise NotImplementedError

    def __len__(self) -> int:
        return self.num_children

    def __iter__(self) -> Iterator[tuple[int, Node]]:
        raise NotImplementedError

    def __reversed__(self) -> Iterator[tuple[int, Node]]:
        raise NotImplementedError

    def lookup_child(self, key_byte: int) -> Optional[Node]:
        raise NotImplementedError

    def write_child(self, key_byte: int, child: Node) -> None:
        raise NotImplementedError

    def remove_child(self, key_byte: int) -> Optional[Node]:
        raise NotImplementedError

    def is_full(self) -> bool:
        """Return True if no new key byte can be added to this node."""
        return self.num_children >= self.CAPACITY

    def _copy_into(self, target: type[InnerNode]) -> InnerNode:
        new_node = target(Header(self.header.read_prefix()))
        for key_byte, child in self:
            new_node.write_child(key_byte, child)
        return new_node

    def grow(self) -> InnerNode:
        """Return a node of the next larger type with the same prefix and children."""
        bigger = _GROW_TO.get(type(self))
        if bigger is None:
            raise ValueError(f"{type(self).__name__} cannot grow any larger")
        return self._copy_into(bigger)

    def shrink(self) -> InnerNode:
        """Return a node of the next smaller type with the same prefix and children."""
        smaller = _SHRINK_TO.get(type(self))
        if smaller is None:
            raise ValueError(f"{type(self).__name__} cannot shrink any smaller")
        if self.num_children > smaller.CAPACITY:
            raise ValueError(
                f"{self.num_children} children do not fit in a {smaller.__name__}"
            )
        return self._copy_into(smaller)


class _CompressedInnerNode(InnerNode):
    """An inner node keeping its key bytes and children in sorted parallel lists."""

    def __init__(self, header: Optional[Header] = None) -> None:
        super().__init__(header)
        self._keys: list[int] = []
        self._children: list[Node] = []

    @property
    def num_children(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[tuple[int, Node]]:
        return iter(list(zip(self._keys, self._children)))

    def __reversed__(self) -> Iterator[tuple[int, Node]]:
        return reversed(list(zip(self._keys, self._children)))

    def _position(self, key_byte: int) -> tuple[int, bool]:
        pos = bisect.bisect_left(self._keys, key_byte)
        return pos, pos < len(self._keys) and self._keys[pos] == key_byte

    def lookup_child(self, key_byte: int) -> Optional[Node]:
        pos, found = self._position(key_byte)
        return self._children[pos] if found else None

    def write_child(self, key_byte: int, child: Node) -> None:
        pos, found = self._position(_check_key_byte(key_byte))
        if found:
            self._children[pos] = child
            return
        if self.is_full():
            raise ValueError(f"{type(self).__name__} is full")
        self._keys.insert(pos, key_byte)
        self._children.insert(pos, child)

    def remove_child(self, key_byte: int) -> Optional[Node]:
        pos, found = self._position(key_byte)
        if not found:
            return None
        del self._keys[pos]
        return self._children.pop(pos)


class InnerNode4(_CompressedInnerNode):
    """Inner node with room for up to 4 children."""

    TYPE = NodeType.NODE4
    CAPACITY = 4


class InnerNode16(_CompressedInnerNode):
    """Inner node with room for up to 16 children."""

    TYPE = NodeType.NODE16
    CAPACITY = 16


class InnerNode48(InnerNode):
    """Inner node with a 256-entry index into 48 child slots."""

    TYPE = NodeType.NODE48
    CAPACITY = 48

    def __init__(self, header: Optional[Header] = None) -> None:
        super().__init__(header)
        self._index: list[Optional[int]] = [None] * 256
        self._slots: list[Optional[Node]] = [None] * self.CAPACITY
        self._count = 0

    @property
    def num_children(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[tuple[int, Node]]:
        return iter(
            [
                (key_byte, self._slots[slot])
                for key_byte, slot in enumerate(self._index)
                if slot is not None
            ]
        )

    def __reversed__(self) -> Iterator[tuple[int, Node]]:
        return reversed(list(self))

    def lookup_child(self, key_byte: int) -> Optional[Node]:
        slot = self._index[_check_key_byte(key_byte)]
        return None if slot is None else self._slots[slot]

    def write_child(self, key_byte: int, child: Node) -> None:
        slot = self._index[_check_key_byte(key_byte)]
        if slot is None:
            try:
                slot = self._slots.index(None)
            except ValueError:
                raise ValueError(f"{type(self).__name__} is full") from None
            self._index[key_byte] = slot
            self._count += 1
        self._slots[slot] = child

    def remove_child(self, key_byte: int) -> Optional[Node]:
        slot = self._index[_check_key_byte(key_byte)]
        if slot is None:
            return None
        child = self._slots[slot]
        self._slots[slot] = None
        self._index[key_byte] = None
        self._count -= 1
        return child


class InnerNode256(InnerNode):
    """Inner node with a direct slot for every key byte."""

    TYPE = NodeType.NODE256
    CAPACITY = 256

    def __init__(self, header: Optional[Header] = None) -> None:
        super().__init__(header)
        self._children: list[Optional[Node]] = [None] * self.CAPACITY
        self._count = 0

    @property
    def num_children(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[tuple[int, Node]]:
        return iter(
            [
                (key_byte, child)
                for key_byte, child in enumerate(self._children)
                if child is not None
            ]
        )

    def __reversed__(self) -> Iterator[tuple[int, Node]]:
        return reversed(list(self))

    def lookup_child(self, key_byte: int) -> Optional[Node]:
        return self._children[_check_key_byte(key_byte)]

    def write_child(self, key_byte: int, child: Node) -> None:
        if self._children[_check_key_byte(key_byte)] is None:
            self._count += 1
        self._children[key_byte] = child

    def remove_child(self, key_byte: int) -> Optional[Node]:
        child = self._children[_check_key_byte(key_byte)]
        if child is not None:
            self._children[key_byte] = None
            self._count -= 1
        return child


Node = Union[LeafNode, InnerNode]

_GROW_TO: dict[type, type[InnerNode]] = {
    InnerNode4: InnerNode16,
    InnerNode16: InnerNode48,
    InnerNode48: InnerNode256,
}
_SHRINK_TO: dict[type, type[InnerNode]] = {
    InnerNode16: InnerNode4,
    InnerNode48: InnerNode16,
    InnerNode256: InnerNode48,
}


def node_type(node: Node) -> NodeType:
    """Return the NodeType of a tree node."""
    if isinstance(node, LeafNode):
        return NodeType.LEAF
    if isinstance(node, InnerNode):
        return node.TYPE
    raise TypeError(f"{node!r} is not a tree node")