# artree

An adaptive radix tree (ART) for byte-string keys, written in plain Python
with no dependencies.

Inner nodes adapt their size to the number of children they hold. They grow
from 4 to 16 to 48 to 256 slots when full. When children are removed they
shrink back, and an inner node that is left with one child is merged into
that child. Each inner node stores a compressed key prefix, so a long run of
shared bytes costs one node rather than one node per byte.

Keys must be prefix-free. No key in the tree may be a prefix of another key.
An insert that would break this rule raises `InsertPrefixError`.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Usage

A tree is its root node. Every operation takes the current root. Operations
that change the tree modify nodes in place and return a result that holds the
new root. Always go on with that new root.

```python
from artree.nodes import LeafNode, node_type
from artree.insert import insert, InsertPrefixError
from artree.lookup import search
from artree.minmax import minimum, maximum
from artree.iterator import TreeIterator
from artree.delete import delete, delete_minimum, delete_maximum

root = LeafNode(b"\x01\x02\x03\x04", "1234")
root = insert(root, b"\x01\x02\x05\x06", "1256").new_root

print(node_type(root))                          # NodeType.NODE4
print(search(root, b"\x01\x02\x05\x06").value)  # 1256
print(search(root, b"\x01\x02\x05\x07"))        # None

# Inserting an existing key replaces its value and returns the old leaf.
result = insert(root, b"\x01\x02\x03\x04", "replaced")
print(result.existing_leaf.value)               # 1234

# Keys that are prefixes of each other are rejected.
try:
    insert(root, b"\x01\x02", "12")
except InsertPrefixError as err:
    print(err.byte_repr)                        # b'\x01\x02'

print(minimum(root).key, maximum(root).key)

# Leaves in key order, from either end.
it = TreeIterator(root)
first = next(it)
last = it.next_back()

# Removing a key returns the removed leaf and the new root.
removed = delete(root, b"\x01\x02\x05\x06")
root = removed.new_root
print(removed.deleted_leaf.value)               # 1256
print(node_type(root))                          # NodeType.LEAF

# The new root is None once the tree is empty.
print(delete_minimum(root).new_root)            # None
```

## Modules

- `artree.nodes`
  - `LeafNode(key, value)` is a dataclass that holds a full key (as `bytes`)
    and its value. `matches_full_key(key)` compares a key with it.
  - `InnerNode4`, `InnerNode16`, `InnerNode48` and `InnerNode256` are the inner
    nodes. Each has a `header` and iterates over `(key_byte, child)` pairs in
    ascending order. `reversed()` gives descending order, and `len()` gives the
    number of children. They offer `lookup_child`, `write_child`,
    `remove_child`, `is_full`, `grow` and `shrink`.
  - `Header` holds an inner node's compressed prefix. It has `prefix_size`,
    `read_prefix`, `match_prefix`, `extend_prefix`, `prepend_prefix` and
    `ltrim_prefix`.
  - `NodeType` names the node kinds. `node_type(node)` returns the kind of a
    node.
- `artree.lookup`: `search(root, key)` returns the matching `LeafNode`, or
  `None`.
- `artree.insert`
  - `insert(root, key, value)` returns an `InsertResult` with `new_root` and
    `existing_leaf`.
  - `search_for_insert_point(root, key)` returns an `InsertSearchResult` whose
    `insert_type` is one of `MismatchPrefix`, `SplitLeaf` or `IntoExisting`.
  - `InsertPrefixError`, a subclass of `ValueError`, is raised for a key that
    breaks the prefix-free rule. Its `byte_repr` holds the rejected key.
- `artree.minmax`: `minimum(root)` and `maximum(root)` return the leaves with
  the smallest and the largest keys.
- `artree.iterator`: `TreeIterator(root)` yields the leaves in ascending key
  order. `next_back()` takes the largest remaining leaf. `reversed(it)` yields
  the remaining leaves from the back. Both ends share one state, so each leaf
  comes out once. Do not modify the tree while an iterator is in use.
- `artree.delete`
  - `delete(root, key)` returns a `DeleteResult`, or `None` if the key is
    absent.
  - `delete_minimum(root)` and `delete_maximum(root)` also return a
    `DeleteResult`.
  - `DeleteResult.new_root` is `None` when the tree has become empty.

## What it does not do

artree is an in-memory data structure only. It has no mapping-style wrapper
class, no command-line tool and no way to save a tree to disk. An empty tree
is `None`, and you keep track of the root yourself.