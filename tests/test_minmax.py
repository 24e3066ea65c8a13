import itertools

import pytest

from artree.insert import insert
from artree.minmax import maximum, minimum
from artree.nodes import InnerNode4, LeafNode


def generate_key_fixed_length(value_stops):
    axes = [
        [step * (255 // stops) for step in range(stops + 1)] for stops in value_stops
    ]
    for combo in itertools.product(*axes):
        yield bytes(combo)


def generate_keys_skewed(max_len):
    for length in range(1, max_len + 1):
        yield bytes([0] * (length - 1) + [255])


def build_tree(keys):
    keys = iter(keys)
    root = LeafNode(next(keys), 0)
    for idx, key in enumerate(keys, start=1):
        root = insert(root, key, idx).new_root
    return root


def test_leaf_tree_min_max_same():
    root = LeafNode(bytes([1, 2, 3, 4]), "1234")
    min_leaf = minimum(root)
    max_leaf = maximum(root)
    assert min_leaf is max_leaf
    assert min_leaf.key == bytes([1, 2, 3, 4])


def test_large_tree_same_length_keys_min_max():
    root = build_tree(generate_key_fixed_length([5, 5, 5]))
    min_leaf = minimum(root)
    max_leaf = maximum(root)
    assert min_leaf is not max_leaf
    assert min_leaf.key < max_leaf.key
    assert min_leaf.key == bytes([0, 0, 0])
    assert max_leaf.key == bytes([255, 255, 255])


def test_skewed_tree_min_max():
    root = build_tree(generate_keys_skewed(12))
    min_leaf = minimum(root)
    max_leaf = maximum(root)
    assert min_leaf is not max_leaf
    assert min_leaf.key < max_leaf.key
    assert min_leaf.key == bytes([0] * 11 + [255])
    assert max_leaf.key == bytes([255])


def test_min_max_values_follow_insert_order():
    root = build_tree([b"\x05\x01", b"\x01\x09", b"\x09\x00"])
    assert minimum(root).value == 1
    assert maximum(root).value == 2


def test_empty_inner_node_raises():
    with pytest.raises(ValueError):
        minimum(InnerNode4())
    with pytest.raises(ValueError):
        maximum(InnerNode4())