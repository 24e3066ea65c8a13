import pytest

from artree.insert import (
    InsertPrefixError,
    IntoExisting,
    MismatchPrefix,
    SplitLeaf,
    insert,
    search_for_insert_point,
)
from artree.lookup import search
from artree.nodes import InnerNode4, LeafNode, NodeType, node_type


def generate_keys_skewed(max_len):
    """Keys of lengths 1..max_len: all zero bytes followed by a final 255."""
    for length in range(1, max_len + 1):
        yield bytes([0] * (length - 1) + [255])


def setup_tree_from_entries(entries):
    entries = iter(entries)
    first_key, first_value = next(entries)
    root = LeafNode(first_key, first_value)
    for key, value in entries:
        root = insert(root, key, value).new_root
    return root


SMALL_ENTRIES = [
    (bytes([1, 2, 3, 4, 5, 6]), "A"),
    (bytes([2, 4, 6, 8, 10, 12]), "B"),
    (bytes([1, 2, 3, 4, 7, 8]), "C"),
    (bytes([1, 2, 3, 4, 5, 9]), "D"),
]


def test_insert_to_small_trees():
    first_leaf = LeafNode(bytes([1, 2, 3, 4]), "1234")
    tree = insert(first_leaf, bytes([1, 2, 5, 6]), "1256").new_root

    assert node_type(tree) is NodeType.NODE4
    assert isinstance(tree, InnerNode4)
    assert tree.header.read_prefix() == bytes([1, 2])
    assert tree.lookup_child(5) is not None
    assert tree.lookup_child(3) is first_leaf
    assert tree.lookup_child(1) is None

    assert search(tree, bytes([1, 2, 5, 6])).value == "1256"
    assert search(tree, bytes([1, 2, 3, 4])).value == "1234"
    assert search(tree, bytes([1, 2, 5, 7])) is None
    assert search(tree, bytes([1, 2, 3, 5])) is None


def test_insert_into_left_skewed_tree():
    limit = 255
    keys = generate_keys_skewed(limit)
    root = LeafNode(next(keys), 0)
    for idx, key in enumerate(keys):
        root = insert(root, key, idx + 1).new_root

    for value, key in enumerate(generate_keys_skewed(limit)):
        assert search(root, key).value == value


def test_insert_prefix_key_errors():
    tree = LeafNode(bytes([1, 2, 3, 4]), "1234")
    with pytest.raises(InsertPrefixError) as excinfo:
        insert(tree, bytes([1, 2]), "12")
    assert excinfo.value.byte_repr == bytes([1, 2])
    assert excinfo.value == InsertPrefixError(bytes([1, 2]))
    assert search(tree, bytes([1, 2, 3, 4])).value == "1234"


def test_insert_prefix_key_with_existing_prefix_errors():
    tree = LeafNode(bytes([1, 2]), "12")
    with pytest.raises(InsertPrefixError) as excinfo:
        insert(tree, bytes([1, 2, 3, 4]), "1234")
    assert excinfo.value.byte_repr == bytes([1, 2, 3, 4])


def test_insert_key_with_long_prefix_then_split():
    tree = LeafNode(bytes([1] * 11 + [255]), 0)
    tree = insert(tree, bytes([1] * 9 + [255]), 1).new_root
    tree = insert(tree, bytes([1, 1, 255]), 2).new_root

    assert search(tree, bytes([1] * 11 + [255])).value == 0
    assert search(tree, bytes([1] * 9 + [255])).value == 1
    assert search(tree, bytes([1, 1, 255])).value == 2


def test_insert_split_prefix_at_implicit_byte():
    keys = [
        bytes([0] * 12),
        bytes([0] * 10 + [51, 51]),
        bytes([0] * 9 + [43, 0, 0]),
    ]
    root = LeafNode(keys[0], 0)
    for idx, key in enumerate(keys[1:]):
        root = insert(root, key, idx + 1).new_root

    for value, key in enumerate(keys):
        assert search(root, key).value == value


def test_insert_fails_new_key_prefix_of_existing_entry():
    root = LeafNode(bytes([1, 2, 3, 4]), 0)
    root = insert(root, bytes([5, 6, 7, 8, 9, 10]), 1).new_root

    with pytest.raises(InsertPrefixError) as excinfo:
        insert(root, bytes([5, 6, 7, 8]), 2)
    assert excinfo.value.byte_repr == bytes([5, 6, 7, 8])


def test_insert_fails_existing_key_prefixed():
    root = LeafNode(bytes([1, 2, 3, 4]), 0)
    root = insert(root, bytes([5, 6, 7, 8]), 1).new_root

    with pytest.raises(InsertPrefixError) as excinfo:
        insert(root, bytes([5, 6, 7, 8, 9, 10]), 2)
    assert excinfo.value.byte_repr == bytes([5, 6, 7, 8, 9, 10])


def test_insert_existing_key_overwrite():
    root = setup_tree_from_entries(SMALL_ENTRIES)

    for key, value in SMALL_ENTRIES:
        assert search(root, key).value == value

    replacements = [
        (bytes([1, 2, 3, 4, 5, 9]), "W", "D"),
        (bytes([1, 2, 3, 4, 7, 8]), "X", "C"),
        (bytes([2, 4, 6, 8, 10, 12]), "Y", "B"),
        (bytes([1, 2, 3, 4, 5, 6]), "Z", "A"),
    ]
    for key, new_value, old_value in replacements:
        result = insert(root, key, new_value)
        assert result.new_root is root
        assert result.existing_leaf.value == old_value
        assert result.existing_leaf.key == key

    for key, new_value, _ in replacements:
        assert search(root, key).value == new_value


def test_overwrite_singleton_leaf_keeps_root():
    leaf = LeafNode(b"abc", 1)
    result = insert(leaf, b"abc", 2)
    assert result.new_root is leaf
    assert result.existing_leaf.value == 1
    assert search(leaf, b"abc").value == 2


@pytest.mark.parametrize(
    "count, expected",
    [
        (4, NodeType.NODE4),
        (5, NodeType.NODE16),
        (16, NodeType.NODE16),
        (17, NodeType.NODE48),
        (48, NodeType.NODE48),
        (49, NodeType.NODE256),
    ],
)
def test_inner_node_grows_with_children(count, expected):
    entries = [(bytes([1, 2, 3, value, 5, 6]), value) for value in range(1, count + 1)]
    root = setup_tree_from_entries(entries)
    assert node_type(root) is expected
    assert root.header.read_prefix() == bytes([1, 2, 3])
    for key, value in entries:
        assert search(root, key).value == value


def test_search_for_insert_point_on_leaf():
    leaf = LeafNode(bytes([1, 2, 3]), "x")
    found = search_for_insert_point(leaf, bytes([1, 2, 4]))
    assert found.parent_and_child_key_byte is None
    assert found.key_bytes_used == 0
    assert isinstance(found.insert_type, SplitLeaf)
    assert found.insert_type.leaf_node is leaf


def test_search_for_insert_point_mismatch_and_existing():
    root = setup_tree_from_entries(SMALL_ENTRIES)

    mismatch = search_for_insert_point(root, bytes([1, 2, 3, 9, 9, 9]))
    assert isinstance(mismatch.insert_type, MismatchPrefix)
    assert mismatch.key_bytes_used == 1
    assert mismatch.insert_type.matched_prefix_size == 2
    assert mismatch.parent_and_child_key_byte == (root, 1)

    into = search_for_insert_point(root, bytes([7, 7]))
    assert isinstance(into.insert_type, IntoExisting)
    assert into.insert_type.inner_node is root
    assert into.key_bytes_used == 0
    assert into.parent_and_child_key_byte is None


def test_search_for_insert_point_key_too_short():
    root = setup_tree_from_entries(SMALL_ENTRIES)
    with pytest.raises(InsertPrefixError) as excinfo:
        search_for_insert_point(root, bytes([1, 2, 3, 4]))
    assert excinfo.value.byte_repr == bytes([1, 2, 3, 4])


def test_mismatch_insert_splits_prefix():
    root = setup_tree_from_entries(SMALL_ENTRIES)
    root = insert(root, bytes([1, 2, 3, 9, 9, 9]), "E").new_root
    assert search(root, bytes([1, 2, 3, 9, 9, 9])).value == "E"
    for key, value in SMALL_ENTRIES:
        assert search(root, key).value == value