"""
Merkle Tree Unit Tests
Tests for vmt/merkle/merkle_tree.py

Every test that builds a tree runs in both lookup modes (linear, indexed).

Required properties:
1. Shape - height, node count and data size for 0..4 leaves
2. Padding - odd levels duplicate their last node
3. Commutativity - reversing leaf order keeps the root for matched pairs
4. leafs_count() is the unpadded input length
5. Both lookup modes produce byte-identical trees
"""
import pytest

from fixtures.common import make_tree, make_values
from vmt.config.runtime import TreeConfig, set_default_config
from vmt.crypto.hashing import SHA256, SHA512, leaf_hash, pair_hash
from vmt.merkle.merkle_tree import MerkleTree, build_tree
from vmt.schemas.errors import LeafEncodingException, UnknownAlgorithmException


def H(value):
    return leaf_hash(value, SHA512)


def P(a, b):
    return pair_hash(a, b, SHA512)


class TestEmptyTree:
    """Tests for zero-leaf trees."""

    def test_empty_tree_shape(self, indexed):
        tree = make_tree([], indexed=indexed)

        assert tree.is_empty()
        assert tree.height() == 0
        assert tree.nodes_count() == 0
        assert tree.data_size() == 0
        assert tree.leafs_count() == 0

    def test_empty_tree_root_is_empty(self, indexed):
        tree = make_tree([], indexed=indexed)

        assert tree.get_root() == b""
        assert bytes(tree) == b""


class TestSmallTrees:
    """Tests for the reference shapes with one to four leaves."""

    def test_single_leaf(self, indexed, algo):
        tree = make_tree(["one"], indexed=indexed)

        assert not tree.is_empty()
        assert tree.height() == 2
        assert tree.nodes_count() == 3
        assert tree.data_size() == 3 * algo.output_len
        assert tree.leafs_count() == 1
        assert tree.get_root() == P(H("one"), H("one"))

    def test_two_leaves(self, indexed, algo):
        tree = make_tree(["one", "two"], indexed=indexed)

        assert tree.height() == 2
        assert tree.nodes_count() == 3
        assert tree.data_size() == 3 * algo.output_len
        assert tree.get_root() == P(H("one"), H("two"))

    def test_three_leaves_pads_last(self, indexed, algo):
        tree = make_tree(["one", "two", "four"], indexed=indexed)

        # Level 0: [one, two, four, four]
        # Level 1: [P(one, two), P(four, four)]
        # Level 2: [root]
        expected = P(P(H("four"), H("four")), P(H("one"), H("two")))

        assert tree.height() == 3
        assert tree.nodes_count() == 7
        assert tree.data_size() == 7 * algo.output_len
        assert tree.leafs_count() == 3
        assert tree.get_root() == expected

    def test_four_leaves(self, indexed, algo):
        values = ["one", "two", "four", "three"]
        tree = make_tree(values, indexed=indexed)

        d0, d1, d2, d3 = (H(v) for v in values)
        expected = P(P(d2, d3), P(d0, d1))

        assert tree.height() == 3
        assert tree.nodes_count() == 7
        assert tree.data_size() == 7 * algo.output_len
        assert tree.get_root() == expected

    def test_all_equal_leaves(self, indexed):
        tree = make_tree(["one"] * 4, indexed=indexed)

        d = H("one")
        dd = P(d, d)

        assert tree.height() == 3
        assert tree.nodes_count() == 7
        assert tree.get_root() == P(dd, dd)


class TestStorageLayout:
    """Tests for the flat array layout."""

    def test_leaf_level_first_root_last(self, indexed, algo):
        values = ["one", "two", "three"]
        tree = make_tree(values, indexed=indexed)
        size = algo.output_len
        data = bytes(tree)

        leaves = [data[i * size:(i + 1) * size] for i in range(4)]
        assert leaves == [H("one"), H("two"), H("three"), H("three")]
        assert data[-size:] == tree.get_root()

    def test_five_leaves_pads_two_levels(self, indexed, algo):
        values = make_values(5)
        tree = make_tree(values, indexed=indexed)
        a, b, c, d, e = (H(v) for v in values)

        # Level 0: [a, b, c, d, e, e]
        # Level 1: [ab, cd, ee, ee]  (ee duplicated)
        # Level 2: [abcd, eeee]
        # Level 3: [root]
        ab, cd, ee = P(a, b), P(c, d), P(e, e)
        expected = P(P(ab, cd), P(ee, ee))

        assert tree.height() == 4
        assert tree.nodes_count() == 13
        assert tree.leafs_count() == 5
        assert tree.get_root() == expected

    def test_array_is_immutable_bytes(self, indexed):
        tree = make_tree(make_values(3), indexed=indexed)

        assert isinstance(tree.array, bytes)
        with pytest.raises(AttributeError):
            tree.extra = 1


class TestCommutativity:
    """Root invariance under reorderings the pair hash cannot see."""

    def test_two_leaves_reversed(self, indexed):
        forward = make_tree(["one", "two"], indexed=indexed)
        reverse = make_tree(["two", "one"], indexed=indexed)

        assert forward.get_root() == reverse.get_root()

    def test_four_leaves_reversed(self, indexed):
        forward = make_tree(["one", "two", "three", "four"], indexed=indexed)
        reverse = make_tree(["four", "three", "two", "one"], indexed=indexed)

        assert forward.get_root() == reverse.get_root()

    def test_adjacent_pair_swap(self, indexed):
        forward = make_tree(["one", "two", "three", "four"], indexed=indexed)
        swapped = make_tree(["two", "one", "three", "four"], indexed=indexed)

        assert forward.get_root() == swapped.get_root()

    def test_different_leaves_different_roots(self, indexed):
        a = make_tree(["one", "two"], indexed=indexed)
        b = make_tree(["one", "three"], indexed=indexed)

        assert a.get_root() != b.get_root()


class TestLeafCount:
    """leafs_count() is never affected by padding."""

    @pytest.mark.parametrize("count", list(range(0, 17)))
    def test_leafs_count_equals_input_length(self, count, indexed):
        tree = make_tree(make_values(count), indexed=indexed)

        assert tree.leafs_count() == count

    def test_duplicate_last_leaf_is_distinguished_by_count(self, indexed):
        """n leaves vs n+1 where the extra equals the last: same root, different count."""
        three = make_tree(["one", "two", "three"], indexed=indexed)
        four = make_tree(["one", "two", "three", "three"], indexed=indexed)

        assert three.get_root() == four.get_root()
        assert three.leafs_count() != four.leafs_count()


class TestLookupModes:
    """Indexed and linear trees are byte-identical."""

    @pytest.mark.parametrize("count", list(range(0, 8)))
    def test_identical_arrays(self, count):
        values = make_values(count)
        linear = MerkleTree.new(values, SHA512)
        indexed = MerkleTree.new_with_index(values, SHA512)

        assert bytes(linear) == bytes(indexed)
        assert linear.height() == indexed.height()
        assert linear.get_root() == indexed.get_root()

    def test_is_indexed_flag(self):
        assert not MerkleTree.new(["a"], SHA512).is_indexed
        assert MerkleTree.new_with_index(["a"], SHA512).is_indexed


class TestConstruction:
    """Tests for constructor inputs."""

    def test_algorithm_by_name(self):
        by_name = MerkleTree.new(["one", "two"], "sha256")
        by_instance = MerkleTree.new(["one", "two"], SHA256)

        assert by_name.algorithm is SHA256
        assert by_name.get_root() == by_instance.get_root()
        assert by_name.output_len == 32

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnknownAlgorithmException):
            MerkleTree.new(["one"], "md42")

    def test_accepts_generator(self):
        tree = build_tree((v for v in ["one", "two", "three"]), SHA512)

        assert tree.leafs_count() == 3
        assert tree.get_root() == make_tree(["one", "two", "three"]).get_root()

    def test_bytes_and_str_leaves_agree(self):
        as_str = build_tree(["one", "two"], SHA512)
        as_bytes = build_tree([b"one", b"two"], SHA512)

        assert as_str.get_root() == as_bytes.get_root()

    def test_leaf_without_byte_view_raises(self):
        with pytest.raises(LeafEncodingException):
            build_tree(["one", 2], SHA512)

    def test_from_config(self):
        config = TreeConfig(algorithm="sha256", use_index=False)
        tree = MerkleTree.from_config(["one", "two"], config)

        assert tree.algorithm is SHA256
        assert not tree.is_indexed

    def test_from_default_config(self):
        set_default_config(TreeConfig(algorithm="blake2b", use_index=True))
        tree = MerkleTree.from_config(["one"])

        assert tree.algorithm.name == "blake2b"
        assert tree.is_indexed

    def test_repr(self):
        tree = MerkleTree.new_with_index(["one", "two", "three"], SHA512)

        assert repr(tree) == "MerkleTree(algorithm='sha512', leaves=3, height=3, indexed=True)"
