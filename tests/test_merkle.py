"""
Unit tests for hash combinators, node arithmetic and the zero-hash table.

Includes test vectors and edge case coverage.
"""

import hashlib

import pytest
from eth_utils import keccak

from incmerkle.crypto.errors import (
    IndexOutOfRangeError,
    InvalidDepthError,
    UnsupportedHashFunctionError,
)
from incmerkle.crypto.hashing import (
    ZERO_HASH,
    get_combiner,
    keccak256_pair,
    sha256_pair,
)
from incmerkle.crypto.node_store import SparseNodeStore
from incmerkle.crypto.nodes import (
    MAX_DEPTH,
    is_right_child,
    leaf_node_index,
    left_child,
    max_leaf_count,
    node_height,
    parent,
    right_child,
    sibling,
)
from incmerkle.crypto.zero_hashes import build_zero_hashes


class TestHashFunctions:
    """Tests for the stock hash combinators."""

    def test_sha256_pair(self) -> None:
        """Test SHA-256 combination of two digests."""
        left = "a" * 64
        right = "b" * 64

        result = sha256_pair(left, right)

        expected = hashlib.sha256(bytes.fromhex(left) + bytes.fromhex(right)).hexdigest()
        assert result == expected

    def test_sha256_pair_zero_vector(self) -> None:
        """Test the well-known SHA-256 digest of two zero digests."""
        assert sha256_pair(ZERO_HASH, ZERO_HASH) == (
            "f5a5fd42d16a20302798ef6ed309979b43003d2320d9f0e8ea9831a92759fb4b"
        )

    def test_keccak256_pair(self) -> None:
        """Test Keccak-256 combination of two digests."""
        left = "a" * 64
        right = "b" * 64

        result = keccak256_pair(left, right)

        expected = keccak(bytes.fromhex(left) + bytes.fromhex(right)).hex()
        assert result == expected
        assert result != sha256_pair(left, right)

    def test_order_matters(self) -> None:
        """Test that swapping children changes the parent."""
        left = "a" * 64
        right = "b" * 64
        assert sha256_pair(left, right) != sha256_pair(right, left)

    def test_prefixed_and_uppercase_input(self) -> None:
        """Test that 0x prefixes and case do not change the result."""
        left = "ab" * 32
        right = "cd" * 32

        assert sha256_pair("0x" + left.upper(), right) == sha256_pair(left, right)

    def test_output_is_lowercase_hex(self) -> None:
        """Test the digest representation."""
        result = keccak256_pair("0x" + "AB" * 32, ZERO_HASH)
        assert len(result) == 64
        assert result == result.lower()
        assert not result.startswith("0x")

    def test_wrong_digest_size_raises(self) -> None:
        """Test that short digests are rejected."""
        with pytest.raises(ValueError, match="32 bytes"):
            sha256_pair("abcd", ZERO_HASH)

    def test_non_hex_digest_raises(self) -> None:
        """Test that non-hex digests are rejected."""
        with pytest.raises(ValueError):
            sha256_pair("z" * 64, ZERO_HASH)

    def test_get_combiner(self) -> None:
        """Test combinator lookup by name."""
        assert get_combiner("sha256") is sha256_pair
        assert get_combiner("keccak256") is keccak256_pair
        assert get_combiner("SHA256") is sha256_pair

    def test_get_combiner_unknown(self) -> None:
        """Test that unknown names raise."""
        with pytest.raises(UnsupportedHashFunctionError, match="blake2b"):
            get_combiner("blake2b")


class TestNodeIndices:
    """Tests for level-order node arithmetic."""

    def test_family(self) -> None:
        """Test parent, children and sibling relations."""
        assert left_child(1) == 2
        assert right_child(1) == 3
        assert parent(2) == 1
        assert parent(3) == 1
        assert sibling(4) == 5
        assert sibling(5) == 4
        assert is_right_child(5)
        assert not is_right_child(4)

    def test_leaf_layout(self) -> None:
        """Test leaf placement for a depth-3 tree."""
        assert max_leaf_count(3) == 4
        assert leaf_node_index(3, 0) == 4
        assert leaf_node_index(3, 3) == 7

    def test_heights(self) -> None:
        """Test node heights for a depth-3 tree."""
        assert node_height(3, 1) == 2
        assert node_height(3, 2) == 1
        assert node_height(3, 3) == 1
        assert [node_height(3, i) for i in range(4, 8)] == [0, 0, 0, 0]

    def test_heights_at_max_depth(self) -> None:
        """Test that heights stay exact for 64-bit node indices."""
        last_node = (1 << MAX_DEPTH) - 1
        assert node_height(MAX_DEPTH, last_node) == 0
        assert node_height(MAX_DEPTH, last_node - 1) == 0
        assert node_height(MAX_DEPTH, 1 << (MAX_DEPTH - 1)) == 0
        assert node_height(MAX_DEPTH, (1 << (MAX_DEPTH - 1)) - 1) == 1
        assert sibling(last_node) == last_node - 1


class TestZeroHashes:
    """Tests for the zero-hash table."""

    def test_table(self) -> None:
        """Test that each entry hashes the one below it."""
        zero = build_zero_hashes(4, sha256_pair)

        assert len(zero) == 4
        assert zero[0] == ZERO_HASH
        for h in range(1, 4):
            assert zero[h] == sha256_pair(zero[h - 1], zero[h - 1])

    def test_depth_one(self) -> None:
        """Test the single-level table."""
        assert build_zero_hashes(1, sha256_pair) == (ZERO_HASH,)

    def test_deterministic(self) -> None:
        """Test that the table only depends on depth and combinator."""
        assert build_zero_hashes(8, keccak256_pair) == build_zero_hashes(8, keccak256_pair)
        assert build_zero_hashes(8, keccak256_pair) != build_zero_hashes(8, sha256_pair)

    def test_max_depth(self) -> None:
        """Test the deepest supported table."""
        assert len(build_zero_hashes(MAX_DEPTH, sha256_pair)) == MAX_DEPTH

    @pytest.mark.parametrize("depth", [0, -1, 64, 100])
    def test_invalid_depth(self, depth: int) -> None:
        """Test that out-of-range depths raise."""
        with pytest.raises(InvalidDepthError):
            build_zero_hashes(depth, sha256_pair)

    @pytest.mark.parametrize("depth", [3.0, "3", True, None])
    def test_non_integer_depth(self, depth: object) -> None:
        """Test that non-integer depths raise."""
        with pytest.raises(InvalidDepthError):
            build_zero_hashes(depth, sha256_pair)

    def test_invalid_depth_is_value_error(self) -> None:
        """Test that callers can catch the builtin base."""
        with pytest.raises(ValueError):
            build_zero_hashes(0, sha256_pair)


class TestSparseNodeStore:
    """Tests for the sparse node store."""

    def test_missing_nodes_resolve_to_zero_hashes(self) -> None:
        """Test implicit defaults per height."""
        zero = build_zero_hashes(3, sha256_pair)
        store = SparseNodeStore(3, zero)

        assert len(store) == 0
        assert store.get(1) == zero[2]
        assert store.get(3) == zero[1]
        assert store.get(7) == zero[0]

    def test_update(self) -> None:
        """Test explicit entries shadow defaults."""
        zero = build_zero_hashes(3, sha256_pair)
        store = SparseNodeStore(3, zero)

        store.update([(4, "11" * 32), (2, "22" * 32)])

        assert len(store) == 2
        assert 4 in store
        assert 5 not in store
        assert store.get(4) == "11" * 32
        assert store.get(2) == "22" * 32
        assert store.get(5) == zero[0]

    @pytest.mark.parametrize("node_index", [0, -1, 8, 100])
    def test_out_of_range(self, node_index: int) -> None:
        """Test that invalid node indices raise."""
        store = SparseNodeStore(3, build_zero_hashes(3, sha256_pair))

        with pytest.raises(IndexOutOfRangeError):
            store.get(node_index)
