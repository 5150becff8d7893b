"""
Pytest configuration and shared fixtures for incremental Merkle tree tests.
"""

import hashlib
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from incmerkle.crypto.hashing import sha256_pair
from incmerkle.crypto.incremental_tree import IncrementalMerkleTree
from incmerkle.metrics.tree_metrics import TreeMetrics


def make_leaf_hash(i: int) -> str:
    """Deterministic leaf digest for leaf ``i``."""
    return hashlib.sha256(f"leaf {i}".encode("utf-8")).hexdigest()


def fill_tree(tree: IncrementalMerkleTree, count: int) -> list[str]:
    """Insert ``count`` leaves and return their digests."""
    hashes = []
    for i in range(count):
        leaf_hash = make_leaf_hash(i)
        tree.insert_leaf(i, leaf_hash, f"payload {i}".encode("utf-8"))
        hashes.append(leaf_hash)
    return hashes


@pytest.fixture
def leaf_hash() -> Callable[[int], str]:
    """Leaf digest factory."""
    return make_leaf_hash


@pytest.fixture
def small_tree() -> IncrementalMerkleTree:
    """Empty depth-3 tree (4 leaves) using SHA-256."""
    return IncrementalMerkleTree(3, sha256_pair)


@pytest.fixture
def full_tree() -> IncrementalMerkleTree:
    """Depth-5 tree with all 16 leaves inserted."""
    tree = IncrementalMerkleTree(5, sha256_pair)
    fill_tree(tree, 16)
    return tree


@pytest.fixture
def mock_metrics() -> MagicMock:
    """Metrics sink that records calls instead of touching Prometheus."""
    return MagicMock(spec=TreeMetrics)


@pytest.fixture
def insert_leaves() -> Callable[[IncrementalMerkleTree, int], list[str]]:
    """Helper inserting ``count`` deterministic leaves into a tree."""
    return fill_tree
