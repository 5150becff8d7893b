"""
Incremental Merkle Accumulator - Incremental Merkle Tree

Append-only binary Merkle tree of fixed depth. Leaves are filled strictly
left to right, unfilled subtrees are represented by zero hashes, and the
root after every insertion is kept so that proofs can target any past
snapshot.

Example:
    >>> tree = IncrementalMerkleTree.with_hash_function(3, "sha256")
    >>> tree.insert_leaf(0, "11" * 32, b"first")
    >>> tree.insert_leaf(1, "22" * 32, b"second")
    >>> proof = tree.get_proof(0, 0)
    >>> tree.is_valid_proof(0, 0, proof)
    True
"""

import threading
import time
from typing import Any

import structlog

from incmerkle.core.config import Settings, settings as default_settings
from incmerkle.crypto.errors import (
    IndexOutOfRangeError,
    MerkleTreeError,
    OutOfOrderInsertionError,
    TreeFullError,
)
from incmerkle.crypto.hashing import HashCombiner, get_combiner
from incmerkle.crypto.node_store import SparseNodeStore
from incmerkle.crypto.nodes import (
    is_right_child,
    leaf_node_index,
    max_leaf_count,
    parent,
    sibling,
)
from incmerkle.crypto.proof import HistoricalProof, generate_proof, verify_proof
from incmerkle.crypto.zero_hashes import build_zero_hashes
from incmerkle.metrics.tree_metrics import TreeMetrics, get_tree_metrics

logger = structlog.get_logger(__name__)


class IncrementalMerkleTree:
    """
    Incremental Merkle tree with historical roots.

    Features:
    - Strictly sequential, append-only insertion
    - Sparse node storage with zero-hash defaults
    - Root snapshot after every insertion, with reverse lookup
    - Inclusion proofs against any recorded snapshot
    - Pluggable parent hash combinator

    ``insert_leaf`` is the only mutator. It and the multi-step reads hold
    the tree lock, so threads see either all or none of an insertion.
    """

    def __init__(
        self,
        depth: int,
        combine: HashCombiner,
        metrics: TreeMetrics | None = None,
    ) -> None:
        """
        Create an empty tree.

        Args:
            depth: Number of levels including the root, in [1, 63]
            combine: Parent digest combinator
            metrics: Metrics sink, None to record nothing

        Raises:
            InvalidDepthError: If depth is outside [1, 63]
        """
        self._zero_hashes = build_zero_hashes(depth, combine)
        self._depth = depth
        self._combine = combine
        self._metrics = metrics

        self._nodes = SparseNodeStore(depth, self._zero_hashes)
        self._leaves: list[tuple[str, Any]] = []
        self._root_after: list[str] = []
        self._index_of_root: dict[str, int] = {}
        self._lock = threading.RLock()

        logger.info(
            "Created incremental Merkle tree",
            depth=depth,
            max_leaf_count=self.max_leaf_count,
        )

    @classmethod
    def with_hash_function(
        cls,
        depth: int,
        hash_function: str = "sha256",
        metrics: TreeMetrics | None = None,
    ) -> "IncrementalMerkleTree":
        """
        Create a tree using a stock combinator by name.

        Raises:
            UnsupportedHashFunctionError: If hash_function is unknown
            InvalidDepthError: If depth is outside [1, 63]
        """
        return cls(depth, get_combiner(hash_function), metrics=metrics)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "IncrementalMerkleTree":
        """Create a tree with the configured depth and hash function."""
        settings = settings or default_settings

        metrics = None
        if settings.METRICS_ENABLED:
            metrics = get_tree_metrics()
            metrics.set_service_info(
                version=settings.VERSION,
                environment=settings.ENV,
                hash_function=settings.HASH_FUNCTION,
            )

        return cls.with_hash_function(
            settings.TREE_DEPTH,
            settings.HASH_FUNCTION,
            metrics=metrics,
        )

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def combine(self) -> HashCombiner:
        return self._combine

    @property
    def zero_hashes(self) -> tuple[str, ...]:
        return self._zero_hashes

    @property
    def leaf_count(self) -> int:
        return len(self._leaves)

    @property
    def max_leaf_count(self) -> int:
        return max_leaf_count(self._depth)

    @property
    def is_full(self) -> bool:
        return self.leaf_count == self.max_leaf_count

    def node_hash(self, node_index: int) -> str:
        """
        Get the current digest of a node.

        Raises:
            IndexOutOfRangeError: If node_index is not in [1, 2 ** depth)
        """
        return self._nodes.get(node_index)

    def current_root_hash(self) -> str:
        """Get the root digest of the tree as it stands now."""
        return self._nodes.get(1)

    def root_hash_after(self, leaf_index: int) -> str:
        """
        Get the root digest recorded right after a leaf was inserted.

        Raises:
            IndexOutOfRangeError: If leaf_index is not in [0, leaf_count)
        """
        self._check_leaf_index(leaf_index)
        return self._root_after[leaf_index]

    def root_index_of(self, root_hash: str) -> int | None:
        """Get the leaf index whose insertion produced root_hash, if any."""
        return self._index_of_root.get(root_hash)

    def get_leaf(self, leaf_index: int) -> tuple[str, Any]:
        """
        Get the hash and payload of an inserted leaf.

        Raises:
            IndexOutOfRangeError: If leaf_index is not in [0, leaf_count)
        """
        self._check_leaf_index(leaf_index)
        return self._leaves[leaf_index]

    def insert_leaf(self, leaf_index: int, leaf_hash: str, payload: Any) -> None:
        """
        Append a leaf and record the resulting root.

        Args:
            leaf_index: Must equal the current leaf count
            leaf_hash: Precomputed leaf digest
            payload: Opaque leaf data stored alongside the digest

        Raises:
            TreeFullError: If every leaf slot is taken
            OutOfOrderInsertionError: If leaf_index is not the next slot
        """
        with self._lock:
            start = time.perf_counter()
            count = len(self._leaves)

            if count == self.max_leaf_count:
                logger.warning(
                    "Rejected leaf insertion, tree is full",
                    leaf_index=leaf_index,
                    max_leaf_count=self.max_leaf_count,
                )
                self._record_rejection("tree_full")
                raise TreeFullError(
                    f"Tree is full ({self.max_leaf_count} leaves)"
                )
            if leaf_index != count:
                logger.warning(
                    "Rejected out-of-order leaf insertion",
                    leaf_index=leaf_index,
                    leaf_count=count,
                )
                self._record_rejection("out_of_order")
                raise OutOfOrderInsertionError(
                    f"Leaf index {leaf_index} != leaf count {count}"
                )

            # Compute the new root path before writing anything
            node = leaf_node_index(self._depth, leaf_index)
            current_hash = leaf_hash
            path = [(node, current_hash)]
            for _ in range(1, self._depth):
                sibling_hash = self._nodes.get(sibling(node))
                if is_right_child(node):
                    current_hash = self._combine(sibling_hash, current_hash)
                else:
                    current_hash = self._combine(current_hash, sibling_hash)
                node = parent(node)
                path.append((node, current_hash))

            self._nodes.update(path)
            self._leaves.append((leaf_hash, payload))
            self._root_after.append(current_hash)
            self._index_of_root[current_hash] = leaf_index

            duration = time.perf_counter() - start

        logger.debug(
            "Inserted leaf",
            leaf_index=leaf_index,
            root_hash=current_hash[:16] + "...",
        )
        if self._metrics is not None:
            self._metrics.record_insertion(duration, leaf_index + 1)

    def get_proof(self, prove_leaf_index: int, target_leaf_index: int) -> list[str]:
        """
        Prove a leaf against the root recorded after target_leaf_index.

        Args:
            prove_leaf_index: Leaf to prove
            target_leaf_index: Snapshot to prove against, >= prove_leaf_index

        Returns:
            ``depth`` digests: the leaf digest, then one sibling per height

        Raises:
            ProveIndexAfterTargetError: If prove_leaf_index > target_leaf_index
            TargetIndexUnseenError: If target_leaf_index is not inserted yet
        """
        start = time.perf_counter()
        with self._lock:
            try:
                proof = generate_proof(self, prove_leaf_index, target_leaf_index)
            except MerkleTreeError as e:
                logger.warning(
                    "Rejected proof request",
                    prove_leaf_index=prove_leaf_index,
                    target_leaf_index=target_leaf_index,
                    error=str(e),
                )
                raise

        if self._metrics is not None:
            self._metrics.record_proof_generated(time.perf_counter() - start)
        return proof

    def build_proof(
        self,
        prove_leaf_index: int,
        target_leaf_index: int,
    ) -> HistoricalProof:
        """Like get_proof, bundled with the indices and the target root."""
        with self._lock:
            path = self.get_proof(prove_leaf_index, target_leaf_index)
            root_hash = self.root_hash_after(target_leaf_index)
        return HistoricalProof(
            prove_leaf_index=prove_leaf_index,
            target_leaf_index=target_leaf_index,
            path=path,
            root_hash=root_hash,
        )

    def is_valid_proof(
        self,
        prove_leaf_index: int,
        target_leaf_index: int,
        proof: list[str],
    ) -> bool:
        """
        Check a proof against the root recorded after target_leaf_index.

        Returns:
            True if the proof reconstructs that root from the stored leaf

        Raises:
            InvalidProofLengthError: If len(proof) != depth
        """
        with self._lock:
            valid = verify_proof(self, prove_leaf_index, target_leaf_index, proof)

        if self._metrics is not None:
            self._metrics.record_verification(valid)
        return valid

    def _check_leaf_index(self, leaf_index: int) -> None:
        if leaf_index < 0 or leaf_index >= len(self._leaves):
            raise IndexOutOfRangeError(f"Leaf index {leaf_index} out of bounds")

    def _record_rejection(self, reason: str) -> None:
        if self._metrics is not None:
            self._metrics.record_insertion_rejected(reason)
