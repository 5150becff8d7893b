"""
Incremental Merkle Accumulator - Historical Inclusion Proofs

A historical proof shows that a leaf was part of the tree as it stood right
after some later (or the same) leaf was inserted. The proof is a list of
``depth`` digests: the proven leaf's own digest followed by one sibling
digest per height on the way up to the root.

Because leaves are appended strictly left to right, a subtree that lies
entirely to the left of a leaf's ancestor chain never changes again once the
chain has passed it, so its current digest is also its historical digest.
Anything to the right of the target snapshot's frontier is rebuilt from the
zero-hash table instead of being read from the live tree, where later
insertions may already have overwritten it.
"""

from dataclasses import dataclass
from typing import Any, Protocol

from incmerkle.crypto.errors import (
    IndexOutOfRangeError,
    InvalidProofLengthError,
    ProveIndexAfterTargetError,
    TargetIndexUnseenError,
)
from incmerkle.crypto.hashing import HashCombiner
from incmerkle.crypto.nodes import (
    is_right_child,
    leaf_node_index,
    max_leaf_count,
    node_height,
    parent,
    sibling,
)
from incmerkle.crypto.zero_hashes import validate_depth


class TreeReader(Protocol):
    """Read interface a tree exposes to proof generation."""

    depth: int
    combine: HashCombiner
    zero_hashes: tuple[str, ...]
    leaf_count: int

    def node_hash(self, node_index: int) -> str: ...

    def root_hash_after(self, leaf_index: int) -> str: ...


@dataclass
class HistoricalProof:
    """
    Inclusion proof of one leaf against a historical root.

    Attributes:
        prove_leaf_index: Index of the leaf being proven
        target_leaf_index: Leaf whose insertion produced ``root_hash``
        path: Leaf digest followed by one sibling digest per height
        root_hash: Root of the tree right after ``target_leaf_index``
    """

    prove_leaf_index: int
    target_leaf_index: int
    path: list[str]
    root_hash: str

    @property
    def leaf_hash(self) -> str:
        return self.path[0]

    @property
    def depth(self) -> int:
        return len(self.path)

    def to_dict(self) -> dict[str, Any]:
        """Serialize proof to dictionary for storage."""
        return {
            "prove_leaf_index": self.prove_leaf_index,
            "target_leaf_index": self.target_leaf_index,
            "path": list(self.path),
            "root_hash": self.root_hash,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoricalProof":
        """Deserialize proof from dictionary."""
        return cls(
            prove_leaf_index=data["prove_leaf_index"],
            target_leaf_index=data["target_leaf_index"],
            path=list(data["path"]),
            root_hash=data["root_hash"],
        )

    def verify(self, combine: HashCombiner) -> bool:
        """Check the proof against its own recorded root."""
        return verify_proof_against_root(
            self.prove_leaf_index,
            self.depth,
            self.path,
            self.root_hash,
            combine,
        )


def generate_proof(
    tree: TreeReader,
    prove_leaf_index: int,
    target_leaf_index: int,
) -> list[str]:
    """
    Build the proof of ``prove_leaf_index`` under the root recorded right
    after ``target_leaf_index`` was inserted.

    Args:
        tree: Tree to read node digests from
        prove_leaf_index: Leaf to prove
        target_leaf_index: Leaf whose snapshot root the proof targets

    Returns:
        ``tree.depth`` digests, leaf digest first

    Raises:
        IndexOutOfRangeError: If prove_leaf_index is negative
        ProveIndexAfterTargetError: If prove_leaf_index > target_leaf_index
        TargetIndexUnseenError: If target_leaf_index has not been inserted
    """
    if prove_leaf_index < 0:
        raise IndexOutOfRangeError(f"Leaf index {prove_leaf_index} out of bounds")
    if prove_leaf_index > target_leaf_index:
        raise ProveIndexAfterTargetError(
            f"Prove leaf {prove_leaf_index} is after target leaf {target_leaf_index}"
        )
    if target_leaf_index >= tree.leaf_count:
        raise TargetIndexUnseenError(
            f"Target leaf {target_leaf_index} not inserted yet "
            f"(leaf count {tree.leaf_count})"
        )

    combine = tree.combine
    zero_hashes = tree.zero_hashes

    prove_node = leaf_node_index(tree.depth, prove_leaf_index)
    target_node = leaf_node_index(tree.depth, target_leaf_index)

    proof = [tree.node_hash(prove_node)]
    # Digest of target_node as of the target snapshot
    target_hash = tree.node_hash(target_node)

    for height in range(1, tree.depth):
        if is_right_child(prove_node):
            # Left sibling is finalized
            proof.append(tree.node_hash(sibling(prove_node)))
        elif prove_node < target_node - 1:
            #       parent
            #      /      \
            # prove_node | sibling | ... | target_node
            proof.append(tree.node_hash(sibling(prove_node)))
        elif prove_node == target_node - 1:
            #       parent
            #      /      \
            # prove_node | target_node
            proof.append(target_hash)
        else:
            # Paths merged; the right half was still empty at snapshot time
            proof.append(zero_hashes[node_height(tree.depth, prove_node)])

        if is_right_child(target_node):
            target_hash = combine(tree.node_hash(sibling(target_node)), target_hash)
        else:
            target_hash = combine(target_hash, zero_hashes[height - 1])

        prove_node = parent(prove_node)
        target_node = parent(target_node)

    return proof


def compute_root_from_proof(
    leaf_index: int,
    depth: int,
    proof: list[str],
    combine: HashCombiner,
) -> str:
    """
    Fold a proof into the root it commits to.

    Args:
        leaf_index: Index of the proven leaf
        depth: Depth of the tree the proof was built for
        proof: Leaf digest followed by one sibling digest per height
        combine: Parent digest combinator

    Returns:
        Computed root hash

    Raises:
        InvalidDepthError: If depth is outside [1, 63]
        InvalidProofLengthError: If len(proof) != depth
        IndexOutOfRangeError: If leaf_index does not fit the tree
    """
    validate_depth(depth)
    if len(proof) != depth:
        raise InvalidProofLengthError(
            f"Proof has {len(proof)} digests, expected {depth}"
        )
    if leaf_index < 0 or leaf_index >= max_leaf_count(depth):
        raise IndexOutOfRangeError(f"Leaf index {leaf_index} out of bounds")

    node = leaf_node_index(depth, leaf_index)
    current_hash = proof[0]

    for sibling_hash in proof[1:]:
        if is_right_child(node):
            current_hash = combine(sibling_hash, current_hash)
        else:
            current_hash = combine(current_hash, sibling_hash)
        node = parent(node)

    return current_hash


def verify_proof_against_root(
    leaf_index: int,
    depth: int,
    proof: list[str],
    expected_root: str,
    combine: HashCombiner,
) -> bool:
    """
    Verify a proof against a specific root hash, without a tree.

    Returns:
        True if the proof reconstructs to expected_root
    """
    return compute_root_from_proof(leaf_index, depth, proof, combine) == expected_root


def verify_proof(
    tree: TreeReader,
    prove_leaf_index: int,
    target_leaf_index: int,
    proof: list[str],
) -> bool:
    """
    Verify a proof against the root the tree recorded after
    ``target_leaf_index``.

    A malformed proof (wrong length) raises; a proof that simply does not
    check out returns False, including proofs for leaves the target
    snapshot never contained.

    Raises:
        InvalidProofLengthError: If len(proof) != tree.depth
    """
    if len(proof) != tree.depth:
        raise InvalidProofLengthError(
            f"Proof has {len(proof)} digests, expected {tree.depth}"
        )
    if not 0 <= prove_leaf_index <= target_leaf_index < tree.leaf_count:
        return False

    leaf_hash = tree.node_hash(leaf_node_index(tree.depth, prove_leaf_index))
    if proof[0] != leaf_hash:
        return False

    computed = compute_root_from_proof(
        prove_leaf_index, tree.depth, proof, tree.combine
    )
    return computed == tree.root_hash_after(target_leaf_index)
