"""
Incremental Merkle Accumulator - Tree Errors

Every failure is a precondition violation raised before the tree is touched,
so a caller that catches one of these can rely on the tree being unchanged.
"""


class MerkleTreeError(Exception):
    """Base exception for incremental Merkle tree errors."""

    pass


class InvalidDepthError(MerkleTreeError, ValueError):
    """Tree depth is outside the supported range."""

    pass


class IndexOutOfRangeError(MerkleTreeError, IndexError):
    """Node or leaf index does not address an existing position."""

    pass


class TreeFullError(MerkleTreeError):
    """Every leaf slot of the tree is already filled."""

    pass


class OutOfOrderInsertionError(MerkleTreeError, ValueError):
    """Leaf index is not the next free slot."""

    pass


class ProveIndexAfterTargetError(MerkleTreeError, ValueError):
    """Proven leaf was inserted after the target snapshot."""

    pass


class TargetIndexUnseenError(MerkleTreeError, IndexError):
    """Target snapshot has not been recorded yet."""

    pass


class InvalidProofLengthError(MerkleTreeError, ValueError):
    """Proof does not carry exactly one digest per tree level."""

    pass


class UnsupportedHashFunctionError(MerkleTreeError, ValueError):
    """No stock combinator is registered under the requested name."""

    pass
