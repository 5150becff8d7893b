"""
Incremental Merkle Accumulator - Cryptographic Utilities

Provides the incremental Merkle tree, historical proof generation and
verification, and the stock hash combinators.
"""

from incmerkle.crypto.errors import (
    IndexOutOfRangeError,
    InvalidDepthError,
    InvalidProofLengthError,
    MerkleTreeError,
    OutOfOrderInsertionError,
    ProveIndexAfterTargetError,
    TargetIndexUnseenError,
    TreeFullError,
    UnsupportedHashFunctionError,
)
from incmerkle.crypto.hashing import (
    ZERO_HASH,
    HashCombiner,
    get_combiner,
    keccak256_pair,
    sha256_pair,
)
from incmerkle.crypto.incremental_tree import IncrementalMerkleTree
from incmerkle.crypto.proof import (
    HistoricalProof,
    compute_root_from_proof,
    verify_proof_against_root,
)
from incmerkle.crypto.zero_hashes import build_zero_hashes

__all__ = [
    "IncrementalMerkleTree",
    "HistoricalProof",
    "HashCombiner",
    "ZERO_HASH",
    "build_zero_hashes",
    "compute_root_from_proof",
    "get_combiner",
    "keccak256_pair",
    "sha256_pair",
    "verify_proof_against_root",
    "MerkleTreeError",
    "InvalidDepthError",
    "IndexOutOfRangeError",
    "TreeFullError",
    "OutOfOrderInsertionError",
    "ProveIndexAfterTargetError",
    "TargetIndexUnseenError",
    "InvalidProofLengthError",
    "UnsupportedHashFunctionError",
]
