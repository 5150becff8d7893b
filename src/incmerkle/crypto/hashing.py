"""
Incremental Merkle Accumulator - Hash Combinators

The tree never hashes anything itself; it is handed a combinator that merges
two child digests into their parent digest. This module ships the two
combinators the accumulator is normally deployed with:

- sha256_pair: SHA-256 over the 64-byte concatenation of both children
- keccak256_pair: Keccak-256 over the same input

Concatenating two 32-byte values is exactly the ABI encoding of
``(bytes32, bytes32)``, so roots computed here match on-chain verifiers
that hash ``abi.encode(left, right)``.

Digests are lowercase hex strings without a ``0x`` prefix.
"""

import hashlib
from collections.abc import Callable

from eth_utils import keccak

from incmerkle.crypto.errors import UnsupportedHashFunctionError

HashCombiner = Callable[[str, str], str]

DIGEST_SIZE = 32

# Canonical digest of an empty leaf
ZERO_HASH = "00" * DIGEST_SIZE


def digest_to_bytes(digest: str) -> bytes:
    """
    Decode a hex digest into its 32 raw bytes.

    Accepts an optional ``0x`` prefix and either case.

    Raises:
        ValueError: If the digest is not 32 bytes of hex
    """
    value = digest[2:] if digest[:2] in ("0x", "0X") else digest
    raw = bytes.fromhex(value)
    if len(raw) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}"
        )
    return raw


def sha256_pair(left_hash: str, right_hash: str) -> str:
    """
    Combine two child digests with SHA-256.

    Args:
        left_hash: Hash of left child (hex string)
        right_hash: Hash of right child (hex string)

    Returns:
        Hex-encoded SHA-256 hash of the parent
    """
    hasher = hashlib.sha256()
    hasher.update(digest_to_bytes(left_hash))
    hasher.update(digest_to_bytes(right_hash))
    return hasher.hexdigest()


def keccak256_pair(left_hash: str, right_hash: str) -> str:
    """
    Combine two child digests with Keccak-256.

    Args:
        left_hash: Hash of left child (hex string)
        right_hash: Hash of right child (hex string)

    Returns:
        Hex-encoded Keccak-256 hash of the parent
    """
    return keccak(digest_to_bytes(left_hash) + digest_to_bytes(right_hash)).hex()


HASH_COMBINERS: dict[str, HashCombiner] = {
    "sha256": sha256_pair,
    "keccak256": keccak256_pair,
}


def get_combiner(name: str) -> HashCombiner:
    """
    Look up a stock combinator by name.

    Raises:
        UnsupportedHashFunctionError: If no combinator has that name
    """
    try:
        return HASH_COMBINERS[name.lower()]
    except KeyError:
        raise UnsupportedHashFunctionError(
            f"Unsupported hash function {name!r}, expected one of "
            f"{sorted(HASH_COMBINERS)}"
        ) from None
