"""
Incremental Merkle Accumulator - Zero-Hash Table

``zero[h]`` is the root digest of an entirely empty subtree of height ``h``.
Missing nodes resolve to these values, so empty subtrees are never
materialized.
"""

from incmerkle.crypto.errors import InvalidDepthError
from incmerkle.crypto.hashing import ZERO_HASH, HashCombiner
from incmerkle.crypto.nodes import MAX_DEPTH, MIN_DEPTH


def validate_depth(depth: int) -> int:
    """
    Check that ``depth`` is a supported tree depth.

    Raises:
        InvalidDepthError: If depth is not an integer in [1, 63]
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidDepthError(f"Tree depth must be an integer, got {depth!r}")
    if depth < MIN_DEPTH or depth > MAX_DEPTH:
        raise InvalidDepthError(
            f"Invalid tree depth {depth}, must be in [{MIN_DEPTH}, {MAX_DEPTH}]"
        )
    return depth


def build_zero_hashes(depth: int, combine: HashCombiner) -> tuple[str, ...]:
    """
    Precompute the empty-subtree digest for every height.

    Args:
        depth: Number of tree levels including the root
        combine: Parent digest combinator

    Returns:
        Tuple of ``depth`` digests indexed by height

    Raises:
        InvalidDepthError: If depth is outside [1, 63]
    """
    validate_depth(depth)

    zero_hashes = [ZERO_HASH]
    for _ in range(1, depth):
        child_hash = zero_hashes[-1]
        zero_hashes.append(combine(child_hash, child_hash))

    return tuple(zero_hashes)
