"""
Incremental Merkle Accumulator

Append-only Merkle tree with historical roots and inclusion proofs against
any past snapshot.
"""

__version__ = "1.0.0"
