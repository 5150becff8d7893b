"""
Incremental Merkle Accumulator - Sparse Node Store
"""

from collections.abc import Iterable

from incmerkle.crypto.errors import IndexOutOfRangeError
from incmerkle.crypto.nodes import node_count, node_height


class SparseNodeStore:
    """
    Node index to digest mapping with implicit zero-hash defaults.

    Only nodes on the root path of an inserted leaf are stored. Any other
    node reads back as the zero hash of its height.
    """

    def __init__(self, depth: int, zero_hashes: tuple[str, ...]) -> None:
        self._depth = depth
        self._zero_hashes = zero_hashes
        self._hashes: dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._hashes)

    def __contains__(self, node_index: int) -> bool:
        return node_index in self._hashes

    def check_index(self, node_index: int) -> None:
        """
        Raises:
            IndexOutOfRangeError: If node_index is not in [1, 2 ** depth)
        """
        upper = node_count(self._depth)
        if node_index < 1 or node_index >= upper:
            raise IndexOutOfRangeError(
                f"Node index {node_index} out of range [1, {upper - 1}]"
            )

    def get(self, node_index: int) -> str:
        """Current digest of a node, falling back to the zero hash."""
        self.check_index(node_index)
        stored = self._hashes.get(node_index)
        if stored is not None:
            return stored
        return self._zero_hashes[node_height(self._depth, node_index)]

    def update(self, entries: Iterable[tuple[int, str]]) -> None:
        """Write a batch of already validated node digests."""
        self._hashes.update(entries)
