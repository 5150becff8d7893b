"""
Incremental Merkle Accumulator - Node Index Arithmetic

Nodes are addressed in level order starting at the root::

         1
       /   \\
      2     3
     / \\   / \\
    4   5 6   7

For a tree of ``depth`` levels the leaves occupy
``[2 ** (depth - 1), 2 ** depth)`` and leaf ``k`` lives at node
``2 ** (depth - 1) + k``.
"""

MIN_DEPTH = 1
# Node indices must fit an unsigned 64-bit integer
MAX_DEPTH = 63


def parent(node_index: int) -> int:
    return node_index >> 1


def left_child(node_index: int) -> int:
    return node_index << 1


def right_child(node_index: int) -> int:
    return (node_index << 1) | 1


def sibling(node_index: int) -> int:
    return node_index ^ 1


def is_right_child(node_index: int) -> bool:
    return node_index & 1 == 1


def node_count(depth: int) -> int:
    """Exclusive upper bound of valid node indices."""
    return 1 << depth


def max_leaf_count(depth: int) -> int:
    return 1 << (depth - 1)


def leaf_node_index(depth: int, leaf_index: int) -> int:
    """Node index of the ``leaf_index``-th leaf."""
    return max_leaf_count(depth) + leaf_index


def node_height(depth: int, node_index: int) -> int:
    """
    Distance from ``node_index`` to the leaf level.

    ``bit_length() - 1`` is ``floor(log2(node_index))`` computed exactly.
    """
    return depth - node_index.bit_length()
