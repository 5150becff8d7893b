"""
Incremental Merkle Accumulator - Metrics Module

Prometheus metrics for incremental Merkle trees.

Exports:
- Insertion counters and latency
- Proof generation latency
- Verification outcomes
"""

from incmerkle.metrics.tree_metrics import (
    TreeMetrics,
    get_tree_metrics,
)

__all__ = [
    "TreeMetrics",
    "get_tree_metrics",
]
