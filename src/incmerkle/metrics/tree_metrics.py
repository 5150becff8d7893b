"""
Incremental Merkle Accumulator - Tree Metrics

Prometheus metrics for the incremental Merkle tree.

Metrics Categories:
- Leaf insertion
- Proof generation
- Proof verification
"""

from prometheus_client import Counter, Gauge, Histogram, Info

import structlog

logger = structlog.get_logger(__name__)


class TreeMetrics:
    """
    Centralized metrics for incremental Merkle trees.

    Provides visibility into:
    - Insertion throughput and rejections
    - Proof generation latency
    - Verification outcomes
    """

    def __init__(self) -> None:
        """Initialize all tree metrics."""
        self._init_insertion_metrics()
        self._init_proof_metrics()
        self._init_info_metrics()

    def _init_insertion_metrics(self) -> None:
        """Initialize leaf insertion metrics."""
        self.leaves_inserted = Counter(
            "incmerkle_leaves_inserted_total",
            "Total leaves appended to incremental trees",
        )

        self.insertions_rejected = Counter(
            "incmerkle_insertions_rejected_total",
            "Leaf insertions rejected before mutation",
            ["reason"],
        )

        self.insertion_duration = Histogram(
            "incmerkle_insertion_duration_seconds",
            "Time to insert a leaf and update its root path",
            buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01],
        )

        self.leaf_count = Gauge(
            "incmerkle_leaf_count",
            "Leaf count of the most recently updated tree",
        )

    def _init_proof_metrics(self) -> None:
        """Initialize proof metrics."""
        self.proofs_generated = Counter(
            "incmerkle_proofs_generated_total",
            "Historical inclusion proofs generated",
        )

        self.proof_generation = Histogram(
            "incmerkle_proof_duration_seconds",
            "Historical proof generation time",
            buckets=[0.00001, 0.00005, 0.0001, 0.0005, 0.001, 0.005, 0.01],
        )

        self.proof_verifications = Counter(
            "incmerkle_proof_verifications_total",
            "Historical proof verifications",
            ["result"],
        )

    def _init_info_metrics(self) -> None:
        """Initialize info metrics."""
        self.service_info = Info(
            "incmerkle_accumulator",
            "Incremental Merkle accumulator information",
        )

    # Convenience methods

    def record_insertion(self, duration: float, leaf_count: int) -> None:
        """Record successful leaf insertion."""
        self.leaves_inserted.inc()
        self.insertion_duration.observe(duration)
        self.leaf_count.set(leaf_count)

    def record_insertion_rejected(self, reason: str) -> None:
        """Record rejected leaf insertion."""
        self.insertions_rejected.labels(reason=reason).inc()

    def record_proof_generated(self, duration: float) -> None:
        """Record proof generation."""
        self.proofs_generated.inc()
        self.proof_generation.observe(duration)

    def record_verification(self, valid: bool) -> None:
        """Record proof verification."""
        result = "valid" if valid else "invalid"
        self.proof_verifications.labels(result=result).inc()

    def set_service_info(
        self,
        version: str,
        environment: str,
        hash_function: str,
    ) -> None:
        """Set service info labels."""
        self.service_info.info({
            "version": version,
            "environment": environment,
            "hash_function": hash_function,
        })


# Singleton instance
_tree_metrics: TreeMetrics | None = None


def get_tree_metrics() -> TreeMetrics:
    """Get global tree metrics instance."""
    global _tree_metrics
    if _tree_metrics is None:
        _tree_metrics = TreeMetrics()
        logger.debug("Tree metrics initialized")
    return _tree_metrics
