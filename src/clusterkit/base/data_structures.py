"""
Core data structures shared by the clusterkit algorithms.

Holds hard assignments, per-iteration history snapshots for K-means and the
merge/split records that let callers rebuild a dendrogram.
"""

from typing import List, Tuple, Dict, Any
import torch
from torch import Tensor
from dataclasses import dataclass, field


class AssignmentMatrix:
    """Hard cluster assignments with per-cluster aggregation helpers."""

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) tensor of cluster indices
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        self._validate_and_store(assignments)

    def _validate_and_store(self, assignments: Tensor):
        assert assignments.dim() == 1
        if assignments.numel() > 0:
            assert assignments.max() < self.n_clusters
            assert assignments.min() >= 0
        self._hard_assignments = assignments.long()

    @property
    def n_points(self) -> int:
        """Number of data points."""
        return self._hard_assignments.shape[0]

    def get_hard(self) -> Tensor:
        """Get hard assignments."""
        return self._hard_assignments

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Get (ascending) positions of points assigned to a specific cluster."""
        return torch.where(self._hard_assignments == cluster_idx)[0]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self._hard_assignments, minlength=self.n_clusters)

    def empty_clusters(self) -> List[int]:
        """Indices of clusters that received no point, in ascending order."""
        counts = self.count_per_cluster()
        return [k for k in range(self.n_clusters) if counts[k].item() == 0]

    def groups(self) -> List[List[int]]:
        """Point positions grouped per cluster."""
        return [self.get_cluster_indices(k).tolist() for k in range(self.n_clusters)]


@dataclass
class AlgorithmState:
    """Snapshot of K-means at an iteration boundary.

    ``centroids`` are the centroids recomputed from ``assignments``;
    ``objective_value`` is the SSE of that pair.
    """
    iteration: int
    centroids: Tensor
    assignments: Tensor
    objective_value: float
    converged: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MergeStep:
    """One agglomerative merge.

    ``cluster_a`` < ``cluster_b`` are the arena ids that merged into
    ``new_cluster``; ``total_sse`` is the within-cluster SSE of the whole
    partition right after the merge.
    """
    cluster_a: int
    cluster_b: int
    new_cluster: int
    distance: float
    size: int
    total_sse: float


@dataclass(frozen=True)
class SplitStep:
    """One divisive split.

    ``parent`` is the split cluster's item indices; ``splinter`` and
    ``remainder`` partition it.
    """
    parent: Tuple[int, ...]
    splinter: Tuple[int, ...]
    remainder: Tuple[int, ...]
    diameter: float
    total_sse: float


@dataclass
class ClusterRecord:
    """Open cluster in the agglomerative arena, addressed by a stable id."""
    id: int
    members: List[int]
    centroid: Tensor
    sse: float = 0.0

    @property
    def size(self) -> int:
        return len(self.members)
