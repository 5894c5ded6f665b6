"""
Clustering quality metrics.

SSE (inertia) is the objective shared by K-means, bisecting K-means and the
hierarchical SSE traces; the linkage matrix turns a merge history into the
layout dendrogram tools expect.
"""

from typing import List, Sequence
import torch
from torch import Tensor

from ..base.data_structures import MergeStep


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Compute sum of squared distances to assigned centers (inertia).

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers

    Returns:
        Total inertia (lower is better)
    """
    total = 0.0
    n_clusters = centers.shape[0]

    for k in range(n_clusters):
        mask = labels == k
        if mask.sum() > 0:
            cluster_points = X[mask]
            distances = torch.sum((cluster_points - centers[k]) ** 2, dim=1)
            total += distances.sum().item()

    return total


def sum_of_squared_errors(X: Tensor, groups: Sequence[Sequence[int]]) -> float:
    """Within-cluster SSE of a partition given as lists of row positions."""
    total = 0.0
    for group in groups:
        if len(group) == 0:
            continue
        points = X[list(group)]
        diff = points - points.mean(dim=0, keepdim=True)
        total += torch.sum(diff * diff).item()
    return total


def merge_cost(size_a: int, size_b: int, centroid_a: Tensor, centroid_b: Tensor) -> float:
    """Increase in SSE caused by merging two clusters.

    n_a n_b / (n_a + n_b) * |c_a - c_b|², always non-negative.
    """
    diff = centroid_a - centroid_b
    return size_a * size_b / (size_a + size_b) * float(torch.sum(diff * diff))


def linkage_matrix(merges: List[MergeStep], n_items: int) -> Tensor:
    """Merge history as an (m, 4) matrix in SciPy's linkage layout.

    Row t holds the two merged cluster ids, the merge distance and the size of
    the new cluster. Singletons have ids 0..n-1 and the cluster created by
    merge t has id n + t.
    """
    matrix = torch.zeros(len(merges), 4, dtype=torch.float64)
    for t, step in enumerate(merges):
        assert step.new_cluster == n_items + t
        matrix[t, 0] = step.cluster_a
        matrix[t, 1] = step.cluster_b
        matrix[t, 2] = step.distance
        matrix[t, 3] = step.size
    return matrix
