"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest cluster based on the distance metric.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest cluster.

    Each point is assigned to exactly one cluster based on minimum distance.
    Ties go to the lowest cluster index.
    """

    def compute_distances(self, points: Tensor,
                          representations: List[ClusterRepresentation]) -> Tensor:
        """(n, K) matrix of point-to-cluster distances."""
        n_points = points.shape[0]
        n_clusters = len(representations)

        distances = torch.zeros(n_points, n_clusters, dtype=points.dtype)
        for k, representation in enumerate(representations):
            distances[:, k] = representation.distance_to_point(points)
        return distances

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Assign each point to nearest cluster.

        Args:
            points: (n, d) data points
            representations: List of K cluster representations

        Returns:
            (n,) tensor of cluster indices
        """
        distances = self.compute_distances(points, representations)
        # argmin returns the first minimal index, which gives the tie-break
        return torch.argmin(distances, dim=1)
