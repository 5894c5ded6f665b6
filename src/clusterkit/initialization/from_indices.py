"""
Initialization from explicitly chosen data items.

Useful for reproducing a run or when good initial centers are known.
"""

from typing import Callable, List, Optional
import numpy as np
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation


class FromIndicesInit(InitializationStrategy):
    """Initialize centers on the items at the given positions.

    Accepts either a sequence of item positions or a (k, d) tensor of
    centers (used to warm-start K-means from another solution).
    """

    def __init__(self, initial_state, metric: Optional[DistanceMetric] = None,
                 centroid_function: Optional[Callable[[Tensor], Tensor]] = None):
        """
        Args:
            initial_state: Item positions or a (k, d) tensor of centers
            metric: Point-to-centroid metric for the created centroids
            centroid_function: Centroid update of the created representations
        """
        self.initial_state = initial_state
        self.metric = metric
        self.centroid_function = centroid_function

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize from the stored positions or centers.

        Args:
            points: (n, d) data points
            n_clusters: Expected number of clusters
            generator: Unused

        Returns:
            List of initialized representations
        """
        n_points, dimension = points.shape

        if isinstance(self.initial_state, Tensor):
            centers = self.initial_state.to(points.dtype)
            if centers.shape[0] != n_clusters:
                raise ValueError(f"Initial centers has {centers.shape[0]} clusters, "
                                 f"but n_clusters={n_clusters}")
            if centers.shape[1] != dimension:
                raise ValueError(f"Initial centers has dimension {centers.shape[1]}, "
                                 f"but data has dimension {dimension}")
            return [CentroidRepresentation.from_point(centers[k], metric=self.metric,
                                                      centroid_function=self.centroid_function)
                    for k in range(n_clusters)]

        indices = list(self.initial_state)
        if len(indices) != n_clusters:
            raise ValueError("Length of centroid indices array differs from the "
                             "specified number of clusters")
        for index in indices:
            if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)) \
                    or index < 0 or index >= n_points:
                raise ValueError(f"Invalid centroid index {index}")
        indices = [int(index) for index in indices]
        if len(set(indices)) != len(indices):
            raise ValueError(f"Centroid indices must be distinct, got {indices}")

        return [CentroidRepresentation.from_point(points[index], metric=self.metric,
                                                  centroid_function=self.centroid_function)
                for index in indices]
