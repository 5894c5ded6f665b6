"""
Point-to-centroid distance metrics.

The squared Euclidean metric is the default for K-means; any two-vector
proximity function can be plugged in through FunctionDistance.
"""

import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric, ClusterRepresentation
from .proximity import DistanceFunction


class EuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - μ||² where μ is the cluster center.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        """Compute Euclidean distances from points to cluster center.

        Args:
            points: (n, d) tensor of points
            representation: Cluster representation with 'mean' parameter

        Returns:
            (n,) tensor of distances
        """
        params = representation.get_parameters()
        if 'mean' not in params:
            raise ValueError("Euclidean distance requires representation with 'mean' parameter")

        center = params['mean']
        diff = points - center.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=1)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)


class FunctionDistance(DistanceMetric):
    """Adapter turning a two-vector distance function into a metric.

    Slower than the vectorised Euclidean metric: the function is called once
    per point.
    """

    def __init__(self, distance_function: DistanceFunction):
        self.distance_function = distance_function

    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        center = representation.get_parameters()['mean']
        return torch.tensor(
            [float(self.distance_function(point, center)) for point in points],
            dtype=points.dtype,
        )
