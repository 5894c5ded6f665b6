"""
Centroid representation for K-means clustering.

The simplest cluster representation - just a mean point in space.
"""

from typing import Callable, Dict, Optional
import torch
from torch import Tensor

from .base_representation import BaseRepresentation
from ..base.interfaces import DistanceMetric
from ..distances.euclidean import EuclideanDistance


class CentroidRepresentation(BaseRepresentation):
    """Cluster represented by a single centroid point.

    Args:
        dimension: Ambient dimension d
        metric: Point-to-centroid metric, squared Euclidean by default
        dtype: Floating point type of the centroid
        centroid_function: Maps the (n, d) points of the cluster to its (d,)
            centroid; the mean when None
    """

    def __init__(self, dimension: int, metric: Optional[DistanceMetric] = None,
                 dtype: torch.dtype = torch.float64,
                 centroid_function: Optional[Callable[[Tensor], Tensor]] = None):
        super().__init__(dimension, dtype)
        self.metric = metric if metric is not None else EuclideanDistance()
        self.centroid_function = centroid_function

    @classmethod
    def from_point(cls, point: Tensor,
                   metric: Optional[DistanceMetric] = None,
                   centroid_function: Optional[Callable[[Tensor], Tensor]] = None
                   ) -> 'CentroidRepresentation':
        """Centroid placed exactly on a data point."""
        rep = cls(point.shape[0], metric=metric, dtype=point.dtype,
                  centroid_function=centroid_function)
        rep.mean = point.clone()
        return rep

    def distance_to_point(self, points: Tensor) -> Tensor:
        """Distance from each point to the centroid.

        Args:
            points: (n, d) tensor of data points

        Returns:
            (n,) tensor of distances (squared Euclidean by default)
        """
        self._check_points_shape(points)
        return self.metric.compute(points, self)

    def update_from_points(self, points: Tensor) -> None:
        """Update centroid as mean of assigned points, or with ``centroid_function``.

        Args:
            points: (n, d) tensor of assigned points
        """
        self._check_points_shape(points)

        if len(points) == 0:
            # No points assigned - keep current mean
            return

        if self.centroid_function is None:
            self._mean = points.mean(dim=0)
            return

        centroid = torch.as_tensor(self.centroid_function(points), dtype=self._dtype)
        if centroid.shape != (self._dimension,):
            raise ValueError(f"centroid_function returned shape {tuple(centroid.shape)}, "
                             f"expected ({self._dimension},)")
        self._mean = centroid

    def get_parameters(self) -> Dict[str, Tensor]:
        """Return parameters defining this centroid."""
        return {'mean': self._mean.clone()}

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set centroid parameters."""
        if 'mean' in params:
            self.mean = params['mean']

    def __repr__(self) -> str:
        return f"CentroidRepresentation(dimension={self._dimension}, mean_norm={self._mean.norm():.3f})"
