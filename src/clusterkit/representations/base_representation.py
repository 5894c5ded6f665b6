"""
Base representation class with common functionality for all cluster representations.
"""

import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation


class BaseRepresentation(ClusterRepresentation):
    """Base class providing common functionality for cluster representations."""

    def __init__(self, dimension: int, dtype: torch.dtype = torch.float64):
        """
        Args:
            dimension: Ambient dimension d of the data
            dtype: Floating point type of the parameters
        """
        self._dimension = dimension
        self._dtype = dtype
        self._mean = torch.zeros(dimension, dtype=dtype)

    @property
    def dimension(self) -> int:
        """Ambient dimension of the data."""
        return self._dimension

    @property
    def mean(self) -> Tensor:
        """Cluster mean/centroid."""
        return self._mean

    @mean.setter
    def mean(self, value: Tensor):
        """Set cluster mean."""
        assert value.shape == (self._dimension,)
        self._mean = value.to(self._dtype)

    def _check_points_shape(self, points: Tensor):
        """Validate shape of input points."""
        if points.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {points.dim()}D")
        if points.shape[1] != self._dimension:
            raise ValueError(f"Expected dimension {self._dimension}, got {points.shape[1]}")
