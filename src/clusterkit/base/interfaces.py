"""
Core interfaces for the clusterkit algorithms.

This module defines the abstract base classes the pluggable components
implement, so that partitional and hierarchical clusterers can share
centroids, assignment rules, convergence checks and distance updates.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
import torch
from torch import Tensor


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations.

    K-means represents a cluster by its centroid; other partitional
    algorithms could plug richer representations in the same slot.
    """

    @abstractmethod
    def distance_to_point(self, points: Tensor) -> Tensor:
        """Compute distance/cost from points to this cluster representation.

        Args:
            points: (n, d) tensor of data points

        Returns:
            (n,) tensor of distances/costs
        """
        pass

    @abstractmethod
    def update_from_points(self, points: Tensor) -> None:
        """Update cluster parameters given the points assigned to it.

        Args:
            points: (n, d) tensor of assigned points
        """
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this cluster representation."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set cluster parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Ambient dimension of the data."""
        pass


class DistanceMetric(ABC):
    """Abstract base class for point-to-cluster distance computations."""

    @abstractmethod
    def compute(self, points: Tensor, representation: ClusterRepresentation,
                **kwargs) -> Tensor:
        """Compute distances from points to cluster.

        Args:
            points: (n, d) tensor of points
            representation: Cluster representation
            **kwargs: Metric-specific parameters

        Returns:
            (n,) tensor of distances/costs
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, d) tensor of data points
            representations: List of K cluster representations

        Returns:
            (n,) tensor of cluster indices
        """
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster representations.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of clusters to initialize
            generator: Explicit random source; strategies never touch the
                global torch RNG

        Returns:
            List of initialized cluster representations
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor,
                representations: List[ClusterRepresentation],
                assignments: Tensor) -> float:
        """Compute objective function value.

        Args:
            points: (n, d) tensor of data points
            representations: List of cluster representations
            assignments: (n,) hard cluster assignments

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass


class LinkagePolicy(ABC):
    """Lance-Williams distance update used by the agglomerative engine.

    When clusters i and j merge, the distance from the new cluster to every
    other open cluster k is a function of the three pre-merge distances and
    the three cluster sizes. That function is the only place where the
    linkage variants differ.
    """

    name: str = 'linkage'

    @abstractmethod
    def update(self, distance_ij: float, distance_ik: float, distance_jk: float,
               size_i: int, size_j: int, size_k: int) -> float:
        """Distance between cluster k and the union of clusters i and j."""
        pass

    @property
    def supports_eval(self) -> bool:
        """Whether new items can be scored against the built clusters."""
        return False

    def item_to_cluster(self, distances: Tensor) -> float:
        """Aggregate item-to-member distances into an item-to-cluster distance.

        Args:
            distances: (m,) distances from one item to each cluster member
        """
        raise NotImplementedError(
            f"Eval of new data is not supported by {self.name} linkage")
