"""
Random initialization strategy for clustering algorithms.

Selects random items from the dataset as initial cluster centers.
"""

from typing import Callable, List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation


class RandomInit(InitializationStrategy):
    """Random initialization by selecting items from the dataset.

    Items are visited in a random order drawn from the supplied generator;
    an item is taken when its value differs from every center chosen so far.
    If the data holds fewer than n_clusters distinct values, the remaining
    centers are filled with duplicates in the same random order.
    """

    def __init__(self, metric: Optional[DistanceMetric] = None,
                 centroid_function: Optional[Callable[[Tensor], Tensor]] = None):
        self.metric = metric
        self.centroid_function = centroid_function
        self.selected_indices: List[int] = []

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize clusters with random items.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Random source; None falls back to a fresh unseeded one

        Returns:
            List of initialized CentroidRepresentations
        """
        n_points = points.shape[0]

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        if generator is None:
            generator = torch.Generator()
            generator.seed()

        order = torch.randperm(n_points, generator=generator).tolist()

        selected: List[int] = []
        for idx in order:
            if len(selected) == n_clusters:
                break
            if not any(torch.equal(points[idx], points[s]) for s in selected):
                selected.append(idx)

        # Fewer distinct values than clusters: pad with duplicates
        for idx in order:
            if len(selected) == n_clusters:
                break
            if idx not in selected:
                selected.append(idx)

        self.selected_indices = selected
        return [CentroidRepresentation.from_point(points[idx], metric=self.metric,
                                                  centroid_function=self.centroid_function)
                for idx in selected]
