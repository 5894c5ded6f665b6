"""
Cluster: a named, index-based view over the items of a DataSet.

Clusters never copy data items; they hold positions into the owning data set
and compute their statistics from its cached numeric tensor on demand.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple
import torch
from torch import Tensor

from .data_set import DataSet


class Cluster:
    """Subset of a data set's items, addressed by position.

    Args:
        data_set: Owning data set
        indices: Positions of the member items
        name: Optional display name
    """

    def __init__(self, data_set: DataSet, indices: Iterable[int],
                 name: Optional[str] = None):
        self._data_set = data_set
        self._indices: Tuple[int, ...] = tuple(int(i) for i in indices)
        self.name = name
        self._centroid: Optional[Tensor] = None
        self._sse: Optional[float] = None

    @property
    def data_set(self) -> DataSet:
        return self._data_set

    @property
    def indices(self) -> Tuple[int, ...]:
        return self._indices

    @property
    def data_items(self) -> List[List[Any]]:
        """Member items, read through to the owning data set."""
        items = self._data_set.data_items
        return [items[i] for i in self._indices]

    @property
    def points(self) -> Tensor:
        """(m, d) numeric rows of the members."""
        X = self._data_set.to_tensor()
        return X[list(self._indices)]

    @property
    def centroid(self) -> Tensor:
        """Componentwise mean of the member points (cached)."""
        if self._centroid is None:
            if not self._indices:
                raise ValueError("Centroid of an empty cluster is undefined")
            self._centroid = self.points.mean(dim=0)
        return self._centroid

    @property
    def sse(self) -> float:
        """Sum of squared distances from the members to the centroid."""
        if self._sse is None:
            if not self._indices:
                self._sse = 0.0
            else:
                diff = self.points - self.centroid.unsqueeze(0)
                self._sse = float(torch.sum(diff * diff))
        return self._sse

    def get_mean_or_mode(self) -> List[Any]:
        """Mean of numeric attributes and mode of nominal ones."""
        return self.to_data_set().get_mean_or_mode()

    def diameter(self, distance_function=None) -> float:
        """Largest distance between two members (0 for fewer than two)."""
        if len(self._indices) < 2:
            return 0.0
        points = self.points
        if distance_function is None:
            diff = points.unsqueeze(1) - points.unsqueeze(0)
            return float(torch.sum(diff * diff, dim=2).max())
        best = 0.0
        for a in range(len(points)):
            for b in range(a):
                best = max(best, float(distance_function(points[a], points[b])))
        return best

    def to_data_set(self) -> DataSet:
        """Materialise the members as a new data set."""
        return self._data_set.subset(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __iter__(self) -> Iterator[List[Any]]:
        return iter(self.data_items)

    def __contains__(self, index: int) -> bool:
        return index in self._indices

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cluster):
            return NotImplemented
        return (self._data_set is other._data_set
                and sorted(self._indices) == sorted(other._indices))

    def __hash__(self) -> int:
        return hash((id(self._data_set), frozenset(self._indices)))

    def __repr__(self) -> str:
        label = f"{self.name!r}, " if self.name else ""
        return f"Cluster({label}indices={list(self._indices)})"
