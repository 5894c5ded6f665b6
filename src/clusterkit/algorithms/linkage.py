"""
Agglomerative hierarchical clustering.

One engine merges the closest pair of open clusters until k remain; the
linkage variants differ only in the Lance-Williams policy used to update
distances after a merge.
"""

from typing import Dict, List, Optional, Tuple
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusterer
from ..base.data_structures import ClusterRecord, MergeStep
from ..base.interfaces import LinkagePolicy
from ..distances.proximity import pairwise_distance_matrix
from ..linkage.policies import (
    SingleLinkagePolicy, CompleteLinkagePolicy, AverageLinkagePolicy,
    WeightedAverageLinkagePolicy, CentroidLinkagePolicy, MedianLinkagePolicy,
    WardLinkagePolicy, get_linkage_policy
)
from ..utils.metrics import merge_cost, linkage_matrix
from ..utils.validation import DataLike


def _key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a < b else (b, a)


def _nearest(a: int, records: Dict[int, ClusterRecord],
             distances: Dict[Tuple[int, int], float]
             ) -> Optional[Tuple[float, Tuple[int, int]]]:
    """Closest pair involving ``a`` as ``(distance, (id, id))``, lowest ids on ties."""
    best = None
    for c in records:
        if c == a:
            continue
        pair = _key(a, c)
        candidate = (distances[pair], pair)
        if best is None or candidate < best:
            best = candidate
    return best


class AgglomerativeClusterer(BaseClusterer):
    """Bottom-up clustering driven by a linkage policy.

    Parameters
    ----------
    policy : LinkagePolicy or str
        Distance update rule, or one of 'single', 'complete', 'average',
        'weighted_average', 'centroid', 'median', 'ward'
    distance_function : callable or str, optional
        Item dissimilarity. None means squared Euclidean, which the centroid,
        median and Ward rules require to be exact.
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    clusters : list of Cluster
        Open clusters after the last merge; merged clusters come last
    merges : list of MergeStep
        Every merge in order
    sse_history : list of float
        Total within-cluster SSE of the singleton partition and after every
        merge; never decreases
    cluster_tree : list of list of tuple
        The partition (as item index tuples) before the first merge and
        after every merge

    Examples
    --------
    >>> model = SingleLinkage().build([[0, 0], [0, 1], [5, 0], [5, 1]], 3)
    >>> sorted(len(c) for c in model.clusters)
    [1, 1, 2]
    """

    _PARAMETERS = ('policy', 'distance_function', 'verbose')

    def __init__(self, policy, distance_function=None, verbose: int = 0):
        super().__init__(distance_function=distance_function, verbose=verbose)
        self.policy = policy

        self.merges: List[MergeStep] = []
        self.sse_history: List[float] = []
        self.cluster_tree: List[List[Tuple[int, ...]]] = []
        self._n_items = 0

    @property
    def _policy(self) -> LinkagePolicy:
        return get_linkage_policy(self.policy)

    def build(self, data_set: DataLike, k: int = 1,
              distance: Optional[float] = None) -> 'AgglomerativeClusterer':
        """Merge clusters until ``k`` remain.

        Args:
            data_set: Items to cluster
            k: Number of clusters to stop at. Values at or above the number
                of items leave every item in its own cluster.
            distance: Optional threshold; merging also stops when the closest
                pair is farther apart than this

        Returns:
            Self
        """
        policy = self._policy
        data_set, indices, X = self._prepare(data_set, k, allow_more_than_samples=True)
        n = len(indices)
        self._n_items = n

        matrix = pairwise_distance_matrix(X, self._distance_function).tolist()
        records: Dict[int, ClusterRecord] = {
            i: ClusterRecord(id=i, members=[i], centroid=X[i].clone())
            for i in range(n)
        }
        distances: Dict[Tuple[int, int], float] = {
            (a, b): matrix[a][b] for b in range(n) for a in range(b)
        }

        self.merges = []
        self.sse_history = [0.0]
        self.cluster_tree = [self._partition(records, indices)]
        total_sse = 0.0
        next_id = n

        # Per-record closest pair; the global closest pair is the smallest entry
        nearest = {i: _nearest(i, records, distances) for i in records}

        while len(records) > k:
            # Closest pair, lowest ids on ties
            d_ab, (a, b) = min(nearest.values())
            if distance is not None and d_ab > distance:
                if self.verbose:
                    print(f"Stopping at {len(records)} clusters: closest pair "
                          f"distance {d_ab:.6f} exceeds {distance}")
                break

            record_a = records.pop(a)
            record_b = records.pop(b)
            del distances[(a, b)]

            size = record_a.size + record_b.size
            cost = merge_cost(record_a.size, record_b.size,
                              record_a.centroid, record_b.centroid)
            merged = ClusterRecord(
                id=next_id,
                members=sorted(record_a.members + record_b.members),
                centroid=(record_a.size * record_a.centroid
                          + record_b.size * record_b.centroid) / size,
                sse=record_a.sse + record_b.sse + cost
            )

            for c, record_c in records.items():
                d_ac = distances.pop(_key(a, c))
                d_bc = distances.pop(_key(b, c))
                distances[(c, next_id)] = policy.update(
                    d_ab, d_ac, d_bc, record_a.size, record_b.size, record_c.size
                )
            records[next_id] = merged

            del nearest[a], nearest[b]
            for c in nearest:
                if a in nearest[c][1] or b in nearest[c][1]:
                    nearest[c] = _nearest(c, records, distances)
                else:
                    candidate = (distances[(c, next_id)], (c, next_id))
                    if candidate < nearest[c]:
                        nearest[c] = candidate
            nearest[next_id] = _nearest(next_id, records, distances)

            total_sse += cost
            self.merges.append(MergeStep(cluster_a=a, cluster_b=b, new_cluster=next_id,
                                         distance=d_ab, size=size, total_sse=total_sse))
            self.sse_history.append(total_sse)
            self.cluster_tree.append(self._partition(records, indices))

            if self.verbose >= 2:
                print(f"Merge {len(self.merges):3d}: {a} + {b} -> {next_id} "
                      f"(distance = {d_ab:.6f}, size = {size})")
            next_id += 1

        self.clusters = self._make_clusters(
            data_set, indices, [record.members for record in records.values()]
        )
        self.sse = total_sse
        self.built_ = True

        if self.verbose:
            print(f"{policy.name} linkage built {len(self.clusters)} clusters "
                  f"with {len(self.merges)} merges")
        return self

    @staticmethod
    def _partition(records: Dict[int, ClusterRecord],
                   indices: List[int]) -> List[Tuple[int, ...]]:
        return [tuple(indices[p] for p in record.members) for record in records.values()]

    @property
    def merge_count(self) -> int:
        return len(self.merges)

    @property
    def supports_eval(self) -> bool:
        return self._policy.supports_eval

    def linkage_matrix(self) -> Tensor:
        """Merge history as an (m, 4) tensor in SciPy's linkage layout."""
        self._check_built()
        return linkage_matrix(self.merges, self._n_items)

    def eval(self, item) -> int:
        """Index of the cluster closest to a new item under the linkage rule.

        Raises:
            NotImplementedError: For linkages defined through centroids
        """
        self._check_built()
        policy = self._policy
        if not policy.supports_eval:
            raise NotImplementedError(
                f"Eval of new data is not supported by {policy.name} linkage")

        vector = self._item_to_tensor(item)
        scores = []
        for cluster in self.clusters:
            member_distances = torch.tensor(
                [self.distance(vector, point) for point in cluster.points],
                dtype=torch.float64)
            scores.append(policy.item_to_cluster(member_distances))
        return int(torch.argmin(torch.tensor(scores)))


class SingleLinkage(AgglomerativeClusterer):
    """Nearest neighbour agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(SingleLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class CompleteLinkage(AgglomerativeClusterer):
    """Farthest neighbour agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(CompleteLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class AverageLinkage(AgglomerativeClusterer):
    """Group average (UPGMA) agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(AverageLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class WeightedAverageLinkage(AgglomerativeClusterer):
    """Weighted group average (WPGMA) agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(WeightedAverageLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class CentroidLinkage(AgglomerativeClusterer):
    """Centroid (UPGMC) agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(CentroidLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class MedianLinkage(AgglomerativeClusterer):
    """Median (WPGMC) agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(MedianLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)


class WardLinkage(AgglomerativeClusterer):
    """Ward's minimum variance agglomerative clustering."""

    _PARAMETERS = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(WardLinkagePolicy(), distance_function=distance_function,
                         verbose=verbose)
