"""
DIANA (DIvisive ANAlysis) hierarchical clustering.

Top-down counterpart of the agglomerative engine: the cluster with the
largest diameter is split by growing a splinter group from its most
dissimilar member.
"""

from typing import List, Tuple
import warnings
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusterer
from ..base.data_structures import SplitStep
from ..data.cluster import Cluster
from ..distances.proximity import pairwise_distance_matrix
from ..utils.metrics import sum_of_squared_errors
from ..utils.validation import DataLike


class Diana(BaseClusterer):
    """Divisive hierarchical clustering.

    Parameters
    ----------
    distance_function : callable or str, optional
        Item dissimilarity, squared Euclidean if None
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    clusters : list of Cluster
        Final partition; a split cluster keeps its position and its splinter
        group is appended
    initial_cluster : Cluster
        The single cluster holding every item
    splits : list of SplitStep
    sse_history : list of float
        Total SSE of the initial cluster and after every split
    cluster_tree : list of list of tuple
        The partition before the first split and after every split
    """

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(distance_function=distance_function, verbose=verbose)
        self.initial_cluster = None
        self.splits: List[SplitStep] = []
        self.sse_history: List[float] = []
        self.cluster_tree: List[List[Tuple[int, ...]]] = []

    def build(self, data_set: DataLike, k: int) -> 'Diana':
        """Split ``data_set`` until ``k`` clusters exist.

        Stops early, with a RuntimeWarning, when every cluster holds a single
        item; ``number_of_clusters`` then reports fewer than ``k``.
        """
        data_set, indices, X = self._prepare(data_set, k, allow_more_than_samples=True)
        D = pairwise_distance_matrix(X, self._distance_function)

        groups: List[List[int]] = [list(range(len(indices)))]
        self.initial_cluster = Cluster(data_set, indices, name='initial')
        self.splits = []
        self.sse_history = [sum_of_squared_errors(X, groups)]
        self.cluster_tree = [self._partition(groups, indices)]

        while len(groups) < k:
            target, diameter = self._widest_cluster(groups, D)
            if target is None:
                warnings.warn(f"Only {len(groups)} of {k} clusters could be built: "
                              f"no cluster has more than one item", RuntimeWarning)
                break

            parent = groups[target]
            splinter, remainder = self._split(parent, D)
            groups[target] = remainder
            groups.append(splinter)

            total_sse = sum_of_squared_errors(X, groups)
            self.splits.append(SplitStep(
                parent=tuple(indices[p] for p in parent),
                splinter=tuple(indices[p] for p in splinter),
                remainder=tuple(indices[p] for p in remainder),
                diameter=diameter,
                total_sse=total_sse
            ))
            self.sse_history.append(total_sse)
            self.cluster_tree.append(self._partition(groups, indices))

            if self.verbose >= 2:
                print(f"Split {len(self.splits):3d}: cluster {target} "
                      f"(diameter = {diameter:.6f}) -> {len(remainder)} + {len(splinter)}")

        self.clusters = self._make_clusters(data_set, indices, groups)
        self.sse = self.sse_history[-1]
        self.built_ = True

        if self.verbose:
            print(f"Diana built {len(self.clusters)} clusters with {len(self.splits)} splits")
        return self

    @staticmethod
    def _widest_cluster(groups: List[List[int]], D: Tensor):
        """Position and diameter of the widest cluster with two or more members."""
        target, widest = None, None
        for position, group in enumerate(groups):
            if len(group) < 2:
                continue
            diameter = float(D[group][:, group].max())
            if widest is None or diameter > widest:
                target, widest = position, diameter
        return target, widest

    @staticmethod
    def _split(group: List[int], D: Tensor) -> Tuple[List[int], List[int]]:
        """Grow a splinter group out of ``group``.

        Returns:
            (splinter, remainder) as lists of positions, in ``group`` order
        """
        block = D[group][:, group]
        m = len(group)

        # Seed: member with the largest average dissimilarity to the others
        average = block.sum(dim=1) / (m - 1)
        seed = int(torch.argmax(average))
        in_splinter = torch.zeros(m, dtype=torch.bool)
        in_splinter[seed] = True

        while int((~in_splinter).sum()) > 1:
            rest = ~in_splinter
            n_rest = int(rest.sum())
            # Mean distance to the other remainder members and to the splinter
            to_rest = block[:, rest].sum(dim=1) / (n_rest - 1)
            to_splinter = block[:, in_splinter].mean(dim=1)
            gain = torch.where(rest, to_rest - to_splinter,
                               torch.full_like(to_rest, float('-inf')))
            best = int(torch.argmax(gain))
            if gain[best] <= 0:
                break
            in_splinter[best] = True

        splinter = [group[i] for i in range(m) if in_splinter[i]]
        remainder = [group[i] for i in range(m) if not in_splinter[i]]
        return splinter, remainder

    @staticmethod
    def _partition(groups: List[List[int]], indices: List[int]) -> List[Tuple[int, ...]]:
        return [tuple(indices[p] for p in group) for group in groups]

    @property
    def split_count(self) -> int:
        return len(self.splits)

    def eval(self, item) -> int:
        """Index of the cluster with the lowest average distance to ``item``."""
        self._check_built()
        vector = self._item_to_tensor(item)
        scores = [sum(self.distance(vector, point) for point in cluster.points) / len(cluster)
                  for cluster in self.clusters]
        return int(torch.argmin(torch.tensor(scores)))
