"""
K-means clustering algorithm.

The classic K-means algorithm implemented using the modular framework:
random distinct items as initial centroids, nearest-centroid assignment,
mean update, and a stop when no item changes cluster.
"""

from typing import Callable, Optional, List, Sequence, Tuple
import torch
from torch import Tensor

from ..base.clustering_base import IterativeClusterer
from ..base.interfaces import ClusterRepresentation, ClusteringObjective
from ..base.data_structures import AssignmentMatrix
from ..assignments.hard import HardAssignment
from ..distances.euclidean import FunctionDistance
from ..initialization.random import RandomInit
from ..initialization.from_indices import FromIndicesInit
from ..utils.convergence import ChangeInAssignments
from ..utils.metrics import inertia
from ..utils.validation import DataLike, check_random_state


EMPTY_CLUSTER_ACTIONS = ('outlier', 'random', 'eliminate', 'terminate')


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to centroids."""

    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> float:
        """Compute within-cluster sum of squares."""
        centers = torch.stack([rep.get_parameters()['mean'] for rep in representations])
        return inertia(points, assignments, centers)

    @property
    def minimize(self) -> bool:
        return True


class KMeans(IterativeClusterer):
    """K-means clustering algorithm.

    Classic K-means that partitions data into k clusters by minimizing
    within-cluster sum of squared distances.

    Parameters
    ----------
    max_iterations : int, default=100
        Maximum number of iterations
    random_seed : int, optional
        Seed of the generator choosing the initial centroids. Equal seeds
        give identical runs.
    track_history : bool, default=False
        Record centroids, assignments and SSE after every update step
    centroid_indices : sequence of int, optional
        Positions of the items to use as initial centroids instead of a
        random choice. Must hold exactly k distinct valid positions.
    on_empty : {'outlier', 'random', 'eliminate', 'terminate'}, default='outlier'
        What to do when a cluster receives no item:
        - 'outlier' : move the item farthest from its centroid into it
        - 'random' : move a randomly chosen item into it, drawn from the
          build's generator
        - 'eliminate' : drop the cluster (fewer than k clusters remain)
        - 'terminate' : raise RuntimeError
    centroid_function : callable, optional
        Maps the (m, d) tensor of a cluster's items to its (d,) centroid.
        None means the mean, the only choice under which the SSE is
        guaranteed not to increase.
    distance_function : callable or str, optional
        Distance used to assign items. None means squared Euclidean.
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    clusters : list of Cluster
        The partition of the input items
    centroids : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster index of every input item
    sse : float
        Sum of squared distances of the items to their centroid
    iterations : int
        Number of iterations run
    history : list of AlgorithmState
        Per-iteration snapshots when ``track_history`` is set

    Examples
    --------
    >>> km = KMeans(random_seed=0).build([[0, 0], [0, 1], [5, 0], [5, 1]], 2)
    >>> km.number_of_clusters
    2
    """

    _PARAMETERS = ('max_iterations', 'random_seed', 'track_history',
                   'centroid_indices', 'on_empty', 'centroid_function',
                   'distance_function', 'verbose')

    def __init__(self,
                 max_iterations: int = 100,
                 random_seed: Optional[int] = None,
                 track_history: bool = False,
                 centroid_indices: Optional[Sequence[int]] = None,
                 on_empty: str = 'outlier',
                 centroid_function: Optional[Callable[[Tensor], Tensor]] = None,
                 distance_function=None,
                 verbose: int = 0):
        super().__init__(
            max_iterations=max_iterations,
            random_seed=random_seed,
            track_history=track_history,
            distance_function=distance_function,
            verbose=verbose
        )
        self.centroid_indices = centroid_indices
        self.on_empty = on_empty
        self.centroid_function = centroid_function
        self._initial_centroids: Optional[Tensor] = None
        self._generator: Optional[torch.Generator] = None

    def _create_components(self) -> None:
        """Create K-means specific components."""
        function = self._distance_function
        metric = FunctionDistance(function) if function is not None else None

        self.assignment_strategy = HardAssignment()

        if self._initial_centroids is not None:
            self.initialization_strategy = FromIndicesInit(
                self._initial_centroids, metric=metric, centroid_function=self.centroid_function)
        elif self.centroid_indices is not None:
            self.initialization_strategy = FromIndicesInit(
                self.centroid_indices, metric=metric, centroid_function=self.centroid_function)
        else:
            self.initialization_strategy = RandomInit(metric=metric,
                                                      centroid_function=self.centroid_function)

        self.convergence_criterion = ChangeInAssignments(min_change_fraction=0.0)
        self.objective = KMeansObjective()

    def build(self, data_set: DataLike, k: int,
              initial_centroids: Optional[Tensor] = None) -> 'KMeans':
        """Cluster the items of ``data_set`` into ``k`` clusters.

        Parameters
        ----------
        data_set : DataSet, Cluster, list of rows, ndarray or Tensor
            Items to cluster
        k : int
            Number of clusters, 1 <= k <= number of items
        initial_centroids : Tensor of shape (k, n_features), optional
            Start from these centroids instead of chosen items

        Returns
        -------
        self : KMeans
            Built clusterer
        """
        if self.on_empty not in EMPTY_CLUSTER_ACTIONS:
            raise ValueError(f"Invalid value for on_empty: {self.on_empty!r}. "
                             f"Valid values are {list(EMPTY_CLUSTER_ACTIONS)}")
        if self.centroid_function is not None and not callable(self.centroid_function):
            raise ValueError(f"centroid_function must be callable, got {self.centroid_function!r}")

        data_set, indices, X = self._prepare(data_set, k)
        generator = check_random_state(self.random_seed)

        self._initial_centroids = initial_centroids
        try:
            self._create_components()
        finally:
            self._initial_centroids = None

        self._generator = generator
        try:
            assignments = self._run(X, k, generator)
        finally:
            self._generator = None

        self.labels_ = assignments
        n_clusters = len(self.representations)
        self.centroids = torch.stack([rep.get_parameters()['mean']
                                      for rep in self.representations])
        self.sse = self.objective.compute(X, self.representations, assignments)
        self.clusters = self._make_clusters(
            data_set, indices, AssignmentMatrix(assignments, n_clusters).groups()
        )
        self.built_ = True

        if self.verbose:
            print(f"KMeans built {n_clusters} clusters in {self.iterations} "
                  f"iterations, sse = {self.sse:.6f}")
        return self

    def _handle_empty_clusters(self, X: Tensor, assignments: Tensor,
                               representations: List[ClusterRepresentation]
                               ) -> Tuple[Tensor, List[ClusterRepresentation]]:
        """Apply the ``on_empty`` policy to clusters that received no item."""
        empty = AssignmentMatrix(assignments, len(representations)).empty_clusters()
        if not empty:
            return assignments, representations

        if self.on_empty == 'terminate':
            raise RuntimeError(f"Cluster(s) {empty} received no item")

        if self.on_empty == 'eliminate':
            keep = [k for k in range(len(representations)) if k not in empty]
            remap = torch.full((len(representations),), -1, dtype=torch.long)
            remap[keep] = torch.arange(len(keep))
            if self.verbose:
                print(f"Eliminating empty cluster(s) {empty}")
            return remap[assignments], [representations[k] for k in keep]

        # 'outlier' and 'random' move one item per empty cluster, taken from
        # a cluster that keeps at least one item
        assignments = assignments.clone()
        distances = self.assignment_strategy.compute_distances(X, representations)
        distances = distances.gather(1, assignments.unsqueeze(1)).squeeze(1)

        for k in empty:
            counts = torch.bincount(assignments, minlength=len(representations))
            donors = counts[assignments] >= 2
            if self.on_empty == 'random':
                candidates = torch.nonzero(donors).squeeze(1)
                pick = torch.randint(len(candidates), (1,), generator=self._generator)
                item = int(candidates[pick])
            else:
                candidates = torch.where(donors, distances,
                                         torch.full_like(distances, float('-inf')))
                # argmax returns the first maximal index: lowest item wins ties
                item = int(torch.argmax(candidates))
            assignments[item] = k
            distances[item] = 0.0
            representations[k].set_parameters({'mean': X[item].clone()})
            if self.verbose >= 2:
                print(f"Moved item {item} into empty cluster {k}")

        return assignments, representations
