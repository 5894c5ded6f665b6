"""
Base classes for the clusterkit algorithms.

BaseClusterer holds what every algorithm shares: keyword configuration,
input resolution, cluster views and the guards for using a clusterer before
``build``. IterativeClusterer adds the alternating optimization between
assignment and update steps used by K-means.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Sequence, Tuple
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, InitializationStrategy,
    ConvergenceCriterion, ClusteringObjective
)
from .data_structures import AssignmentMatrix, AlgorithmState
from ..data.data_set import DataSet
from ..data.cluster import Cluster
from ..distances.proximity import resolve_distance_function, squared_euclidean_distance
from ..utils.validation import (
    DataLike, validate_data, resolve_input, check_n_clusters
)


class BaseClusterer:
    """Common configuration and result handling for all clusterers.

    Subclasses list their constructor keywords in ``_PARAMETERS`` so that
    ``get_params``/``set_params`` can expose them.
    """

    _PARAMETERS: Tuple[str, ...] = ('distance_function', 'verbose')

    def __init__(self, distance_function=None, verbose: int = 0):
        """
        Args:
            distance_function: None (squared Euclidean), a registered name
                or a callable on two vectors
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        """
        self.distance_function = distance_function
        self.verbose = verbose

        self.clusters: List[Cluster] = []
        self.built_ = False
        self._data_set: Optional[DataSet] = None
        self._dimension: Optional[int] = None

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get constructor parameters (sklearn compatibility)."""
        return {name: getattr(self, name) for name in self._PARAMETERS}

    def set_params(self, **params) -> 'BaseClusterer':
        """Set constructor parameters (sklearn compatibility)."""
        for key, value in params.items():
            if key not in self._PARAMETERS:
                raise ValueError(f"Invalid parameter {key!r} for {type(self).__name__}. "
                                 f"Valid parameters are {list(self._PARAMETERS)}")
            setattr(self, key, value)
        return self

    @property
    def _distance_function(self):
        return resolve_distance_function(self.distance_function)

    def distance(self, a, b) -> float:
        """Distance between two items under the configured function."""
        function = self._distance_function
        if function is None:
            return squared_euclidean_distance(a, b)
        return float(function(a, b))

    # ------------------------------------------------------------------
    # Build helpers
    # ------------------------------------------------------------------
    def _prepare(self, data: DataLike, n_clusters: int,
                 allow_more_than_samples: bool = False) -> Tuple[DataSet, List[int], Tensor]:
        """Resolve the input and validate k before any work is done.

        Returns:
            Owning data set, positions of the items to cluster and their
            (n, d) numeric rows
        """
        data_set, indices = resolve_input(data)
        check_n_clusters(n_clusters, len(indices), allow_more_than_samples)
        X = validate_data(data_set.to_tensor()[indices])

        self._data_set = data_set
        self._dimension = X.shape[1]
        self.built_ = False
        return data_set, indices, X

    def _make_clusters(self, data_set: DataSet, indices: Sequence[int],
                       groups: Sequence[Sequence[int]]) -> List[Cluster]:
        """Cluster views from groups of local positions."""
        return [Cluster(data_set, [indices[p] for p in group], name=f"cluster_{c}")
                for c, group in enumerate(groups)]

    def _check_built(self):
        if not self.built_:
            raise RuntimeError(f"{type(self).__name__} must be built before use; "
                               f"call build(data_set, k) first")

    def _item_to_tensor(self, item) -> Tensor:
        """Numeric vector of a new item, checked against the built data."""
        if isinstance(item, Tensor):
            vector = item.to(torch.float64)
        else:
            item = list(item)
            if self._data_set is not None and len(item) == self._data_set.num_attributes \
                    and len(item) != self._dimension:
                # Full item including nominal attributes
                item = [item[i] for i in self._data_set.numeric_attributes]
            vector = torch.tensor([float(v) for v in item], dtype=torch.float64)
        if vector.dim() != 1 or vector.shape[0] != self._dimension:
            raise ValueError(f"Item has {vector.numel()} numeric attributes, "
                             f"expected {self._dimension}")
        return vector

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    @property
    def number_of_clusters(self) -> int:
        return len(self.clusters)

    @property
    def supports_eval(self) -> bool:
        return True

    @abstractmethod
    def build(self, data_set: DataLike, k: int) -> 'BaseClusterer':
        """Cluster ``data_set`` into ``k`` clusters and return self."""
        pass

    @abstractmethod
    def eval(self, item) -> int:
        """Index of the built cluster a new item belongs to."""
        pass

    def __repr__(self) -> str:
        params = ', '.join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}({params})"


class CentroidClusterer(BaseClusterer):
    """Clusterer whose result is a set of centroids.

    New items are scored against the centroids with the configured distance
    function; ties go to the lowest cluster index.
    """

    def __init__(self, distance_function=None, verbose: int = 0):
        super().__init__(distance_function=distance_function, verbose=verbose)
        self.centroids: Optional[Tensor] = None
        self.sse: Optional[float] = None

    def eval(self, item) -> int:
        """Index of the nearest centroid."""
        self._check_built()
        vector = self._item_to_tensor(item)
        return int(self.predict(vector.unsqueeze(0))[0])

    def predict(self, X) -> Tensor:
        """Nearest centroid index for each row of X.

        Args:
            X: (n, d) data tensor, array or list of rows

        Returns:
            (n,) tensor of cluster indices
        """
        self._check_built()
        if not isinstance(X, Tensor):
            X = torch.tensor(X, dtype=torch.float64)
        X = validate_data(X.to(torch.float64), ensure_min_samples=0)
        if X.shape[1] != self._dimension:
            raise ValueError(f"Expected dimension {self._dimension}, got {X.shape[1]}")

        function = self._distance_function
        if function is None:
            diff = X.unsqueeze(1) - self.centroids.unsqueeze(0)
            distances = torch.sum(diff * diff, dim=2)
        else:
            distances = torch.tensor(
                [[float(function(x, c)) for c in self.centroids] for x in X],
                dtype=torch.float64).reshape(X.shape[0], len(self.centroids))
        return torch.argmin(distances, dim=1)


class IterativeClusterer(CentroidClusterer):
    """Alternating optimization between assignment and update steps.

    Subclasses need to specify:
    - Initialization strategy
    - Assignment strategy
    - Convergence criterion
    - Objective function
    - What to do when a cluster receives no point
    """

    _PARAMETERS = ('max_iterations', 'random_seed', 'track_history',
                   'distance_function', 'verbose')

    def __init__(self,
                 max_iterations: int = 100,
                 random_seed: Optional[int] = None,
                 track_history: bool = False,
                 distance_function=None,
                 verbose: int = 0):
        """
        Args:
            max_iterations: Maximum number of assignment/update rounds
            random_seed: Seed of the run's generator; None draws a fresh one
            track_history: Record an AlgorithmState after every update step
            distance_function: Assignment distance, squared Euclidean if None
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
        """
        super().__init__(distance_function=distance_function, verbose=verbose)
        self.max_iterations = max_iterations
        self.random_seed = random_seed
        self.track_history = track_history

        # These will be set by subclasses
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.iterations = 0
        self.history: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None
        self.converged_ = False

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def _handle_empty_clusters(self, X: Tensor, assignments: Tensor,
                               representations: List[ClusterRepresentation]
                               ) -> Tuple[Tensor, List[ClusterRepresentation]]:
        """Repair assignments that leave a cluster empty. Default: no-op."""
        return assignments, representations

    def _run(self, X: Tensor, n_clusters: int,
             generator: torch.Generator) -> Tensor:
        """Internal loop implementing the alternating optimization.

        Returns:
            (n,) final hard assignments
        """
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")

        if self.verbose:
            print(f"Initializing {n_clusters} clusters...")

        start_time = time.time()
        representations = self.initialization_strategy.initialize(
            X, n_clusters, generator=generator
        )

        self.iterations = 0
        self.history = []
        self.converged_ = False
        self.convergence_criterion.reset()
        assignments = None

        for iteration in range(self.max_iterations):
            iter_start_time = time.time()

            # Assignment step
            assignments = self.assignment_strategy.compute_assignments(X, representations)
            assignments, representations = self._handle_empty_clusters(
                X, assignments, representations
            )
            assignment_matrix = AssignmentMatrix(assignments, len(representations))

            # Update step
            for k, representation in enumerate(representations):
                cluster_indices = assignment_matrix.get_cluster_indices(k)
                representation.update_from_points(X[cluster_indices])

            objective_value = self.objective.compute(X, representations, assignments)

            if self.track_history:
                self.history.append(AlgorithmState(
                    iteration=iteration,
                    centroids=torch.stack([rep.get_parameters()['mean']
                                           for rep in representations]),
                    assignments=assignments.clone(),
                    objective_value=objective_value
                ))

            self.iterations = iteration + 1
            self.converged_ = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value,
                'assignments': assignments
            })

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                print(f"Iteration {iteration:3d}: objective = {objective_value:.6f} "
                      f"({iter_time:.3f}s)")

            if self.converged_:
                if self.track_history:
                    self.history[-1].converged = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        if self.verbose:
            if not self.converged_:
                warnings.warn(f"Failed to converge after {self.max_iterations} iterations",
                              RuntimeWarning)
            print(f"Total build time: {time.time() - start_time:.3f}s")

        self.representations = representations
        return assignments
