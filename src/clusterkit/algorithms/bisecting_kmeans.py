"""
Bisecting K-means.

Starts from one cluster holding every item and repeatedly splits the cluster
with the largest SSE in two with K-means, until k clusters exist.
"""

from typing import Optional, List
import warnings
import torch

from ..base.clustering_base import CentroidClusterer
from ..data.cluster import Cluster
from ..utils.validation import DataLike, check_random_state, draw_seed
from .kmeans import KMeans


class BisectingKMeans(CentroidClusterer):
    """Divisive K-means variant.

    Parameters
    ----------
    restarts : int, default=1
        Number of 2-means runs per split; the split with the lowest SSE is
        kept. Each run gets its own seed drawn from the build's generator.
    refine : bool, default=False
        Finish with a plain K-means pass over all items, seeded with the
        bisecting centroids
    max_iterations : int, default=100
        Iteration cap of every inner K-means run
    random_seed : int, optional
        Seed of the build's generator
    distance_function : callable or str, optional
        Assignment distance of the inner K-means runs
    verbose : int, default=0
        Verbosity level

    Attributes
    ----------
    clusters : list of Cluster
    centroids : Tensor of shape (n_clusters, n_features)
    sse : float
    split_count : int
        Number of splits performed
    sse_history : list of float
        Total SSE before the first split and after every split
    """

    _PARAMETERS = ('restarts', 'refine', 'max_iterations', 'random_seed',
                   'distance_function', 'verbose')

    def __init__(self,
                 restarts: int = 1,
                 refine: bool = False,
                 max_iterations: int = 100,
                 random_seed: Optional[int] = None,
                 distance_function=None,
                 verbose: int = 0):
        super().__init__(distance_function=distance_function, verbose=verbose)
        self.restarts = restarts
        self.refine = refine
        self.max_iterations = max_iterations
        self.random_seed = random_seed

        self.split_count = 0
        self.sse_history: List[float] = []

    def _bisect(self, cluster: Cluster, generator: torch.Generator) -> KMeans:
        """Best 2-means split of one cluster over ``restarts`` runs."""
        best = None
        for _ in range(self.restarts):
            kmeans = KMeans(max_iterations=self.max_iterations,
                            random_seed=draw_seed(generator),
                            distance_function=self.distance_function)
            kmeans.build(cluster, 2)
            if best is None or kmeans.sse < best.sse:
                best = kmeans
        return best

    def build(self, data_set: DataLike, k: int) -> 'BisectingKMeans':
        """Split ``data_set`` into ``k`` clusters.

        Stops early, with a RuntimeWarning, when every cluster holds a single
        item before ``k`` is reached.
        """
        if self.restarts < 1:
            raise ValueError(f"restarts must be at least 1, got {self.restarts}")

        data_set, indices, X = self._prepare(data_set, k, allow_more_than_samples=True)
        generator = check_random_state(self.random_seed)

        clusters = [Cluster(data_set, indices)]
        self.split_count = 0
        self.sse_history = [clusters[0].sse]

        while len(clusters) < k:
            splittable = [i for i, c in enumerate(clusters) if len(c) >= 2]
            if not splittable:
                warnings.warn(f"Only {len(clusters)} of {k} clusters could be built: "
                              f"no cluster has more than one item", RuntimeWarning)
                break

            # Largest SSE, lowest position on ties
            target = max(splittable, key=lambda i: (clusters[i].sse, -i))
            best = self._bisect(clusters[target], generator)

            del clusters[target]
            clusters.extend(Cluster(data_set, c.indices) for c in best.clusters)
            self.split_count += 1
            self.sse_history.append(sum(c.sse for c in clusters))

            if self.verbose >= 2:
                print(f"Split {self.split_count}: cluster {target} -> "
                      f"sizes {[len(c) for c in best.clusters]}, "
                      f"sse = {self.sse_history[-1]:.6f}")

        if self.refine:
            kmeans = KMeans(max_iterations=self.max_iterations,
                            distance_function=self.distance_function,
                            verbose=self.verbose)
            kmeans.build(Cluster(data_set, indices), len(clusters),
                         initial_centroids=torch.stack([c.centroid for c in clusters]))
            clusters = kmeans.clusters

        self.clusters = [Cluster(data_set, c.indices, name=f"cluster_{i}")
                         for i, c in enumerate(clusters)]
        self.centroids = torch.stack([c.centroid for c in self.clusters])
        self.sse = sum(c.sse for c in self.clusters)
        self.built_ = True

        if self.verbose:
            print(f"BisectingKMeans built {len(self.clusters)} clusters with "
                  f"{self.split_count} splits, sse = {self.sse:.6f}")
        return self
