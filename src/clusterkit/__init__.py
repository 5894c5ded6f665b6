"""
clusterkit: partitional and hierarchical clustering on a shared data model.

This package implements:
- K-means and bisecting K-means
- Agglomerative clustering with single, complete, average, weighted-average,
  centroid, median and Ward linkage
- DIANA divisive clustering

Example usage:
    >>> from clusterkit import DataSet, KMeans, WardLinkage
    >>>
    >>> data = DataSet(data_items=[[0, 0], [0, 1], [5, 0], [5, 1]])
    >>>
    >>> kmeans = KMeans(random_seed=42).build(data, 2)
    >>> kmeans.number_of_clusters
    2
    >>>
    >>> ward = WardLinkage().build(data, 1)
    >>> ward.merge_count
    3
"""

__version__ = '0.1.0'

# Data model first: the algorithms depend on it
from .data import DataSet, Cluster

from .distances import (
    squared_euclidean_distance,
    euclidean_distance,
    manhattan_distance,
    sup_distance,
    hamming_distance,
    simple_matching_distance,
    cosine_distance
)

# Import main algorithms
from .algorithms.kmeans import KMeans
from .algorithms.bisecting_kmeans import BisectingKMeans
from .algorithms.linkage import (
    AgglomerativeClusterer,
    SingleLinkage,
    CompleteLinkage,
    AverageLinkage,
    WeightedAverageLinkage,
    CentroidLinkage,
    MedianLinkage,
    WardLinkage
)
from .algorithms.diana import Diana

# Convenience imports
from .base import (
    AssignmentMatrix,
    AlgorithmState,
    MergeStep,
    SplitStep
)

# Import visualization
from .visualization import (
    plot_clusters_2d,
    plot_sse_history,
    plot_dendrogram
)

__all__ = [
    # Data model
    'DataSet',
    'Cluster',

    # Proximity
    'squared_euclidean_distance',
    'euclidean_distance',
    'manhattan_distance',
    'sup_distance',
    'hamming_distance',
    'simple_matching_distance',
    'cosine_distance',

    # Algorithms
    'KMeans',
    'BisectingKMeans',
    'AgglomerativeClusterer',
    'SingleLinkage',
    'CompleteLinkage',
    'AverageLinkage',
    'WeightedAverageLinkage',
    'CentroidLinkage',
    'MedianLinkage',
    'WardLinkage',
    'Diana',

    # Core data structures
    'AssignmentMatrix',
    'AlgorithmState',
    'MergeStep',
    'SplitStep',

    # Visualization
    'plot_clusters_2d',
    'plot_sse_history',
    'plot_dendrogram',

    # Version
    '__version__'
]
