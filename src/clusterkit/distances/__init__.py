"""Distance metrics and proximity functions for clustering algorithms."""

from .proximity import (
    squared_euclidean_distance,
    euclidean_distance,
    manhattan_distance,
    sup_distance,
    hamming_distance,
    simple_matching_distance,
    cosine_distance,
    pairwise_squared_euclidean,
    pairwise_distance_matrix,
    resolve_distance_function,
    DISTANCE_FUNCTIONS
)
from .euclidean import EuclideanDistance, FunctionDistance

__all__ = [
    # Proximity functions
    'squared_euclidean_distance',
    'euclidean_distance',
    'manhattan_distance',
    'sup_distance',
    'hamming_distance',
    'simple_matching_distance',
    'cosine_distance',
    'pairwise_squared_euclidean',
    'pairwise_distance_matrix',
    'resolve_distance_function',
    'DISTANCE_FUNCTIONS',

    # Point-to-centroid metrics
    'EuclideanDistance',
    'FunctionDistance'
]
