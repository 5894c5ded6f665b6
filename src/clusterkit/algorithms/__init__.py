"""Clustering algorithm implementations."""

from .kmeans import KMeans, KMeansObjective
from .bisecting_kmeans import BisectingKMeans
from .linkage import (
    AgglomerativeClusterer,
    SingleLinkage,
    CompleteLinkage,
    AverageLinkage,
    WeightedAverageLinkage,
    CentroidLinkage,
    MedianLinkage,
    WardLinkage
)
from .diana import Diana

__all__ = [
    'KMeans',
    'KMeansObjective',
    'BisectingKMeans',
    'AgglomerativeClusterer',
    'SingleLinkage',
    'CompleteLinkage',
    'AverageLinkage',
    'WeightedAverageLinkage',
    'CentroidLinkage',
    'MedianLinkage',
    'WardLinkage',
    'Diana'
]
