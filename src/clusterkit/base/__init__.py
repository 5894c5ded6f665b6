"""Base classes and interfaces for clusterkit algorithms."""

from .interfaces import (
    ClusterRepresentation,
    AssignmentStrategy,
    DistanceMetric,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective,
    LinkagePolicy
)

from .data_structures import (
    AssignmentMatrix,
    AlgorithmState,
    MergeStep,
    SplitStep,
    ClusterRecord
)

from .clustering_base import BaseClusterer, CentroidClusterer, IterativeClusterer

__all__ = [
    # Interfaces
    'ClusterRepresentation',
    'AssignmentStrategy',
    'DistanceMetric',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',
    'LinkagePolicy',

    # Data structures
    'AssignmentMatrix',
    'AlgorithmState',
    'MergeStep',
    'SplitStep',
    'ClusterRecord',

    # Base algorithms
    'BaseClusterer',
    'CentroidClusterer',
    'IterativeClusterer'
]
