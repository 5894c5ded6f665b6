"""Data containers: the DataSet items collection and index-based Cluster views."""

from .data_set import DataSet
from .cluster import Cluster
from . import statistics

__all__ = [
    'DataSet',
    'Cluster',
    'statistics'
]
