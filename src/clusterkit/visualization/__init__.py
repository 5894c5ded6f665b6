"""Visualization utilities for clustering results."""

from .plot_clusters import (
    plot_clusters_2d,
    plot_sse_history,
    plot_dendrogram
)

__all__ = [
    'plot_clusters_2d',
    'plot_sse_history',
    'plot_dendrogram'
]
