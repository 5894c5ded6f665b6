"""
Cluster visualization utilities.

Scatter plots of 2D partitions, SSE traces of hierarchical and bisecting
runs, and a dendrogram drawn from an agglomerative merge history.
"""

from typing import Optional, List, Sequence, Union, Dict, Tuple
import torch
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..data.cluster import Cluster
from ..base.data_structures import MergeStep


def _default_colors(n_clusters: int) -> list:
    cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')
    return [cmap(i % cmap.N) for i in range(n_clusters)]


def plot_clusters_2d(clusters: Union[Sequence[Cluster], Tensor],
                     labels: Optional[Tensor] = None,
                     centers: Optional[Tensor] = None,
                     ax: Optional[plt.Axes] = None,
                     colors: Optional[List[str]] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.

    Args:
        clusters: List of Cluster views, or an (n, 2) tensor of points when
            ``labels`` is given
        labels: (n,) cluster labels for tensor input
        centers: Optional (k, 2) cluster centers
        ax: Matplotlib axes (created if None)
        colors: List of colors for clusters
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    if isinstance(clusters, Tensor):
        if labels is None:
            raise ValueError("labels are required when plotting a tensor of points")
        X_np = clusters.cpu().numpy()
        labels_np = labels.cpu().numpy()
        groups = [X_np[labels_np == label] for label in np.unique(labels_np)]
    else:
        groups = [c.points.numpy() for c in clusters if len(c) > 0]

    for points in groups:
        if points.shape[1] < 2:
            raise ValueError(f"Need 2 numeric attributes to plot, got {points.shape[1]}")

    if colors is None:
        colors = _default_colors(len(groups))

    for i, points in enumerate(groups):
        ax.scatter(points[:, 0], points[:, 1],
                   color=colors[i % len(colors)],
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=f'Cluster {i}')

    if centers is not None:
        centers_np = centers.cpu().numpy()
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centers',
                   zorder=10)

    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')

    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax


def plot_sse_history(sse_history: Sequence[float],
                     ax: Optional[plt.Axes] = None,
                     xlabel: str = 'Step',
                     title: Optional[str] = None) -> plt.Axes:
    """Plot total SSE after every merge, split or iteration.

    Args:
        sse_history: SSE values in order
        ax: Matplotlib axes (created if None)
        xlabel: Label of the step axis
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 4))

    steps = np.arange(len(sse_history))
    ax.plot(steps, np.asarray(sse_history, dtype=float), marker='o', linewidth=1.5)
    ax.set_xlabel(xlabel)
    ax.set_ylabel('Total SSE')
    ax.grid(True, alpha=0.3)

    if title:
        ax.set_title(title)

    return ax


def plot_dendrogram(merges: Sequence[MergeStep],
                    n_items: int,
                    ax: Optional[plt.Axes] = None,
                    leaf_labels: Optional[Sequence[str]] = None,
                    color: str = 'tab:blue',
                    title: Optional[str] = None) -> plt.Axes:
    """Draw the tree of an agglomerative merge history.

    Leaves are laid out so that no branches cross. When the merging stopped
    before a single cluster remained, every open subtree is drawn side by
    side.

    Args:
        merges: Merge steps, as in ``AgglomerativeClusterer.merges``
        n_items: Number of clustered items
        ax: Matplotlib axes (created if None)
        leaf_labels: Optional label per item position
        color: Line color
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 5))

    children: Dict[int, Tuple[int, int]] = {}
    heights: Dict[int, float] = {i: 0.0 for i in range(n_items)}
    for step in merges:
        children[step.new_cluster] = (step.cluster_a, step.cluster_b)
        heights[step.new_cluster] = step.distance

    merged = {c for pair in children.values() for c in pair}
    roots = [node for node in heights if node not in merged]

    # Leaf order from a depth-first walk of every root
    order: List[int] = []
    for root in roots:
        stack = [root]
        while stack:
            node = stack.pop()
            if node in children:
                a, b = children[node]
                stack.extend((b, a))
            else:
                order.append(node)

    x_position = {leaf: float(x) for x, leaf in enumerate(order)}
    for step in merges:
        a, b = step.cluster_a, step.cluster_b
        xa, xb = x_position[a], x_position[b]
        ha, hb, h = heights[a], heights[b], heights[step.new_cluster]
        ax.plot([xa, xa, xb, xb], [ha, h, h, hb], color=color, linewidth=1.2)
        x_position[step.new_cluster] = (xa + xb) / 2.0

    ax.set_xticks(np.arange(len(order)))
    if leaf_labels is not None:
        ax.set_xticklabels([str(leaf_labels[leaf]) for leaf in order], rotation=90)
    else:
        ax.set_xticklabels([str(leaf) for leaf in order])
    ax.set_ylabel('Merge distance')
    ax.set_xlim(-0.5, len(order) - 0.5)

    if title:
        ax.set_title(title)

    return ax
