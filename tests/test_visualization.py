# tests/test_visualization.py
"""
Plotting helpers run headless (Agg backend, set in conftest).
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import pytest
import torch

from clusterkit import (
    KMeans,
    WardLinkage,
    SingleLinkage,
    Diana,
    plot_clusters_2d,
    plot_sse_history,
    plot_dendrogram,
)

from data_gen import make_blobs


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plot_clusters_from_views():
    X, _ = make_blobs(n_per=10, centers=[[0, 0], [5, 5], [0, 5]], seed=0)
    km = KMeans(random_seed=0).build(X, 3)

    ax = plot_clusters_2d(km.clusters, centers=km.centroids, title="k-means")
    # one scatter per cluster plus the centers
    assert len(ax.collections) == 4
    assert ax.get_title() == "k-means"


def test_plot_clusters_from_tensor_and_labels(four_points):
    X = torch.tensor(four_points, dtype=torch.float64)
    ax = plot_clusters_2d(X, labels=torch.tensor([0, 0, 1, 1]), show_legend=False)
    assert len(ax.collections) == 2
    with pytest.raises(ValueError):
        plot_clusters_2d(X)


def test_plot_sse_history():
    X, _ = make_blobs(n_per=5, centers=[[0, 0], [4, 4]], seed=1)
    model = Diana().build(X, 4)
    ax = plot_sse_history(model.sse_history, xlabel="Split")
    assert len(ax.lines) == 1
    assert len(ax.lines[0].get_xdata()) == 4


def test_plot_dendrogram_full_tree():
    X, _ = make_blobs(n_per=4, centers=[[0, 0], [4, 4]], seed=2)
    model = WardLinkage().build(X, 1)

    ax = plot_dendrogram(model.merges, len(X), title="ward")
    assert len(ax.lines) == model.merge_count
    assert len(ax.get_xticks()) == len(X)


def test_plot_dendrogram_forest(four_points):
    model = SingleLinkage().build(four_points, 2)
    fig, ax = plt.subplots()
    returned = plot_dendrogram(model.merges, 4, ax=ax, leaf_labels=list("abcd"))
    assert returned is ax
    assert len(ax.lines) == 2
    assert [t.get_text() for t in ax.get_xticklabels()] == ["a", "b", "c", "d"]
