# tests/integration/test_end_to_end.py
"""
End-to-end scenarios: load a CSV with a nominal class column, cluster it
with every algorithm family and compare the partitions.
"""

from __future__ import annotations

import numpy as np
import pytest

from clusterkit import (
    DataSet,
    KMeans,
    BisectingKMeans,
    SingleLinkage,
    AverageLinkage,
    WardLinkage,
    Diana,
)

from data_gen import make_blobs
from utils import is_exact_partition, partition


@pytest.fixture
def labelled_csv(tmp_path):
    X, y = make_blobs(n_per=15, centers=[[0, 0], [12, 0], [6, 10]], scale=0.5, seed=21)
    path = tmp_path / "blobs.csv"
    lines = ["x,y,species"]
    lines += [f"{a:.6f},{b:.6f},{'abc'[label]}" for (a, b), label in zip(X, y)]
    path.write_text("\n".join(lines) + "\n")
    return str(path), y


def _truth(y):
    return {frozenset(int(i) for i in np.flatnonzero(y == label)) for label in np.unique(y)}


@pytest.mark.parametrize("make_model", [
    lambda: KMeans(random_seed=0, centroid_indices=[0, 15, 30]),
    lambda: BisectingKMeans(random_seed=0, restarts=3),
    lambda: SingleLinkage(),
    lambda: AverageLinkage(),
    lambda: WardLinkage(),
    lambda: Diana(),
])
def test_every_family_recovers_the_blobs(make_model, labelled_csv):
    path, y = labelled_csv
    data_set = DataSet.from_csv(path)
    assert data_set.category_label == "species"
    assert data_set.to_tensor().shape == (45, 2)

    model = make_model().build(data_set, 3)

    assert model.number_of_clusters == 3
    assert is_exact_partition(model.clusters, 45)
    assert partition(model.clusters) == _truth(y)

    for cluster in model.clusters:
        # nominal attribute summarised by its mode: one species per cluster
        species = {item[2] for item in cluster.data_items}
        assert len(species) == 1
        assert cluster.get_mean_or_mode()[2] in species


def test_scoring_new_items_with_full_rows(labelled_csv):
    path, _ = labelled_csv
    data_set = DataSet.from_csv(path)
    model = KMeans(centroid_indices=[0, 15, 30]).build(data_set, 3)

    # full rows, class label included, are accepted
    assert model.eval([12.1, 0.2, "?"]) == model.eval([12.0, 0.0])
    assert model.eval([0.1, -0.1]) != model.eval([6.0, 10.0])


def test_hierarchy_is_consistent_across_levels(labelled_csv):
    path, _ = labelled_csv
    data_set = DataSet.from_csv(path)
    model = WardLinkage().build(data_set, 1)

    # Every partition of the tree refines the next one
    for finer, coarser in zip(model.cluster_tree, model.cluster_tree[1:]):
        coarse_sets = [set(c) for c in coarser]
        for group in finer:
            assert any(set(group) <= c for c in coarse_sets)

    three = WardLinkage().build(data_set, 3)
    assert {frozenset(c) for c in model.cluster_tree[-3]} == partition(three.clusters)
