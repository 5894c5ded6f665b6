# tests/test_diana.py
"""
DIANA divisive clustering: splinter growth, split bookkeeping and outputs.
"""

from __future__ import annotations

import pytest

from clusterkit import Diana, DataSet

from data_gen import make_blobs
from utils import is_exact_partition, partition


def test_initial_cluster_holds_everything(four_points):
    model = Diana().build(four_points, 2)
    assert model.initial_cluster.indices == (0, 1, 2, 3)
    assert model.cluster_tree[0] == [(0, 1, 2, 3)]


def test_split_of_two_tight_pairs(four_points):
    model = Diana().build(four_points, 2)

    # The remainder keeps the split cluster's position, the splinter is appended
    assert [c.indices for c in model.clusters] == [(2, 3), (0, 1)]
    step = model.splits[0]
    assert step.parent == (0, 1, 2, 3)
    assert step.splinter == (0, 1)
    assert step.remainder == (2, 3)
    assert step.diameter == pytest.approx(26.0)
    assert model.sse_history == pytest.approx([26.0, 1.0])
    assert model.sse == pytest.approx(1.0)


@pytest.mark.parametrize("k", [1, 2, 3, 5])
def test_k_minus_one_splits(k):
    X, _ = make_blobs(n_per=5, centers=[[0, 0], [6, 0], [3, 5]], seed=12)
    model = Diana().build(X, k)

    assert model.split_count == k - 1
    assert model.number_of_clusters == k
    assert len(model.cluster_tree) == k
    assert is_exact_partition(model.clusters, 15)


def test_separated_blobs_are_recovered():
    X, y = make_blobs(n_per=8, centers=[[0, 0], [10, 0], [5, 9]], scale=0.4, seed=1)
    model = Diana().build(X, 3)
    expected = {frozenset(int(i) for i in range(len(y)) if y[i] == label) for label in range(3)}
    assert partition(model.clusters) == expected


def test_identical_items_split_down_to_singletons():
    model = Diana().build([[1.0, 1.0]] * 3, 3)
    assert sorted(len(c) for c in model.clusters) == [1, 1, 1]
    assert model.sse == 0.0


def test_sse_history_never_increases():
    X, _ = make_blobs(n_per=6, centers=[[0, 0], [4, 4]], scale=1.0, seed=3)
    history = Diana().build(X, 6).sse_history
    assert all(b <= a + 1e-9 for a, b in zip(history, history[1:]))


def test_more_clusters_than_items_stops_with_warning():
    with pytest.warns(RuntimeWarning, match="Only 2 of 3"):
        model = Diana().build([[0, 0], [0, 1]], 3)
    assert model.number_of_clusters == 2
    assert model.split_count == 1
    assert partition(model.clusters) == {frozenset({0}), frozenset({1})}
    assert len(model.sse_history) == 2


def test_invalid_arguments(four_points):
    with pytest.raises(ValueError):
        Diana().build(DataSet(), 1)
    with pytest.raises(ValueError):
        Diana().build(four_points, 0)


def test_eval_lowest_average_distance(four_points):
    model = Diana()
    with pytest.raises(RuntimeError):
        model.eval([0, 0])
    model.build(four_points, 2)
    assert model.eval([0.0, 0.5]) == 1
    assert model.eval([6.0, 0.5]) == 0


def test_manhattan_distance_by_name(four_points):
    model = Diana(distance_function="manhattan").build(four_points, 2)
    assert partition(model.clusters) == {frozenset({0, 1}), frozenset({2, 3})}
    assert model.splits[0].diameter == pytest.approx(6.0)
