# tests/test_validation_assignment_matrix.py
"""
Validation helpers & AssignmentMatrix bookkeeping.

Covers:
- validate_data rejects non-finite values and wrong shapes
- resolve_input maps every accepted input to (data set, positions)
- check_n_clusters / check_random_state argument checks
- AssignmentMatrix counts, empty clusters and grouping
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from clusterkit import DataSet, Cluster
from clusterkit.base.data_structures import AssignmentMatrix
from clusterkit.utils.validation import (
    validate_data,
    resolve_input,
    check_n_clusters,
    check_random_state,
    draw_seed,
)


def test_validate_data_rejects_bad_input():
    with pytest.raises(ValueError, match="2D"):
        validate_data(torch.zeros(3))
    with pytest.raises(ValueError, match="NaN"):
        validate_data(torch.tensor([[0.0], [float("nan")]]))
    with pytest.raises(ValueError, match="infinite"):
        validate_data(torch.tensor([[0.0], [float("inf")]]))
    with pytest.raises(ValueError, match="samples"):
        validate_data(torch.zeros(0, 2))
    X = torch.ones(2, 2)
    assert validate_data(X) is X


@pytest.mark.parametrize("make", [
    lambda rows: rows,
    lambda rows: np.asarray(rows),
    lambda rows: torch.tensor(rows),
    lambda rows: DataSet(data_items=rows),
])
def test_resolve_input_accepts_all_forms(make, four_points):
    data_set, indices = resolve_input(make(four_points))
    assert isinstance(data_set, DataSet)
    assert indices == [0, 1, 2, 3]
    assert data_set.to_tensor().shape == (4, 2)


def test_resolve_input_keeps_cluster_owner(four_points):
    ds = DataSet(data_items=four_points)
    owner, indices = resolve_input(Cluster(ds, [3, 1]))
    assert owner is ds
    assert indices == [3, 1]
    with pytest.raises(TypeError):
        resolve_input("not data")


def test_check_n_clusters():
    check_n_clusters(2, 4)
    check_n_clusters(10, 4, allow_more_than_samples=True)
    with pytest.raises(ValueError):
        check_n_clusters(0, 4)
    with pytest.raises(ValueError):
        check_n_clusters(5, 4)
    with pytest.raises(ValueError):
        check_n_clusters(1, 0)
    with pytest.raises(TypeError):
        check_n_clusters(2.0, 4)
    with pytest.raises(TypeError):
        check_n_clusters(True, 4)


def test_check_random_state_is_explicit():
    g1 = check_random_state(7)
    g2 = check_random_state(7)
    assert draw_seed(g1) == draw_seed(g2)

    gen = torch.Generator()
    assert check_random_state(gen) is gen
    assert isinstance(check_random_state(None), torch.Generator)
    with pytest.raises(TypeError):
        check_random_state("seed")


def test_assignment_matrix_helpers():
    matrix = AssignmentMatrix(torch.tensor([2, 0, 2, 0]), 4)
    assert matrix.n_points == 4
    assert matrix.count_per_cluster().tolist() == [2, 0, 2, 0]
    assert matrix.empty_clusters() == [1, 3]
    assert matrix.groups() == [[1, 3], [], [0, 2], []]
    assert matrix.get_cluster_indices(2).tolist() == [0, 2]
