# tests/test_proximity.py
"""
Proximity functions and pairwise matrices.
"""

from __future__ import annotations

import math

import numpy as np
import pytest
import torch

from clusterkit.distances import (
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
    EuclideanDistance,
    FunctionDistance,
)
from clusterkit.representations import CentroidRepresentation


def test_numeric_distances_on_3_4_5_triangle():
    a, b = [0, 0], [3, 4]
    assert squared_euclidean_distance(a, b) == 25.0
    assert euclidean_distance(a, b) == 5.0
    assert manhattan_distance(a, b) == 7.0
    assert sup_distance(a, b) == 4.0


def test_distances_accept_tensors_and_arrays():
    a = torch.tensor([1.0, 2.0])
    b = np.array([1.0, 4.0])
    assert squared_euclidean_distance(a, b) == 4.0


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        squared_euclidean_distance([0, 0], [1, 1, 1])
    with pytest.raises(ValueError):
        hamming_distance("abc", "ab")


def test_nominal_distances():
    assert hamming_distance(["a", "b", "c"], ["a", "x", "c"]) == 1
    assert simple_matching_distance([1, 2, 3], [1, 2, 4]) == pytest.approx(0.5)
    assert simple_matching_distance([1], [2]) == math.inf


def test_cosine_distance():
    assert cosine_distance([1, 0], [0, 1]) == pytest.approx(1.0)
    assert cosine_distance([1, 1], [2, 2]) == pytest.approx(0.0, abs=1e-12)
    with pytest.raises(ValueError):
        cosine_distance([0, 0], [1, 1])


def test_pairwise_matrices_agree(rng):
    X = torch.as_tensor(rng.normal(size=(6, 3)))
    fast = pairwise_squared_euclidean(X)
    slow = pairwise_distance_matrix(X, squared_euclidean_distance)
    assert torch.allclose(fast, slow)
    assert torch.equal(fast, fast.T)
    assert torch.all(torch.diagonal(fast) == 0)


def test_resolve_distance_function():
    assert resolve_distance_function(None) is None
    assert resolve_distance_function("squared_euclidean") is None
    assert resolve_distance_function("manhattan") is manhattan_distance
    assert resolve_distance_function(cosine_distance) is cosine_distance
    with pytest.raises(ValueError):
        resolve_distance_function("chebyshev-ish")
    with pytest.raises(TypeError):
        resolve_distance_function(3)


def test_point_to_centroid_metrics():
    rep = CentroidRepresentation.from_point(torch.tensor([0.0, 0.0], dtype=torch.float64))
    points = torch.tensor([[3.0, 4.0], [1.0, 0.0]], dtype=torch.float64)

    assert torch.equal(EuclideanDistance().compute(points, rep),
                       torch.tensor([25.0, 1.0], dtype=torch.float64))
    assert torch.equal(EuclideanDistance(squared=False).compute(points, rep),
                       torch.tensor([5.0, 1.0], dtype=torch.float64))
    assert torch.equal(FunctionDistance(manhattan_distance).compute(points, rep),
                       torch.tensor([7.0, 1.0], dtype=torch.float64))
