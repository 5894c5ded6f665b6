"""
Classical proximity functions between two feature vectors.

All functions are stateless and accept either torch tensors or plain
sequences of numbers. Numeric functions return Python floats so they can be
used directly as ``distance_function`` callables by the clusterers.
"""

from typing import Callable, Sequence, Union
import torch
from torch import Tensor


Vector = Union[Tensor, Sequence[float]]
DistanceFunction = Callable[[Tensor, Tensor], float]


def _as_vector(a: Vector) -> Tensor:
    if isinstance(a, Tensor):
        return a.to(torch.float64)
    return torch.as_tensor(a, dtype=torch.float64)


def _check_same_length(a: Tensor, b: Tensor) -> None:
    if a.shape != b.shape:
        raise ValueError(f"Vectors must have the same shape, got {tuple(a.shape)} "
                         f"and {tuple(b.shape)}")


def squared_euclidean_distance(a: Vector, b: Vector) -> float:
    """Euclidean distance to the power of 2.

    Cheaper than the Euclidean distance and the default for every clusterer.
    """
    a, b = _as_vector(a), _as_vector(b)
    _check_same_length(a, b)
    diff = a - b
    return float(torch.sum(diff * diff))


def euclidean_distance(a: Vector, b: Vector) -> float:
    """Euclidean distance, or L2 norm."""
    return squared_euclidean_distance(a, b) ** 0.5


def manhattan_distance(a: Vector, b: Vector) -> float:
    """City block distance, or L1 norm."""
    a, b = _as_vector(a), _as_vector(b)
    _check_same_length(a, b)
    return float(torch.sum(torch.abs(a - b)))


def sup_distance(a: Vector, b: Vector) -> float:
    """Sup distance, or L-infinity norm."""
    a, b = _as_vector(a), _as_vector(b)
    _check_same_length(a, b)
    if a.numel() == 0:
        return 0.0
    return float(torch.max(torch.abs(a - b)))


def hamming_distance(a: Sequence, b: Sequence) -> int:
    """Number of attributes for which the two vectors differ.

    Works with nominal attributes as well as numbers.
    """
    if len(a) != len(b):
        raise ValueError(f"Vectors must have the same length, got {len(a)} and {len(b)}")
    return sum(1 for x, y in zip(a, b) if x != y)


def simple_matching_distance(a: Sequence, b: Sequence) -> float:
    """Simple matching distance between two sets of values.

    With S = 2 * |values present in both| / (|a| + |b|), the distance is
    1/S - 1. Returns ``inf`` when the sets share no value.
    """
    total = len(a) + len(b)
    if total == 0:
        return 0.0
    shared = sum(2 for item in a if item in b)
    similarity = shared / total
    if similarity == 0:
        return float('inf')
    return 1.0 / similarity - 1.0


def cosine_distance(a: Vector, b: Vector) -> float:
    """One minus the cosine similarity of the two vectors."""
    a, b = _as_vector(a), _as_vector(b)
    _check_same_length(a, b)
    magnitude = torch.linalg.norm(a) * torch.linalg.norm(b)
    if magnitude == 0:
        raise ValueError("Cosine distance is undefined for zero vectors")
    return float(1.0 - torch.dot(a, b) / magnitude)


def pairwise_squared_euclidean(X: Tensor, Y: Tensor = None) -> Tensor:
    """(n, m) matrix of squared Euclidean distances between rows of X and Y.

    Uses explicit differences rather than the norm expansion so that equal
    rows give exactly zero and the result is exactly symmetric.
    """
    if Y is None:
        Y = X
    diff = X.unsqueeze(1) - Y.unsqueeze(0)
    return torch.sum(diff * diff, dim=2)


def pairwise_distance_matrix(X: Tensor,
                             distance_function: DistanceFunction = None) -> Tensor:
    """Symmetric (n, n) matrix of distances between the rows of X.

    Args:
        X: (n, d) tensor of points
        distance_function: Callable on two 1-D tensors. None means squared
            Euclidean distance, computed in one vectorised pass.
    """
    if distance_function is None:
        return pairwise_squared_euclidean(X)

    n = X.shape[0]
    matrix = torch.zeros(n, n, dtype=torch.float64)
    for i in range(n):
        for j in range(i):
            d = float(distance_function(X[i], X[j]))
            matrix[i, j] = d
            matrix[j, i] = d
    return matrix


DISTANCE_FUNCTIONS = {
    'squared_euclidean': squared_euclidean_distance,
    'euclidean': euclidean_distance,
    'manhattan': manhattan_distance,
    'sup': sup_distance,
    'cosine': cosine_distance,
}


def resolve_distance_function(distance_function) -> DistanceFunction:
    """Accept None, a registered name or a callable.

    None is kept as None so callers can take the vectorised squared
    Euclidean path.
    """
    if distance_function is None or callable(distance_function):
        return distance_function
    if isinstance(distance_function, str):
        if distance_function not in DISTANCE_FUNCTIONS:
            raise ValueError(f"Unknown distance function: {distance_function}. "
                             f"Choose from {sorted(DISTANCE_FUNCTIONS)}")
        if distance_function == 'squared_euclidean':
            return None
        return DISTANCE_FUNCTIONS[distance_function]
    raise TypeError(f"distance_function must be None, a name or a callable, "
                    f"got {type(distance_function)}")
