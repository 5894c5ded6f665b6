"""
Input validation utilities.

Every clusterer funnels its arguments through these checks so that invalid
configurations fail before any computation starts.
"""

from typing import Optional, Union, Tuple, List, Sequence
import torch
from torch import Tensor
import numpy as np

from ..data.data_set import DataSet
from ..data.cluster import Cluster


DataLike = Union[DataSet, Cluster, Tensor, np.ndarray, Sequence[Sequence[float]]]


def validate_data(X: Tensor, ensure_finite: bool = True,
                  ensure_min_samples: int = 1) -> Tensor:
    """Validate a numeric data matrix.

    Args:
        X: (n, d) tensor
        ensure_finite: Whether to check for inf/nan
        ensure_min_samples: Minimum number of samples required

    Returns:
        The same tensor

    Raises:
        ValueError: If validation fails
    """
    if X.dim() != 2:
        raise ValueError(f"Expected 2D array, got {X.dim()}D")

    n_samples = X.shape[0]
    if n_samples < ensure_min_samples:
        raise ValueError(f"Found {n_samples} samples, but need at least "
                         f"{ensure_min_samples}")

    if ensure_finite and n_samples > 0:
        if torch.isnan(X).any():
            raise ValueError("Input contains NaN values")
        if torch.isinf(X).any():
            raise ValueError("Input contains infinite values")

    return X


def resolve_input(data: DataLike) -> Tuple[DataSet, List[int]]:
    """Turn any accepted input into (owning data set, item positions).

    A Cluster resolves to its owning data set restricted to its members, so
    algorithms can run on a view without copying items.
    """
    if isinstance(data, Cluster):
        return data.data_set, list(data.indices)
    if isinstance(data, DataSet):
        return data, list(range(len(data)))
    if isinstance(data, (Tensor, np.ndarray, list, tuple)):
        data_set = DataSet(data_items=data)
        return data_set, list(range(len(data_set)))
    raise TypeError(f"Cannot cluster data of type {type(data)}")


def check_n_clusters(n_clusters: int, n_samples: int,
                     allow_more_than_samples: bool = False) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of samples
        allow_more_than_samples: Accept n_clusters > n_samples

    Raises:
        TypeError: If n_clusters is not an int
        ValueError: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise TypeError(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters <= 0:
        raise ValueError(f"n_clusters must be positive, got {n_clusters}")

    if n_samples == 0:
        raise ValueError("Examples data set must not be empty.")

    if n_clusters > n_samples and not allow_more_than_samples:
        raise ValueError(f"n_clusters ({n_clusters}) cannot be larger than "
                         f"n_samples ({n_samples})")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create generator from random state.

    Args:
        random_state: Seed, generator or None (fresh nondeterministic seed)

    Returns:
        Generator owned by the caller
    """
    if random_state is None:
        generator = torch.Generator()
        generator.seed()
        return generator
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def draw_seed(generator: torch.Generator) -> int:
    """Draw a child seed from a generator, for nested seeded runs."""
    return int(torch.randint(0, 2 ** 31 - 1, (1,), generator=generator).item())
