# tests/data_gen.py
"""
Tiny synthetic-data generators reused across the clusterkit test suite.

Intended usage:
    >>> X, y = make_blobs(n_per=50, centers=[[0, 0], [10, 10]], seed=0)
    >>> X.shape, y.shape
    ((100, 2), (100,))
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
import numpy as np

NDArray = np.ndarray


def make_blobs(
    n_per: int = 50,
    centers: Sequence[Sequence[float]] = ((0.0, 0.0), (10.0, 10.0)),
    scale: float = 0.5,
    seed: Optional[int] = None,
) -> Tuple[NDArray, NDArray]:
    """
    Isotropic Gaussian blobs around the given centers.

    Parameters
    ----------
    n_per : int, default=50
        Number of points per blob.
    centers : sequence of points
        Blob centers; their length fixes the dimension.
    scale : float, default=0.5
        Standard deviation of every coordinate.
    seed : int or None
        RNG seed for reproducibility.

    Returns
    -------
    X : (len(centers) * n_per, d) ndarray, float64
        Rows grouped by blob, in center order.
    y : (len(centers) * n_per,) ndarray, int64
        Ground-truth blob index of every row.
    """
    rng = np.random.default_rng(seed)
    centers = np.asarray(centers, dtype=np.float64)
    X = np.vstack([rng.normal(loc=c, scale=scale, size=(n_per, centers.shape[1]))
                   for c in centers])
    y = np.repeat(np.arange(len(centers)), n_per).astype(np.int64)
    return X, y


def make_grid_with_labels(n_side: int = 3, spacing: float = 1.0) -> list:
    """
    Regular 2D grid of rows with a nominal class label in the last column.

    Row i is ``[x, y, 'a' or 'b']``; the label alternates with the row index.
    """
    rows = []
    for i in range(n_side):
        for j in range(n_side):
            rows.append([i * spacing, j * spacing, 'a' if (i * n_side + j) % 2 == 0 else 'b'])
    return rows
