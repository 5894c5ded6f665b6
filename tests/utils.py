# tests/utils.py
"""
Small, reusable helpers used across the clusterkit test suite.

Functions:
- partition(clusters): clusters as a set of frozensets of item indices.
- labels_equal_up_to_perm(y1, y2, K): label vectors equal after relabelling.
- is_exact_partition(clusters, n): every index 0..n-1 in exactly one cluster.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict, FrozenSet, Iterable, Set

import numpy as np


def partition(clusters: Iterable) -> Set[FrozenSet[int]]:
    """Order-free view of a clustering result."""
    return {frozenset(c.indices) for c in clusters}


def is_exact_partition(clusters: Iterable, n: int) -> bool:
    """True when every index 0..n-1 belongs to exactly one cluster."""
    seen = [i for c in clusters for i in c.indices]
    return sorted(seen) == list(range(n))


def labels_equal_up_to_perm(y1: np.ndarray, y2: np.ndarray, K: int) -> bool:
    """Return True if y2 can be relabelled to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("build", {"n": 400, "k": 3}):
    ...     model.build(X, 3)

    Output
    ------
    [timing] build {"n":400,"k":3} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.

    Example:
    [timing] build {"n":400,"k":3} 0.123s
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
