"""Utility functions for clusterkit algorithms."""

from .convergence import ChangeInAssignments

from .metrics import (
    inertia,
    sum_of_squared_errors,
    merge_cost,
    linkage_matrix
)

from .validation import (
    validate_data,
    resolve_input,
    check_n_clusters,
    check_random_state,
    draw_seed
)

__all__ = [
    # Convergence
    'ChangeInAssignments',

    # Metrics
    'inertia',
    'sum_of_squared_errors',
    'merge_cost',
    'linkage_matrix',

    # Validation
    'validate_data',
    'resolve_input',
    'check_n_clusters',
    'check_random_state',
    'draw_seed'
]
