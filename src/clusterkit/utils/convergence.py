"""
Convergence criteria for iterative clustering algorithms.

K-means stops when no item changes cluster between two iterations; the
criterion below generalises that to a tolerated fraction of changes.
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class ChangeInAssignments(ConvergenceCriterion):
    """Convergence based on fraction of points that change clusters."""

    def __init__(self, min_change_fraction: float = 0.0,
                 patience: int = 1):
        """
        Args:
            min_change_fraction: Largest fraction of changed points still
                considered stable. 0 means no point may change.
            patience: Number of stable iterations before declaring convergence
        """
        super().__init__()
        self.min_change_fraction = min_change_fraction
        self.patience = patience
        self._prev_assignments = None
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments have stabilized."""
        assignments = current_state['assignments']

        if isinstance(assignments, Tensor):
            current_assignments = assignments
        else:
            # AssignmentMatrix object
            current_assignments = assignments.get_hard()

        if self._prev_assignments is None:
            self._prev_assignments = current_assignments.clone()
            return False

        n_changed = (current_assignments != self._prev_assignments).sum().item()
        n_total = len(current_assignments)
        change_fraction = n_changed / n_total if n_total else 0.0

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': change_fraction
        })

        if change_fraction <= self.min_change_fraction:
            self._stable_count += 1
            converged = self._stable_count >= self.patience
        else:
            self._stable_count = 0
            converged = False

        self._prev_assignments = current_assignments.clone()

        return converged

    def reset(self):
        """Forget previous assignments and history."""
        super().reset()
        self._prev_assignments = None
        self._stable_count = 0
