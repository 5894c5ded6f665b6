# tests/test_convergence.py
"""
Convergence criteria behavior.

Covers:
- ChangeInAssignments: zero-change default, fraction threshold + patience
- reset() clears previous assignments and history
"""

from __future__ import annotations

import torch

from clusterkit.base.data_structures import AssignmentMatrix
from clusterkit.utils.convergence import ChangeInAssignments


def test_default_requires_no_change():
    crit = ChangeInAssignments()
    a0 = torch.tensor([0, 0, 1, 1])

    # First call only records the assignments
    assert crit.check({"iteration": 0, "assignments": a0}) is False
    assert crit.check({"iteration": 1, "assignments": torch.tensor([0, 1, 1, 1])}) is False
    assert crit.check({"iteration": 2, "assignments": torch.tensor([0, 1, 1, 1])}) is True
    assert [h["n_changed"] for h in crit.history] == [1, 0]


def test_fraction_threshold_with_patience():
    crit = ChangeInAssignments(min_change_fraction=0.2, patience=2)
    a0 = torch.zeros(10, dtype=torch.long)
    a1 = a0.clone()
    a1[0] = 1
    a2 = a1.clone()
    a2[1] = 1

    assert crit.check({"assignments": a0}) is False
    # 10% changed: stable #1
    assert crit.check({"assignments": a1}) is False
    # 10% changed: stable #2
    assert crit.check({"assignments": a2}) is True


def test_large_change_resets_patience():
    crit = ChangeInAssignments(min_change_fraction=0.1, patience=2)
    a0 = torch.zeros(10, dtype=torch.long)
    a1 = torch.ones(10, dtype=torch.long)

    assert crit.check({"assignments": a0}) is False
    assert crit.check({"assignments": a0}) is False
    assert crit.check({"assignments": a1}) is False
    assert crit.check({"assignments": a1}) is False
    assert crit.check({"assignments": a1}) is True


def test_accepts_assignment_matrix_and_reset():
    crit = ChangeInAssignments()
    matrix = AssignmentMatrix(torch.tensor([0, 1, 1]), 2)
    assert crit.check({"assignments": matrix}) is False
    assert crit.check({"assignments": matrix}) is True

    crit.reset()
    assert crit.history == []
    assert crit.check({"assignments": matrix}) is False
