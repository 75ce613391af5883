"""
Convergence criteria for clustering algorithms.

K-means replay stops on centroid movement; the assignment criterion is
used to detect a fixed point whose recomputation would repeat the last
recorded iteration.
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion


class CentroidShift(ConvergenceCriterion):
    """Convergence when no centroid moved farther than ``tol``.

    Movement is the Euclidean distance between a cluster's centroid in the
    previous and the current iteration; the largest one is compared.
    """

    def __init__(self, tol: float = 1e-4):
        """
        Args:
            tol: Largest allowed centroid movement (inclusive)
        """
        super().__init__()
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if every centroid stayed within tolerance."""
        previous = current_state['previous_centroids']
        current = current_state['centroids']

        shifts = torch.linalg.vector_norm(current - previous, dim=1)
        max_shift = shifts.max().item() if shifts.numel() > 0 else 0.0

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': max_shift
        })

        return max_shift <= self.tol


class UnchangedAssignments(ConvergenceCriterion):
    """Fixed-point detection: assignments identical to the previous step."""

    def __init__(self):
        super().__init__()
        self._prev_assignments = None

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if assignments match the previous call exactly."""
        current: Tensor = current_state['assignments']

        if self._prev_assignments is None:
            self._prev_assignments = current.clone()
            return False

        n_changed = (current != self._prev_assignments).sum().item()
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed
        })

        self._prev_assignments = current.clone()
        return n_changed == 0

    def reset(self):
        super().reset()
        self._prev_assignments = None
