"""
Hard assignment strategy for clustering algorithms.

Assigns each point to its nearest centroid based on the distance metric.
"""

import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, DistanceMetric


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest cluster.

    Each point is assigned to exactly one cluster based on minimum distance.
    Centroid row j belongs to cluster id j, and argmin returns the first
    minimal column, so ties go to the lowest cluster id.
    """

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            distance: DistanceMetric, **kwargs) -> Tensor:
        """Assign each point to nearest cluster.

        Args:
            points: (n, 2) data points
            centroids: (k, 2) centroid positions
            distance: Metric producing an (n, k) distance matrix

        Returns:
            (n,) tensor of cluster ids
        """
        distances = distance.compute(points, centroids)
        return torch.argmin(distances, dim=1)

