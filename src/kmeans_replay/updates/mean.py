"""
Mean update strategy for centroid-based clustering.
"""

from typing import Tuple
import torch
from torch import Tensor

from ..base.interfaces import ParameterUpdater


class MeanUpdater(ParameterUpdater):
    """Moves each centroid to the arithmetic mean of its assigned points.

    A cluster with no assigned points keeps its previous centroid.
    """

    def update(self, points: Tensor, assignments: Tensor,
               centroids: Tensor, **kwargs) -> Tuple[Tensor, Tensor]:
        """Update cluster means.

        Args:
            points: (n, 2) data points
            assignments: (n,) cluster id per point
            centroids: (k, 2) centroids before the update

        Returns:
            Tuple of (new centroids, member counts per cluster)
        """
        n_clusters = centroids.shape[0]
        counts = torch.bincount(assignments, minlength=n_clusters)

        sums = torch.zeros_like(centroids).index_add_(0, assignments, points)

        new_centroids = centroids.clone()
        nonempty = counts > 0
        new_centroids[nonempty] = sums[nonempty] / counts[nonempty].unsqueeze(1).to(centroids.dtype)

        return new_centroids, counts
