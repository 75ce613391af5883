"""
Random seeding strategy for clustering algorithms.

Selects random item locations from the dataset as initial centroids.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import SeedingStrategy
from ..base.exceptions import DegenerateInput, InvalidConfiguration
from ..utils.validation import distinct_locations


class RandomSeeding(SeedingStrategy):
    """Random seeding by selecting item locations from the dataset.

    Selects n_clusters distinct locations (without replacement). Items that
    share a location count once, so seeds never coincide.
    """

    def seed(self, points: Tensor, n_clusters: int,
             generator: Optional[torch.Generator] = None) -> Tensor:
        """Choose seeds uniformly among distinct item locations.

        Args:
            points: (n, 2) data points
            n_clusters: Number of clusters
            generator: Optional random source

        Returns:
            (n_clusters, 2) seed positions
        """
        n_points = points.shape[0]
        if n_clusters > n_points:
            raise InvalidConfiguration(f"Cannot create {n_clusters} clusters from {n_points} points")

        candidates = distinct_locations(points)
        if candidates.shape[0] < n_clusters:
            raise DegenerateInput(f"Cannot choose {n_clusters} distinct seeds: only "
                                  f"{candidates.shape[0]} distinct locations among {n_points} items")

        # Select random indices without replacement
        indices = torch.randperm(candidates.shape[0], generator=generator)[:n_clusters]
        return candidates[indices.to(candidates.device)].clone()

    def __repr__(self) -> str:
        return "RandomSeeding()"
