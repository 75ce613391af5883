"""
K-means++ seeding strategy.

Selects initial centroids using the K-means++ algorithm, which chooses
seeds that are far apart to improve convergence speed and quality.
"""

from typing import Optional
import math
import torch
from torch import Tensor

from ..base.interfaces import SeedingStrategy
from ..base.exceptions import DegenerateInput, InvalidConfiguration
from ..utils.validation import distinct_locations


class KMeansPlusPlusSeeding(SeedingStrategy):
    """K-means++ seeding for better starting positions.

    Algorithm:
    1. Choose first seed uniformly at random
    2. For each remaining seed:
       - Compute distance from each location to nearest existing seed
       - Sample candidates with probability proportional to squared distance
       - Keep the candidate that lowers the total potential the most

    Works on distinct locations; a chosen location has zero distance to
    itself, so it is never sampled again.
    """

    def __init__(self, n_local_trials: Optional[int] = None):
        """
        Args:
            n_local_trials: Number of candidates to try for each seed.
                           If None, uses 2 + log(k) as in sklearn
        """
        self.n_local_trials = n_local_trials

    def seed(self, points: Tensor, n_clusters: int,
             generator: Optional[torch.Generator] = None) -> Tensor:
        """Choose seeds using K-means++.

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
        n_candidates = candidates.shape[0]
        if n_candidates < n_clusters:
            raise DegenerateInput(f"Cannot choose {n_clusters} distinct seeds: only "
                                  f"{n_candidates} distinct locations among {n_points} items")

        if self.n_local_trials is None:
            n_local_trials = 2 + int(math.log(n_clusters))
        else:
            n_local_trials = self.n_local_trials

        # Choose first seed uniformly at random
        first_idx = torch.randint(n_candidates, (1,), generator=generator).item()
        chosen = [first_idx]

        # Squared distance to nearest chosen seed
        distances = torch.sum((candidates - candidates[first_idx].unsqueeze(0)) ** 2, dim=1)

        for _ in range(1, n_clusters):
            probabilities = distances / distances.sum()

            candidate_idx = torch.multinomial(probabilities.cpu(), n_local_trials,
                                              replacement=True, generator=generator)

            # Potential = sum of min distances if the candidate were chosen
            best_potential = float('inf')
            best_candidate = None
            best_distances = None
            for idx in candidate_idx.tolist():
                candidate_distances = torch.sum(
                    (candidates - candidates[idx].unsqueeze(0)) ** 2, dim=1
                )
                new_distances = torch.minimum(distances, candidate_distances)
                potential = new_distances.sum().item()
                if potential < best_potential:
                    best_potential = potential
                    best_candidate = idx
                    best_distances = new_distances

            chosen.append(best_candidate)
            distances = best_distances

        return candidates[chosen].clone()

    def __repr__(self) -> str:
        return f"KMeansPlusPlusSeeding(n_local_trials={self.n_local_trials})"
