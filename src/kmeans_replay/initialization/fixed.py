"""
Seeding from explicit centroid positions.

Useful for reproducible scenarios or warm starts from a previous run.
"""

from typing import Optional, Sequence, Union
import torch
from torch import Tensor

from ..base.interfaces import SeedingStrategy
from ..base.data_structures import Item, Iteration, CentroidCluster
from ..base.exceptions import DegenerateInput, InvalidConfiguration
from ..utils.validation import count_distinct_locations


class FixedSeeding(SeedingStrategy):
    """Seed from given positions.

    Accepts either:
    - A tensor or sequence of (x, y) pairs / Items, one per cluster
    - An Iteration from a previous run (its centroids, in cluster id order)

    Seed row j becomes cluster id j.
    """

    def __init__(self, seeds: Union[Tensor, Sequence, Iteration]):
        """
        Args:
            seeds: Initial centroid positions
        """
        self.seeds = seeds

    def _as_rows(self) -> list:
        if isinstance(self.seeds, Iteration):
            return [
                [cluster.centroid.x, cluster.centroid.y]
                for cluster in self.seeds.clusters
                if isinstance(cluster, CentroidCluster)
            ]
        if isinstance(self.seeds, Tensor):
            if self.seeds.dim() != 2:
                raise InvalidConfiguration(f"Expected a (k, 2) seed tensor, got shape {tuple(self.seeds.shape)}")
            return self.seeds.detach().cpu().tolist()
        try:
            return [[seed.x, seed.y] if isinstance(seed, Item) else list(seed) for seed in self.seeds]
        except TypeError:
            raise InvalidConfiguration(f"Cannot read seed points from {self.seeds!r}") from None

    def seed(self, points: Tensor, n_clusters: int,
             generator: Optional[torch.Generator] = None) -> Tensor:
        """Return the configured seeds after validation.

        Args:
            points: (n, 2) data points (used for dtype/device)
            n_clusters: Expected number of seeds
            generator: Ignored

        Returns:
            (n_clusters, 2) seed positions
        """
        rows = self._as_rows()

        if len(rows) != n_clusters:
            raise InvalidConfiguration(f"Provided {len(rows)} seeds, but n_clusters={n_clusters}")
        if any(len(row) != 2 for row in rows):
            raise InvalidConfiguration("Every seed must have exactly 2 coordinates")

        try:
            centers = torch.tensor(rows, dtype=points.dtype, device=points.device)
        except (TypeError, ValueError):
            raise InvalidConfiguration("Seed coordinates must be numbers") from None

        if not torch.isfinite(centers).all():
            raise InvalidConfiguration("Seeds contain non-finite coordinates")
        if count_distinct_locations(centers) < n_clusters:
            raise DegenerateInput("Seeds must be pairwise distinct")

        return centers

    def __repr__(self) -> str:
        return f"FixedSeeding(n_seeds={len(self._as_rows())})"
