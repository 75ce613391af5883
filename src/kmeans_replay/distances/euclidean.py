"""
Euclidean distance metric for clustering.

The default metric for K-means assignment.
"""

from typing import Callable
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Squared Euclidean distance metric.

    Computes ||x - μ||² for every point x and centroid μ.
    """

    def __init__(self, squared: bool = True):
        """
        Args:
            squared: If True, return squared distances (default).
                    If False, return actual Euclidean distances.
        """
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute Euclidean distances from points to centroids.

        Args:
            points: (n, 2) tensor of points
            centroids: (k, 2) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        squared_distances = torch.sum(diff * diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"


class WeightedEuclideanDistance(DistanceMetric):
    """Weighted Euclidean distance with per-axis weights.

    Computes sqrt(w_x * (x - μ_x)² + w_y * (y - μ_y)²).
    """

    def __init__(self, weights: Tensor, squared: bool = True):
        """
        Args:
            weights: (2,) tensor of axis weights
            squared: Whether to return squared distances
        """
        weights = torch.as_tensor(weights)
        if weights.shape != (2,):
            raise ValueError(f"Expected 2 axis weights, got shape {tuple(weights.shape)}")
        if (weights < 0).any():
            raise ValueError("Axis weights must be non-negative")
        self.weights = weights
        self.squared = squared

    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute weighted Euclidean distances.

        Args:
            points: (n, 2) tensor of points
            centroids: (k, 2) tensor of centroids

        Returns:
            (n, k) tensor of distances
        """
        # Ensure weights match points
        weights = self.weights.to(device=points.device, dtype=points.dtype)

        diff = points.unsqueeze(1) - centroids.unsqueeze(0)
        weighted_sq_diff = weights.view(1, 1, 2) * diff * diff
        squared_distances = torch.sum(weighted_sq_diff, dim=2)

        if self.squared:
            return squared_distances
        else:
            return torch.sqrt(squared_distances)


class CallableDistance(DistanceMetric):
    """Adapter for a plain function ``fn(points, centroids) -> (n, k)``."""

    def __init__(self, fn: Callable[[Tensor, Tensor], Tensor]):
        self.fn = fn

    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        distances = torch.as_tensor(self.fn(points, centroids))
        expected = (points.shape[0], centroids.shape[0])
        if tuple(distances.shape) != expected:
            raise ValueError(f"Distance function returned shape {tuple(distances.shape)}, "
                           f"expected {expected}")
        return distances
