"""
Core interfaces for the replayable clustering engine.

This module defines the abstract base classes every pluggable component
implements. Only centroid-based partitioning is implemented, but the engine
talks to its components exclusively through these seams.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Dict, Any
import torch
from torch import Tensor


class DistanceMetric(ABC):
    """Abstract base class for point-to-centroid distances."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor, **kwargs) -> Tensor:
        """Compute distances from every point to every centroid.

        Args:
            points: (n, 2) tensor of item positions
            centroids: (k, 2) tensor of centroid positions, row j belongs
                to cluster id j

        Returns:
            (n, k) tensor of distances
        """
        pass


class SeedingStrategy(ABC):
    """Abstract base class for choosing initial centroids."""

    @abstractmethod
    def seed(self, points: Tensor, n_clusters: int,
             generator: Optional[torch.Generator] = None) -> Tensor:
        """Choose initial centroid positions.

        Args:
            points: (n, 2) tensor of item positions
            n_clusters: Number of seeds to choose
            generator: Optional random source for reproducible seeding

        Returns:
            (n_clusters, 2) tensor of pairwise distinct seed positions

        Raises:
            DegenerateInput: If n_clusters distinct seeds cannot be chosen
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            distance: DistanceMetric, **kwargs) -> Tensor:
        """Assign every point to exactly one cluster.

        Args:
            points: (n, 2) item positions
            centroids: (k, 2) current centroid positions
            distance: Metric used to compare points and centroids

        Returns:
            (n,) long tensor of cluster ids
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, points: Tensor, assignments: Tensor,
               centroids: Tensor, **kwargs) -> Tuple[Tensor, Tensor]:
        """Compute new centroids from the current assignments.

        Args:
            points: (n, 2) item positions
            assignments: (n,) cluster id per point
            centroids: (k, 2) centroids before the update

        Returns:
            Tuple of (new (k, 2) centroids, (k,) member counts)
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor, centroids: Tensor,
                assignments: Tensor) -> float:
        """Compute objective function value.

        Args:
            points: (n, 2) item positions
            centroids: (k, 2) centroid positions
            assignments: (n,) cluster id per point

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
