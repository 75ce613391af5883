"""Distance metrics for clustering algorithms."""

from .euclidean import EuclideanDistance, WeightedEuclideanDistance, CallableDistance

__all__ = [
    'EuclideanDistance',
    'WeightedEuclideanDistance',
    'CallableDistance'
]
