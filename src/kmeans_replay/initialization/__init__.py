"""Seeding strategies for clustering algorithms."""

from .random import RandomSeeding
from .kmeans_plusplus import KMeansPlusPlusSeeding
from .fixed import FixedSeeding

__all__ = [
    'RandomSeeding',
    'KMeansPlusPlusSeeding',
    'FixedSeeding'
]
