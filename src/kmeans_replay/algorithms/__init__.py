"""Clustering algorithms."""

from .kmeans import KMeans, KMeansObjective, run

__all__ = [
    'KMeans',
    'KMeansObjective',
    'run'
]
