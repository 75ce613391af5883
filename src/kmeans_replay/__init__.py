"""
K-Means Replay: record and replay the convergence of K-means on 2D points.

This package runs Lloyd's algorithm while keeping every intermediate state:
- An immutable snapshot per iteration, cluster ids stable across the run
- A two-frames-per-iteration schedule (assignment, then update)
- The path every centroid has followed up to any iteration

Example usage:
    >>> from kmeans_replay import run, AnimationHistory
    >>>
    >>> points = [(0, 0), (0, 2), (10, 0), (10, 2)]
    >>> result = run(points, n_clusters=2, seeding=[(0, 0), (10, 0)])
    >>>
    >>> history = AnimationHistory(result)
    >>> history.frame_count()
    2
    >>> history.path_history(1)[0]
    (Point(x=0.0, y=0.0), Point(x=0.0, y=1.0))
"""

__version__ = '0.1.0'

# Import main algorithm
from .algorithms.kmeans import KMeans, run

# Replay
from .history import (
    AnimationHistory,
    Frame,
    ClusterFrame,
    FramePhase
)

# Convenience imports
from .base import (
    Point,
    Item,
    Cluster,
    CentroidCluster,
    Iteration,
    AlgorithmResult,
    TerminationReason,
    KMeansReplayError,
    InvalidConfiguration,
    DegenerateInput,
    OutOfRange
)

from .initialization import RandomSeeding, KMeansPlusPlusSeeding, FixedSeeding
from .distances import EuclideanDistance

# Import visualization
from .visualization import ClusterColors, plot_seeds, plot_frame

__all__ = [
    # Algorithm
    'KMeans',
    'run',

    # Replay
    'AnimationHistory',
    'Frame',
    'ClusterFrame',
    'FramePhase',

    # Core data structures
    'Point',
    'Item',
    'Cluster',
    'CentroidCluster',
    'Iteration',
    'AlgorithmResult',
    'TerminationReason',

    # Errors
    'KMeansReplayError',
    'InvalidConfiguration',
    'DegenerateInput',
    'OutOfRange',

    # Strategies
    'RandomSeeding',
    'KMeansPlusPlusSeeding',
    'FixedSeeding',
    'EuclideanDistance',

    # Visualization
    'ClusterColors',
    'plot_seeds',
    'plot_frame',

    # Version
    '__version__'
]
