"""Base classes, data model and interfaces for K-means replay."""

from .exceptions import (
    KMeansReplayError,
    InvalidConfiguration,
    DegenerateInput,
    OutOfRange
)

from .data_structures import (
    Point,
    Item,
    Cluster,
    CentroidCluster,
    Iteration,
    AlgorithmResult,
    TerminationReason
)

from .interfaces import (
    DistanceMetric,
    SeedingStrategy,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion,
    ClusteringObjective
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Errors
    'KMeansReplayError',
    'InvalidConfiguration',
    'DegenerateInput',
    'OutOfRange',

    # Data structures
    'Point',
    'Item',
    'Cluster',
    'CentroidCluster',
    'Iteration',
    'AlgorithmResult',
    'TerminationReason',

    # Interfaces
    'DistanceMetric',
    'SeedingStrategy',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
