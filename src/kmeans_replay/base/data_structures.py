"""
Core data structures for K-means replay.

Every structure here is an immutable snapshot. A run produces one seed
Iteration plus an append-only tuple of Iterations; clusters keep the same
integer identifier in every snapshot so their movement can be reconstructed
afterwards without sharing mutable objects between steps.
"""

from typing import Optional, Tuple, Dict, FrozenSet, NamedTuple
from dataclasses import dataclass, field
from enum import Enum
import math

from .exceptions import OutOfRange


class Point(NamedTuple):
    """2D coordinate."""
    x: float
    y: float

    def distance_to(self, other: 'Point') -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Item:
    """A 2D input datum with a unique identifier."""
    id: int
    position: Point

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y


@dataclass(frozen=True)
class Cluster:
    """A cluster identifier and the items assigned to it at one step."""
    id: int
    items: FrozenSet[Item] = frozenset()

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def item_ids(self) -> FrozenSet[int]:
        return frozenset(item.id for item in self.items)


@dataclass(frozen=True)
class CentroidCluster(Cluster):
    """Cluster that also carries a centroid position.

    The centroid is independent of member positions: seeds have no members,
    and an empty cluster keeps the centroid it had before.
    """
    centroid: Point = Point(0.0, 0.0)


class TerminationReason(Enum):
    """Why a run stopped. Both are normal terminal states."""
    CONVERGED = 'converged'
    MAX_ITERATIONS = 'max_iterations'


@dataclass(frozen=True)
class Iteration:
    """Clusters as they exist after one assignment+update step.

    Order 0 is the seeding state: one cluster per seed, no members.
    """
    order: int
    clusters: Tuple[Cluster, ...]
    inertia: Optional[float] = None

    _by_id: Dict[int, Cluster] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.order < 0:
            raise ValueError(f"Iteration order must be non-negative, got {self.order}")

        by_id = {}
        for cluster in self.clusters:
            if cluster.id in by_id:
                raise ValueError(f"Duplicate cluster id {cluster.id} in iteration {self.order}")
            by_id[cluster.id] = cluster

        # Keep clusters ordered by id so iteration order is deterministic
        object.__setattr__(self, 'clusters', tuple(sorted(self.clusters, key=lambda c: c.id)))
        object.__setattr__(self, '_by_id', by_id)

    @property
    def cluster_ids(self) -> Tuple[int, ...]:
        return tuple(cluster.id for cluster in self.clusters)

    def __contains__(self, cluster_id: int) -> bool:
        return cluster_id in self._by_id

    def cluster(self, cluster_id: int) -> Cluster:
        """Get the cluster with the given id.

        Raises:
            KeyError: If the id is not present in this iteration
        """
        return self._by_id[cluster_id]

    def get(self, cluster_id: int) -> Optional[Cluster]:
        return self._by_id.get(cluster_id)

    def centroids(self) -> Dict[int, Point]:
        """Centroid position per cluster id (centroid clusters only)."""
        return {
            cluster.id: cluster.centroid
            for cluster in self.clusters
            if isinstance(cluster, CentroidCluster)
        }

    def assignments(self) -> Dict[int, int]:
        """Map item id -> cluster id."""
        mapping = {}
        for cluster in self.clusters:
            for item in cluster.items:
                mapping[item.id] = cluster.id
        return mapping


@dataclass(frozen=True)
class AlgorithmResult:
    """Complete output of a clustering run.

    Holds the input items, the seed iteration (order 0) and the iterations
    for orders 1..N in increasing order. Treated as read-only once returned.
    """
    items: Tuple[Item, ...]
    cluster_seeds: Iteration
    iterations: Tuple[Iteration, ...]
    termination: TerminationReason

    def __post_init__(self):
        if self.cluster_seeds.order != 0:
            raise ValueError(f"Seed iteration must have order 0, got {self.cluster_seeds.order}")

        expected = 1
        for iteration in self.iterations:
            if iteration.order != expected:
                raise ValueError(f"Iterations must have consecutive orders starting at 1, "
                               f"got {iteration.order} where {expected} was expected")
            expected += 1

    @property
    def n_iter(self) -> int:
        """Number of recorded iterations, seed excluded."""
        return len(self.iterations)

    @property
    def converged(self) -> bool:
        return self.termination is TerminationReason.CONVERGED

    @property
    def all_iterations(self) -> Tuple[Iteration, ...]:
        """Seed iteration followed by every recorded iteration."""
        return (self.cluster_seeds,) + self.iterations

    @property
    def final_iteration(self) -> Iteration:
        return self.iterations[-1] if self.iterations else self.cluster_seeds

    @property
    def cluster_ids(self) -> Tuple[int, ...]:
        return self.cluster_seeds.cluster_ids

    def iteration(self, order: int) -> Iteration:
        """Get the iteration with the given order (0 is the seed iteration).

        Raises:
            OutOfRange: If no iteration with that order was recorded
        """
        if isinstance(order, bool) or not isinstance(order, int):
            raise OutOfRange(f"Iteration order must be an int, got {type(order).__name__}")
        if order < 0 or order > self.n_iter:
            raise OutOfRange(f"No iteration with order {order}; recorded orders are 0..{self.n_iter}")
        if order == 0:
            return self.cluster_seeds
        return self.iterations[order - 1]

    @property
    def labels(self) -> Tuple[int, ...]:
        """Final cluster id of each item, in input order."""
        assignments = self.final_iteration.assignments()
        return tuple(assignments[item.id] for item in self.items)

    @property
    def cluster_centers(self) -> Dict[int, Point]:
        """Final centroid per cluster id."""
        return self.final_iteration.centroids()

    @property
    def inertia(self) -> Optional[float]:
        return self.final_iteration.inertia
