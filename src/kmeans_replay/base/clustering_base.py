"""
Base class for replayable clustering algorithms.

Provides the common algorithmic skeleton for alternating between assignment
and update steps, recording an immutable snapshot after every step.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    AssignmentStrategy, ParameterUpdater, DistanceMetric,
    SeedingStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    Item, Point, CentroidCluster, Iteration, AlgorithmResult, TerminationReason
)
from .exceptions import InvalidConfiguration
from ..utils.validation import (
    ItemsLike, validate_items, items_to_tensor, check_n_clusters,
    check_iteration_params, check_random_state
)


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Seeding strategy
    - Distance metric
    - Assignment strategy
    - Parameter update strategy
    - Convergence criterion
    - Objective function

    Every call to :meth:`run` starts from scratch and returns a new
    :class:`AlgorithmResult`; nothing from a previous run is reused.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 dtype: torch.dtype = torch.float64,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations
            tol: Convergence tolerance on centroid movement
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Seed or generator for reproducible seeding
            dtype: Floating point type used for positions
            device: Torch device (None for CPU)
        """
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state
        self.dtype = dtype
        self.device = device if device is not None else torch.device('cpu')

        # These will be set by subclasses
        self.seeding_strategy: Optional[SeedingStrategy] = None
        self.distance_metric: Optional[DistanceMetric] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.fixed_point_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Fitted state
        self.fitted_ = False
        self.result_: Optional[AlgorithmResult] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.seeding_strategy
        - self.distance_metric
        - self.assignment_strategy
        - self.update_strategy
        - self.convergence_criterion
        - self.fixed_point_criterion
        - self.objective
        """
        pass

    def run(self, X: ItemsLike) -> AlgorithmResult:
        """Run the algorithm and return the full iteration history.

        Args:
            X: Items, (x, y) pairs, or an (n, 2) array / tensor

        Returns:
            AlgorithmResult with the seed iteration and iterations 1..N

        Raises:
            InvalidConfiguration: On bad input or parameters
            DegenerateInput: If n_clusters distinct seeds cannot be chosen
        """
        items = validate_items(X)
        check_n_clusters(self.n_clusters, len(items))
        check_iteration_params(self.max_iter, self.tol)

        self._create_components()
        generator = check_random_state(self.random_state)
        points = items_to_tensor(items, dtype=self.dtype, device=self.device)

        if self.verbose:
            print(f"Seeding {self.n_clusters} clusters with {self.seeding_strategy!r}...")

        start_time = time.time()
        centroids = self.seeding_strategy.seed(points, self.n_clusters, generator=generator)
        centroids = centroids.to(dtype=self.dtype, device=self.device)
        if tuple(centroids.shape) != (self.n_clusters, 2):
            raise InvalidConfiguration(f"Seeding produced shape {tuple(centroids.shape)}, "
                                       f"expected {(self.n_clusters, 2)}")

        cluster_seeds = self._build_iteration(0, items, None, centroids)

        self.convergence_criterion.reset()
        self.fixed_point_criterion.reset()

        iterations: List[Iteration] = []
        termination = TerminationReason.MAX_ITERATIONS

        # Main optimization loop
        for order in range(1, self.max_iter + 1):
            iter_start_time = time.time()

            # Assignment step
            assignments = self.assignment_strategy.compute_assignments(
                points, centroids, self.distance_metric
            )

            # Same memberships as the last recorded iteration: the update
            # would reproduce that snapshot exactly, so it is not recorded again
            if self.fixed_point_criterion.check({'iteration': order, 'assignments': assignments}):
                termination = TerminationReason.CONVERGED
                if self.verbose:
                    print(f"Converged at iteration {order - 1} (assignments stable)")
                break

            # Update step
            new_centroids, counts = self.update_strategy.update(points, assignments, centroids)

            if self.verbose >= 2:
                for cluster_id in torch.nonzero(counts == 0).flatten().tolist():
                    warnings.warn(f"Cluster {cluster_id} has no members at iteration {order}; "
                                  f"keeping its previous centroid")

            objective_value = self.objective.compute(points, new_centroids, assignments)

            iterations.append(
                self._build_iteration(order, items, assignments, new_centroids, objective_value)
            )

            converged = self.convergence_criterion.check({
                'iteration': order,
                'previous_centroids': centroids,
                'centroids': new_centroids,
                'assignments': assignments,
                'objective': objective_value
            })
            centroids = new_centroids

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and order % 10 == 0):
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {order:3d}: objective = {objective_value:.6f} "
                      f"{obj_direction} ({iter_time:.3f}s)")

            if converged:
                termination = TerminationReason.CONVERGED
                if self.verbose:
                    print(f"Converged at iteration {order}")
                break

        total_time = time.time() - start_time

        if self.verbose:
            if termination is TerminationReason.MAX_ITERATIONS:
                warnings.warn(f"Failed to converge after {self.max_iter} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

        return AlgorithmResult(
            items=items,
            cluster_seeds=cluster_seeds,
            iterations=tuple(iterations),
            termination=termination
        )

    def fit(self, X: ItemsLike, y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: Input items
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        self.result_ = self.run(X)
        self.fitted_ = True
        return self

    def predict(self, X: ItemsLike) -> Tensor:
        """Assign new data to the final centroids.

        Args:
            X: Input items

        Returns:
            (n,) tensor of cluster ids
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        points = items_to_tensor(validate_items(X), dtype=self.dtype, device=self.device)
        return self.assignment_strategy.compute_assignments(
            points, self.cluster_centers_, self.distance_metric
        )

    def _build_iteration(self, order: int, items: tuple, assignments: Optional[Tensor],
                         centroids: Tensor, objective_value: Optional[float] = None) -> Iteration:
        """Snapshot memberships and centroids; cluster id j is centroid row j."""
        centroid_rows = centroids.detach().cpu().tolist()

        members: List[List[Item]] = [[] for _ in range(len(centroid_rows))]
        if assignments is not None:
            for item, cluster_id in zip(items, assignments.tolist()):
                members[cluster_id].append(item)

        clusters = tuple(
            CentroidCluster(
                id=cluster_id,
                items=frozenset(members[cluster_id]),
                centroid=Point(*centroid_rows[cluster_id])
            )
            for cluster_id in range(len(centroid_rows))
        )
        return Iteration(order=order, clusters=clusters, inertia=objective_value)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get final cluster centroids as a (k, 2) tensor, row j is cluster id j."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        centers = self.result_.cluster_centers
        return torch.tensor(
            [[centers[cid].x, centers[cid].y] for cid in sorted(centers)],
            dtype=self.dtype, device=self.device
        )

    @property
    def inertia_(self) -> float:
        """Get final objective value."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.inertia

    @property
    def n_iter_(self) -> int:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.result_.n_iter

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'dtype': self.dtype,
            'device': self.device
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise InvalidConfiguration(f"Unknown parameter {key!r}")
            setattr(self, key, value)
        return self
