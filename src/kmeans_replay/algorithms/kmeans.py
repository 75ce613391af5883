"""
K-means clustering algorithm.

Lloyd's algorithm implemented using the modular framework, recording every
assignment+update step so the run can be replayed frame by frame.
"""

from typing import Optional, Union, Sequence, Callable
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusteringObjective, DistanceMetric, SeedingStrategy
from ..base.data_structures import AlgorithmResult
from ..base.exceptions import InvalidConfiguration
from ..assignments.hard import HardAssignment
from ..distances.euclidean import EuclideanDistance, CallableDistance
from ..initialization.random import RandomSeeding
from ..initialization.kmeans_plusplus import KMeansPlusPlusSeeding
from ..initialization.fixed import FixedSeeding
from ..updates.mean import MeanUpdater
from ..utils.convergence import CentroidShift, UnchangedAssignments
from ..utils.metrics import inertia
from ..utils.validation import ItemsLike


InitLike = Union[str, SeedingStrategy, Tensor, Sequence]
DistanceLike = Union[DistanceMetric, Callable[[Tensor, Tensor], Tensor], None]


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of squared distances to centroids."""

    def compute(self, points: Tensor, centroids: Tensor,
                assignments: Tensor) -> float:
        """Compute within-cluster sum of squares."""
        return inertia(points, assignments, centroids)

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Classic K-means that partitions 2D items into K clusters by minimizing
    within-cluster sum of squared distances. Each run keeps the complete
    iteration history in ``result_``.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str, SeedingStrategy or array-like, default='random'
        Seeding method (None is the same as 'random'):
        - 'random' : k distinct item locations chosen uniformly
        - 'k-means++' : K-means++ seeding
        - SeedingStrategy instance : used as is
        - array of shape (n_clusters, 2) : use as initial centroids
    distance : DistanceMetric or callable, optional
        Metric for the assignment step. A callable receives (points,
        centroids) tensors and returns an (n, k) matrix. Defaults to
        squared Euclidean distance.
    max_iter : int, default=100
        Maximum number of iterations
    tol : float, default=1e-4
        Convergence tolerance on the largest centroid movement
    verbose : int, default=0
        Verbosity level
    random_state : int or torch.Generator, optional
        Random source for reproducible seeding
    dtype : torch.dtype, default=torch.float64
        Floating point type for positions
    device : torch.device, optional
        Device for computation (CPU when None)

    Attributes
    ----------
    result_ : AlgorithmResult
        Seed iteration plus every recorded iteration
    cluster_centers_ : Tensor of shape (n_clusters, 2)
        Final centroids, row j is cluster id j
    labels_ : Tensor of shape (n_samples,)
        Final cluster id per item
    inertia_ : float
        Sum of squared distances to assigned centroids
    n_iter_ : int
        Number of recorded iterations
    """

    def __init__(self,
                 n_clusters: int,
                 init: InitLike = 'random',
                 distance: DistanceLike = None,
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 dtype: torch.dtype = torch.float64,
                 device: Optional[torch.device] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            verbose=verbose,
            random_state=random_state,
            dtype=dtype,
            device=device
        )
        self.init = init
        self.distance = distance

        # Store labels for sklearn compatibility
        self.labels_ = None

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment()
        self.update_strategy = MeanUpdater()
        self.convergence_criterion = CentroidShift(tol=self.tol)
        self.fixed_point_criterion = UnchangedAssignments()
        self.objective = KMeansObjective()

        # Distance
        if self.distance is None:
            self.distance_metric = EuclideanDistance()
        elif isinstance(self.distance, DistanceMetric):
            self.distance_metric = self.distance
        elif callable(self.distance):
            self.distance_metric = CallableDistance(self.distance)
        else:
            raise InvalidConfiguration(f"Unknown distance: {self.distance!r}")

        # Seeding
        if self.init is None or isinstance(self.init, str):
            if self.init is None or self.init == 'random':
                self.seeding_strategy = RandomSeeding()
            elif self.init == 'k-means++':
                self.seeding_strategy = KMeansPlusPlusSeeding()
            else:
                raise InvalidConfiguration(f"Unknown init method: {self.init}")
        elif isinstance(self.init, SeedingStrategy):
            self.seeding_strategy = self.init
        else:
            # Custom initial centroids provided
            self.seeding_strategy = FixedSeeding(self.init)

    def fit(self, X: ItemsLike, y: Optional[Tensor] = None) -> 'KMeans':
        """Fit K-means clustering.

        Parameters
        ----------
        X : items, (x, y) pairs or array of shape (n_samples, 2)
            Training data
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeans
            Fitted estimator
        """
        super().fit(X, y)
        self.labels_ = torch.tensor(self.result_.labels, dtype=torch.long, device=self.device)
        return self

    def fit_predict(self, X: ItemsLike, y: Optional[Tensor] = None) -> Tensor:
        """Fit and return labels."""
        self.fit(X, y)
        return self.labels_

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params['init'] = self.init
        params['distance'] = self.distance
        return params


def run(items: ItemsLike,
        n_clusters: int,
        seeding: Optional[InitLike] = None,
        distance: DistanceLike = None,
        tol: float = 1e-4,
        max_iter: int = 100,
        random_state: Optional[Union[int, torch.Generator]] = None,
        verbose: int = 0) -> AlgorithmResult:
    """Run K-means once and return its full iteration history.

    Args:
        items: Items, (x, y) pairs, or an (n, 2) array / tensor
        n_clusters: Number of clusters, 1 <= k <= number of items
        seeding: 'random' (or None), 'k-means++', a SeedingStrategy, or explicit seeds
        distance: DistanceMetric or callable (points, centroids) -> (n, k)
        tol: Stop once no centroid moves farther than this
        max_iter: Iteration cap
        random_state: Seed or generator for the seeding strategy
        verbose: Verbosity level

    Returns:
        AlgorithmResult

    Raises:
        InvalidConfiguration: Bad k, empty input or bad parameters
        DegenerateInput: Fewer than k distinct item locations
    """
    model = KMeans(
        n_clusters=n_clusters,
        init=seeding,
        distance=distance,
        max_iter=max_iter,
        tol=tol,
        verbose=verbose,
        random_state=random_state
    )
    return model.run(items)
