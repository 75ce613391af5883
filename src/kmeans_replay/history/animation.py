"""
Animation history derived from a finished clustering run.

AnimationHistory turns the static iteration list of an AlgorithmResult into
what a frame-based renderer needs: the frame schedule, the per-frame view of
every cluster and the path each centroid has followed so far. It only reads
the result, so one instance can be queried from several threads.
"""

from typing import Dict, Tuple, FrozenSet, Iterator, Optional
from dataclasses import dataclass
import functools

from ..base.data_structures import (
    Item, Point, CentroidCluster, Iteration, AlgorithmResult
)
from ..base.exceptions import OutOfRange
from .frames import (
    FramePhase, frame_count, frame_to_iteration_order, frame_sub_phase
)


Link = Tuple[Point, Point]


@dataclass(frozen=True)
class ClusterFrame:
    """One cluster as drawn in one frame.

    Attributes:
        cluster_id: Stable cluster identifier
        members: Items assigned at the frame's iteration
        centroid_prev: Centroid at the previous iteration
        centroid_curr: Centroid at the frame's iteration
        centroid: The centroid to draw for this phase
        links: (item position, centroid) segments, assignment frames only
        path: Centroid trajectory to draw with this frame
    """
    cluster_id: int
    members: FrozenSet[Item]
    centroid_prev: Point
    centroid_curr: Point
    centroid: Point
    links: Tuple[Link, ...]
    path: Tuple[Point, ...]


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs to draw one display frame."""
    frame_index: int
    order: int
    phase: FramePhase
    clusters: Tuple[ClusterFrame, ...]
    items: Tuple[Item, ...]

    def cluster(self, cluster_id: int) -> ClusterFrame:
        for cluster in self.clusters:
            if cluster.cluster_id == cluster_id:
                return cluster
        raise KeyError(cluster_id)

    @property
    def cluster_ids(self) -> Tuple[int, ...]:
        return tuple(cluster.cluster_id for cluster in self.clusters)


class AnimationHistory:
    """Frame schedule and centroid paths for a finished run.

    Example:
        >>> result = run(points, n_clusters=3, random_state=0)
        >>> history = AnimationHistory(result)
        >>> for frame in history:
        ...     draw(frame)
    """

    def __init__(self, result: AlgorithmResult):
        """
        Args:
            result: Finished run; it is never modified
        """
        self._result = result
        # Memoized per instance
        self._path_history = functools.lru_cache(maxsize=None)(self._compute_paths)

    @property
    def result(self) -> AlgorithmResult:
        return self._result

    def __len__(self) -> int:
        return self.frame_count()

    def __iter__(self) -> Iterator[Frame]:
        for frame_index in range(1, self.frame_count() + 1):
            yield self.render_frame(frame_index)

    def frame_count(self) -> int:
        """Two frames per recorded iteration; the seed state is not counted."""
        return frame_count(self._result.n_iter)

    def _check_frame(self, frame_index: int) -> None:
        total = self.frame_count()
        if isinstance(frame_index, bool) or not isinstance(frame_index, int):
            raise OutOfRange(f"Frame index must be an int, got {type(frame_index).__name__}")
        if frame_index < 1 or frame_index > total:
            raise OutOfRange(f"Frame {frame_index} is outside 1..{total}")

    def frame_to_iteration_order(self, frame_index: int) -> int:
        """Iteration order visualized by a 1-based frame index."""
        self._check_frame(frame_index)
        return frame_to_iteration_order(frame_index)

    def frame_sub_phase(self, frame_index: int, order: Optional[int] = None) -> FramePhase:
        """Assignment or update phase of a frame."""
        self._check_frame(frame_index)
        if order is None:
            order = frame_to_iteration_order(frame_index)
        return frame_sub_phase(frame_index, order)

    def iteration(self, order: int) -> Iteration:
        return self._result.iteration(order)

    def path_history(self, order: int) -> Dict[int, Tuple[Point, ...]]:
        """Centroid trajectory of every cluster present at ``order``.

        Each path holds one position per iteration <= ``order`` in which the
        cluster id appears, in increasing iteration order, seed included.

        Raises:
            OutOfRange: If no iteration with that order was recorded
        """
        if isinstance(order, bool) or not isinstance(order, int):
            raise OutOfRange(f"Iteration order must be an int, got {type(order).__name__}")
        return dict(self._path_history(order))

    def _compute_paths(self, order: int) -> Tuple[Tuple[int, Tuple[Point, ...]], ...]:
        target = self.iteration(order)
        history = self._result.all_iterations[:order + 1]

        paths = []
        for cluster in target.clusters:
            if not isinstance(cluster, CentroidCluster):
                continue
            path = tuple(
                iteration.cluster(cluster.id).centroid
                for iteration in history
                if cluster.id in iteration
            )
            paths.append((cluster.id, path))
        return tuple(paths)

    def render_frame(self, frame_index: int) -> Frame:
        """Build the view of one display frame.

        Assignment frames (odd) keep centroids at the previous iteration's
        position and link every item to it; the path stops at the previous
        iteration. Update frames (even) move centroids to their new position,
        draw no links and extend the path to the current iteration.

        Raises:
            OutOfRange: If frame_index is outside 1..frame_count()
        """
        order = self.frame_to_iteration_order(frame_index)
        phase = frame_sub_phase(frame_index, order)

        previous = self.iteration(order - 1)
        current = self.iteration(order)

        assigning = phase is FramePhase.ASSIGNMENT
        paths = self._path_history(order - 1 if assigning else order)
        paths_by_id = dict(paths)

        clusters = []
        for cluster in current.clusters:
            prev_cluster = previous.get(cluster.id)
            centroid_curr = cluster.centroid
            centroid_prev = prev_cluster.centroid if prev_cluster is not None else centroid_curr
            shown = centroid_prev if assigning else centroid_curr

            if assigning:
                links = tuple(
                    (item.position, shown)
                    for item in sorted(cluster.items, key=lambda item: item.id)
                )
            else:
                links = ()

            clusters.append(ClusterFrame(
                cluster_id=cluster.id,
                members=cluster.items,
                centroid_prev=centroid_prev,
                centroid_curr=centroid_curr,
                centroid=shown,
                links=links,
                path=paths_by_id.get(cluster.id, ())
            ))

        return Frame(
            frame_index=frame_index,
            order=order,
            phase=phase,
            clusters=tuple(clusters),
            items=self._result.items
        )

    def seed_frame(self) -> Frame:
        """Frame 0: every item unassigned, centroids at their seeds."""
        seeds = self._result.cluster_seeds
        clusters = tuple(
            ClusterFrame(
                cluster_id=cluster.id,
                members=cluster.items,
                centroid_prev=cluster.centroid,
                centroid_curr=cluster.centroid,
                centroid=cluster.centroid,
                links=(),
                path=(cluster.centroid,)
            )
            for cluster in seeds.clusters
            if isinstance(cluster, CentroidCluster)
        )
        return Frame(
            frame_index=0,
            order=0,
            phase=FramePhase.SEED,
            clusters=clusters,
            items=self._result.items
        )
