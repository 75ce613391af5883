"""
Reference renderer for replay frames.

Draws seed and iteration frames of an AnimationHistory with matplotlib:
items coloured by cluster, centroids as large markers, item-to-centroid links
on assignment frames and the path each centroid has followed.
"""

from typing import Optional, Iterable, Dict, Tuple
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap
import numpy as np

from ..history.animation import AnimationHistory, Frame
from ..history.frames import FramePhase


RGBA = Tuple[float, float, float, float]


class ClusterColors:
    """Stable colour per cluster id for the duration of one run.

    Colours are renderer state, keyed by cluster id; the model itself carries
    no presentation data.
    """

    def __init__(self, cluster_ids: Iterable[int], cmap: str = 'tab10'):
        """
        Args:
            cluster_ids: Every cluster id of the run
            cmap: Name of a matplotlib colormap
        """
        ids = sorted(set(cluster_ids))
        colormap = matplotlib.colormaps[cmap]
        n_clusters = len(ids)

        # A qualitative palette would repeat colours past its size
        if isinstance(colormap, ListedColormap) and n_clusters > colormap.N:
            colormap = matplotlib.colormaps['turbo']

        if isinstance(colormap, ListedColormap):
            colors = [colormap(i) for i in range(n_clusters)]
        else:
            colors = [colormap(i / max(n_clusters - 1, 1)) for i in range(n_clusters)]

        self._colors: Dict[int, RGBA] = dict(zip(ids, colors))

    @classmethod
    def for_history(cls, history: AnimationHistory, cmap: str = 'tab10') -> 'ClusterColors':
        return cls(history.result.cluster_ids, cmap=cmap)

    def __getitem__(self, cluster_id: int) -> RGBA:
        return self._colors[cluster_id]

    def __contains__(self, cluster_id: int) -> bool:
        return cluster_id in self._colors

    def __len__(self) -> int:
        return len(self._colors)


def _positions(points) -> np.ndarray:
    return np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)


def plot_seeds(history: AnimationHistory,
               ax: Optional[plt.Axes] = None,
               colors: Optional[ClusterColors] = None,
               point_size: int = 30,
               center_size: int = 200,
               title: Optional[str] = None) -> plt.Axes:
    """Plot frame 0: all items unassigned and the initial seeds.

    Args:
        history: Replay of a finished run
        ax: Matplotlib axes (created if None)
        colors: Cluster colours (created from the history if None)
        point_size: Size of item markers
        center_size: Size of centroid markers
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    if colors is None:
        colors = ClusterColors.for_history(history)

    frame = history.seed_frame()

    X = _positions(item.position for item in frame.items)
    ax.scatter(X[:, 0], X[:, 1], c='lightgray', s=point_size,
               edgecolors='black', linewidth=0.5)

    for cluster in frame.clusters:
        ax.scatter([cluster.centroid.x], [cluster.centroid.y],
                   c=[colors[cluster.cluster_id]], marker='X', s=center_size,
                   edgecolors='black', linewidth=1.5, zorder=10)

    ax.set_title(title if title is not None else "Seeds")
    ax.set_aspect('equal', adjustable='datalim')
    return ax


def plot_frame(history: AnimationHistory,
               frame_index: int,
               ax: Optional[plt.Axes] = None,
               colors: Optional[ClusterColors] = None,
               show_links: bool = True,
               show_paths: bool = True,
               point_size: int = 30,
               center_size: int = 200,
               title: Optional[str] = None) -> plt.Axes:
    """Plot one display frame.

    Args:
        history: Replay of a finished run
        frame_index: 1-based frame index
        ax: Matplotlib axes (created if None)
        colors: Cluster colours (created from the history if None)
        show_links: Draw item-to-centroid links on assignment frames
        show_paths: Draw centroid paths
        point_size: Size of item markers
        center_size: Size of centroid markers
        title: Plot title (defaults to order and phase)

    Returns:
        Matplotlib axes

    Raises:
        OutOfRange: If frame_index is outside 1..frame_count()
    """
    frame: Frame = history.render_frame(frame_index)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))
    if colors is None:
        colors = ClusterColors.for_history(history)

    for cluster in frame.clusters:
        color = colors[cluster.cluster_id]

        if cluster.members:
            X = _positions(item.position for item in cluster.members)
            ax.scatter(X[:, 0], X[:, 1], c=[color], s=point_size,
                       alpha=0.8, edgecolors='black', linewidth=0.5)

        ax.scatter([cluster.centroid.x], [cluster.centroid.y],
                   c=[color], marker='X', s=center_size,
                   edgecolors='black', linewidth=1.5, zorder=10)

        if show_links and frame.phase is FramePhase.ASSIGNMENT:
            for start, end in cluster.links:
                ax.plot([start.x, end.x], [start.y, end.y],
                        color='gray', linewidth=0.5, alpha=0.6, zorder=1)

        if show_paths and len(cluster.path) >= 2:
            P = _positions(cluster.path)
            ax.plot(P[:, 0], P[:, 1], color=color, linewidth=2.0,
                    marker='.', zorder=5)

    if title is None:
        title = f"Iteration {frame.order} ({frame.phase.value})"
    ax.set_title(title)
    ax.set_aspect('equal', adjustable='datalim')
    return ax
