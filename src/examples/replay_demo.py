"""
Demo of K-means replay.

This example shows how to:
1. Generate synthetic 2D blobs
2. Run K-means while recording every iteration
3. Walk the frame schedule and draw it as a grid of frames
"""

import math

import torch
import matplotlib.pyplot as plt

from kmeans_replay import run, AnimationHistory, FramePhase
from kmeans_replay.visualization import ClusterColors, plot_seeds, plot_frame


def generate_blobs(n_points_per_cluster=60, n_clusters=4, spread=0.8, seed=42):
    """Gaussian blobs around centers placed on a circle."""
    generator = torch.Generator().manual_seed(seed)

    angles = torch.arange(n_clusters, dtype=torch.float64) * (2 * math.pi / n_clusters)
    centers = torch.stack([torch.cos(angles), torch.sin(angles)], dim=1) * 5.0

    data_list = []
    for k in range(n_clusters):
        noise = torch.randn(n_points_per_cluster, 2, generator=generator, dtype=torch.float64)
        data_list.append(centers[k] + noise * spread)

    return torch.cat(data_list, dim=0)


def main():
    X = generate_blobs()

    result = run(X, n_clusters=4, seeding='random', random_state=7, max_iter=20, verbose=1)
    history = AnimationHistory(result)

    print(f"Termination: {result.termination.value} after {result.n_iter} iterations")
    print(f"Display frames: {history.frame_count()}")

    for frame in history:
        moved = sum(
            cluster.centroid_prev.distance_to(cluster.centroid_curr)
            for cluster in frame.clusters
        )
        marker = "links" if frame.phase is FramePhase.ASSIGNMENT else "moved"
        print(f"frame {frame.frame_index:2d}: iteration {frame.order} {frame.phase.value:10s} "
              f"{marker} total centroid shift {moved:.3f}")

    # Seed view plus every frame
    n_panels = history.frame_count() + 1
    n_cols = 4
    n_rows = (n_panels + n_cols - 1) // n_cols
    fig, axes = plt.subplots(n_rows, n_cols, figsize=(4 * n_cols, 4 * n_rows), squeeze=False)
    axes = axes.flatten()

    colors = ClusterColors.for_history(history)
    plot_seeds(history, ax=axes[0], colors=colors)
    for frame_index in range(1, history.frame_count() + 1):
        plot_frame(history, frame_index, ax=axes[frame_index], colors=colors)
    for ax in axes[n_panels:]:
        ax.axis('off')

    plt.tight_layout()
    plt.savefig('kmeans_replay_frames.png', dpi=100)
    print("Saved kmeans_replay_frames.png")


if __name__ == "__main__":
    main()
