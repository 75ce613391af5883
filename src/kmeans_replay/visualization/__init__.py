"""Visualization utilities for replaying clustering runs."""

from .plot_frames import (
    ClusterColors,
    plot_seeds,
    plot_frame
)

__all__ = [
    'ClusterColors',
    'plot_seeds',
    'plot_frame'
]
