"""Replay schedule and centroid path history for finished runs."""

from .frames import (
    FramePhase,
    frame_count,
    frame_to_iteration_order,
    frame_sub_phase,
    iteration_frames
)

from .animation import (
    AnimationHistory,
    Frame,
    ClusterFrame
)

__all__ = [
    # Frame schedule
    'FramePhase',
    'frame_count',
    'frame_to_iteration_order',
    'frame_sub_phase',
    'iteration_frames',

    # Deriver
    'AnimationHistory',
    'Frame',
    'ClusterFrame'
]
