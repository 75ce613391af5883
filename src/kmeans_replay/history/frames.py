"""
Display-frame schedule for replaying a clustering run.

Each recorded iteration is shown as two frames. The mapping from a 1-based
frame index to (iteration order, phase) is a pure function:

    frame:  1  2  3  4  5  6 ...
    order:  1  1  2  2  3  3 ...
    phase:  A  U  A  U  A  U ...

Frame 0 is the seed view (order 0) and is not counted in the schedule.
"""

from typing import Tuple
from enum import Enum

from ..base.exceptions import OutOfRange


class FramePhase(Enum):
    """What a frame depicts."""

    # Initial seeds, no memberships yet
    SEED = 'seed'
    # Items coloured by the new membership, centroids still at the previous
    # iteration's position, a link from each item to that centroid
    ASSIGNMENT = 'assignment'
    # Centroids at their new positions, no links
    UPDATE = 'update'


def _check_index(value: int, name: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OutOfRange(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise OutOfRange(f"{name} must be >= {minimum}, got {value}")


def frame_count(n_iterations: int) -> int:
    """Number of display frames for a run with ``n_iterations`` iterations."""
    _check_index(n_iterations, "n_iterations", 0)
    return 2 * n_iterations


def frame_to_iteration_order(frame_index: int) -> int:
    """Iteration order shown by a 1-based frame: ``ceil(frame_index / 2)``."""
    _check_index(frame_index, "frame_index", 1)
    return (frame_index + 1) // 2


def frame_sub_phase(frame_index: int, order: int) -> FramePhase:
    """Phase of a frame: UPDATE when ``frame_index == 2 * order``, else ASSIGNMENT.

    Raises:
        OutOfRange: If ``order`` is not the order that ``frame_index`` shows
    """
    if frame_to_iteration_order(frame_index) != order:
        raise OutOfRange(f"Frame {frame_index} shows iteration {frame_to_iteration_order(frame_index)}, "
                         f"not {order}")
    return FramePhase.UPDATE if frame_index == order * 2 else FramePhase.ASSIGNMENT


def iteration_frames(order: int) -> Tuple[int, int]:
    """The (assignment, update) frame indices of an iteration order."""
    _check_index(order, "order", 1)
    return 2 * order - 1, 2 * order
