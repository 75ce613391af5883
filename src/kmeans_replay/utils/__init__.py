"""Utility functions for K-means replay."""

from .convergence import (
    CentroidShift,
    UnchangedAssignments
)

from .metrics import inertia

from .validation import (
    validate_items,
    items_to_tensor,
    check_n_clusters,
    check_iteration_params,
    check_random_state,
    distinct_locations,
    count_distinct_locations
)

__all__ = [
    # Convergence criteria
    'CentroidShift',
    'UnchangedAssignments',

    # Metrics
    'inertia',

    # Validation
    'validate_items',
    'items_to_tensor',
    'check_n_clusters',
    'check_iteration_params',
    'check_random_state',
    'distinct_locations',
    'count_distinct_locations'
]
