"""
Clustering quality metrics.
"""

import torch
from torch import Tensor


def inertia(X: Tensor, labels: Tensor, centers: Tensor) -> float:
    """Compute sum of squared distances to assigned centers (inertia).

    Args:
        X: (n, d) data points
        labels: (n,) cluster labels
        centers: (k, d) cluster centers

    Returns:
        Total inertia (lower is better)
    """
    diff = X - centers[labels]
    return torch.sum(diff * diff).item()
