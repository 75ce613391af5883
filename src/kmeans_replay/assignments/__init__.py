"""Point-to-cluster assignment strategies."""

from .hard import HardAssignment

__all__ = [
    'HardAssignment'
]
