"""
Input validation utilities.

Converts the accepted input forms (Items, coordinate pairs, numpy arrays,
tensors) into Items and checks run parameters before any work starts.
"""

from typing import Optional, Union, Sequence, Tuple
import math
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import Item, Point
from ..base.exceptions import InvalidConfiguration


ItemsLike = Union[Sequence[Item], Sequence[Sequence[float]], np.ndarray, Tensor]


def validate_items(X: ItemsLike) -> Tuple[Item, ...]:
    """Validate input data and convert it to Items.

    Raw coordinates get ids 0..n-1 in input order; Items keep their own ids.

    Args:
        X: Items, (x, y) pairs, or an (n, 2) numpy array / tensor

    Returns:
        Tuple of Items in input order

    Raises:
        InvalidConfiguration: If the input is empty, not 2D, not finite,
            or has duplicate item ids
    """
    if isinstance(X, Tensor):
        X = X.detach().cpu().numpy()

    if isinstance(X, np.ndarray):
        if X.ndim != 2 or X.shape[1] != 2:
            raise InvalidConfiguration(f"Expected an (n, 2) array, got shape {X.shape}")
        rows = X.tolist()
    else:
        try:
            rows = list(X)
        except TypeError:
            raise InvalidConfiguration(f"Cannot read items from {type(X).__name__}") from None

    if len(rows) == 0:
        raise InvalidConfiguration("Input contains no items")

    items = []
    seen_ids = set()
    for index, row in enumerate(rows):
        if isinstance(row, Item):
            item = row
        else:
            coords = tuple(row)
            if len(coords) != 2:
                raise InvalidConfiguration(f"Item {index} has {len(coords)} coordinates, expected 2")
            item = Item(id=index, position=Point(float(coords[0]), float(coords[1])))

        if not (math.isfinite(item.x) and math.isfinite(item.y)):
            raise InvalidConfiguration(f"Item {item.id} has non-finite coordinates {item.position}")
        if item.id in seen_ids:
            raise InvalidConfiguration(f"Duplicate item id {item.id}")

        seen_ids.add(item.id)
        items.append(item)

    return tuple(items)


def items_to_tensor(items: Sequence[Item],
                    dtype: torch.dtype = torch.float64,
                    device: Optional[torch.device] = None) -> Tensor:
    """Stack item positions into an (n, 2) tensor, rows in item order."""
    return torch.tensor([[item.x, item.y] for item in items], dtype=dtype, device=device)


def check_n_clusters(n_clusters: int, n_samples: int) -> None:
    """Validate number of clusters.

    Args:
        n_clusters: Number of clusters
        n_samples: Number of items

    Raises:
        InvalidConfiguration: If invalid
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InvalidConfiguration(f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters <= 0:
        raise InvalidConfiguration(f"n_clusters must be positive, got {n_clusters}")

    if n_clusters > n_samples:
        raise InvalidConfiguration(f"n_clusters ({n_clusters}) cannot be larger than "
                                   f"the number of items ({n_samples})")


def check_iteration_params(max_iter: int, tol: float) -> None:
    """Validate the iteration cap and convergence tolerance.

    Raises:
        InvalidConfiguration: If max_iter < 1 or tol is negative / not finite
    """
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
        raise InvalidConfiguration(f"max_iter must be int, got {type(max_iter).__name__}")
    if max_iter < 1:
        raise InvalidConfiguration(f"max_iter must be at least 1, got {max_iter}")

    if not isinstance(tol, (int, float)) or not math.isfinite(tol) or tol < 0:
        raise InvalidConfiguration(f"tol must be a non-negative finite number, got {tol}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None (global torch RNG)
    """
    if random_state is None:
        return None
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise InvalidConfiguration(f"random_state must be int or Generator, got {type(random_state).__name__}")


def distinct_locations(points: Tensor) -> Tensor:
    """Unique rows of an (n, 2) tensor, sorted lexicographically."""
    return torch.unique(points, dim=0)


def count_distinct_locations(points: Tensor) -> int:
    """Number of distinct positions among the rows of an (n, 2) tensor."""
    return distinct_locations(points).shape[0]
