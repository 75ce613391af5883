# tests/utils.py
"""
Small, reusable helpers used across the K-means replay test suite.

Functions:
- points_close(p, q, atol): coordinate-wise closeness of two Points / pairs.
- assert_partition(iteration, items): every item in exactly one cluster.
- assert_ids_stable(result): same cluster ids in every iteration.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from typing import Any, Dict, Sequence


def points_close(p: Sequence[float], q: Sequence[float], atol: float = 1e-9) -> bool:
    """True when both coordinates differ by at most atol."""
    return abs(p[0] - q[0]) <= atol and abs(p[1] - q[1]) <= atol


def assert_partition(iteration, items) -> None:
    """
    Every item appears in exactly one cluster of the iteration.
    """
    seen = set()
    for cluster in iteration.clusters:
        ids = cluster.item_ids
        overlap = seen & ids
        assert not overlap, f"Items {sorted(overlap)} in more than one cluster at order {iteration.order}"
        seen |= ids
    expected = {item.id for item in items}
    assert seen == expected, f"Unassigned items {sorted(expected - seen)} at order {iteration.order}"


def assert_ids_stable(result) -> None:
    """Every iteration carries exactly the seed cluster ids."""
    seed_ids = result.cluster_seeds.cluster_ids
    for iteration in result.iterations:
        assert iteration.cluster_ids == seed_ids, (
            f"Cluster ids changed at order {iteration.order}: {iteration.cluster_ids} != {seed_ids}"
        )


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] run {"n":400,"K":4} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        meta_str = " " + json.dumps(meta, separators=(",", ":"))
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
