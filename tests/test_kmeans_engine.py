"""
U6 — K-means engine

Covers:
- The four-point scenario converging in one recorded iteration
- Partition, id stability and mean-centroid invariants on every iteration
- Termination on tolerance, on fixed point and on the iteration cap
- InvalidConfiguration / DegenerateInput raised before any work
- Estimator API (fit / predict / params) and verbose diagnostics
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from kmeans_replay import (
    KMeans, run, Point, Item, TerminationReason,
    InvalidConfiguration, DegenerateInput, FixedSeeding
)
from kmeans_replay.distances import EuclideanDistance

from utils import assert_partition, assert_ids_stable, points_close
from data_gen import make_blobs_2d, make_grid_2d


def test_square_scenario_converges_in_one_iteration(square_points):
    result = run(square_points, n_clusters=2, seeding=[(0.0, 0.0), (10.0, 0.0)])

    assert result.termination is TerminationReason.CONVERGED
    assert result.n_iter == 1

    seeds = result.cluster_seeds
    assert seeds.order == 0
    assert seeds.centroids() == {0: Point(0.0, 0.0), 1: Point(10.0, 0.0)}
    assert all(cluster.size == 0 for cluster in seeds.clusters)

    first = result.iteration(1)
    assert first.cluster(0).item_ids == frozenset({0, 1})
    assert first.cluster(0).centroid == Point(0.0, 1.0)
    assert first.cluster(1).item_ids == frozenset({2, 3})
    assert first.cluster(1).centroid == Point(10.0, 1.0)
    assert first.inertia == pytest.approx(4.0)
    assert result.labels == (0, 0, 1, 1)


def test_ties_break_to_lowest_cluster_id():
    result = run([(0.0, 0.0), (5.0, 0.0), (10.0, 0.0)], n_clusters=2,
                 seeding=[(0.0, 0.0), (10.0, 0.0)])
    assert result.iteration(1).cluster(0).item_ids == frozenset({0, 1})
    assert result.labels == (0, 0, 1)


def test_empty_cluster_keeps_previous_centroid():
    result = run([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)], n_clusters=2,
                 seeding=[(0.0, 0.0), (100.0, 100.0)])

    for iteration in result.iterations:
        empty = iteration.cluster(1)
        assert empty.size == 0
        assert empty.centroid == Point(100.0, 100.0)
        assert_partition(iteration, result.items)
    assert result.cluster_centers[0] == Point(1.0, 0.0)


def test_k_equal_item_count_gives_singletons(torch_generator):
    X = make_grid_2d(n_side=3)
    result = run(X, n_clusters=9, random_state=torch_generator)

    assert result.converged
    assert result.n_iter == 1
    for cluster in result.iteration(1).clusters:
        assert cluster.size == 1
        (member,) = cluster.items
        assert cluster.centroid == member.position
        assert cluster.centroid == result.cluster_seeds.cluster(cluster.id).centroid


def test_k_equal_one_takes_mean(rng):
    X = rng.normal(size=(30, 2))
    result = run(X, n_clusters=1, random_state=0)
    assert result.n_iter == 1
    center = result.cluster_centers[0]
    assert points_close(center, X.mean(axis=0), atol=1e-9)


@pytest.mark.parametrize("seed", range(6))
def test_invariants_hold_on_every_iteration(seed):
    X, _ = make_blobs_2d(n_per=25, spread=2.0, seed=seed)
    result = run(X, n_clusters=5, random_state=seed, max_iter=50)

    assert 1 <= result.n_iter <= 50
    if result.termination is TerminationReason.MAX_ITERATIONS:
        assert result.n_iter == 50
    assert_ids_stable(result)

    previous = result.cluster_seeds
    for iteration in result.iterations:
        assert_partition(iteration, result.items)
        for cluster in iteration.clusters:
            if cluster.size:
                mean = np.mean([[item.x, item.y] for item in cluster.items], axis=0)
                assert points_close(cluster.centroid, mean, atol=1e-9)
            else:
                assert cluster.centroid == previous.cluster(cluster.id).centroid
        previous = iteration


def test_iterations_are_ordered_and_inertia_never_increases():
    X, _ = make_blobs_2d(n_per=40, spread=1.5, seed=4)
    result = run(X, n_clusters=4, random_state=1)

    assert [it.order for it in result.iterations] == list(range(1, result.n_iter + 1))
    values = [it.inertia for it in result.iterations]
    assert all(b <= a + 1e-9 for a, b in zip(values, values[1:]))


def test_cap_is_terminal_not_an_error(square_points):
    result = run(square_points, n_clusters=2, seeding=[(0.0, 0.0), (10.0, 0.0)], max_iter=1)
    assert result.termination is TerminationReason.MAX_ITERATIONS
    assert not result.converged
    assert result.n_iter == 1


def test_fixed_point_ends_run_without_duplicate_iteration(square_points):
    result = run(square_points, n_clusters=2, seeding=[(0.0, 0.0), (10.0, 0.0)], tol=0.0)

    # Centroids moved by 1.0 > tol, but the next assignment repeats the last one
    assert result.termination is TerminationReason.CONVERGED
    assert result.n_iter == 1
    shift = max(result.iteration(1).cluster(cid).centroid.distance_to(
        result.cluster_seeds.cluster(cid).centroid) for cid in result.cluster_ids)
    assert shift == pytest.approx(1.0)


def test_consecutive_iterations_never_repeat_memberships():
    X, _ = make_blobs_2d(n_per=25, spread=2.5, seed=11)
    result = run(X, n_clusters=5, random_state=4, tol=0.0)
    assert result.converged
    for before, after in zip(result.iterations, result.iterations[1:]):
        assert before.assignments() != after.assignments()


def test_large_tolerance_stops_after_first_iteration():
    X, _ = make_blobs_2d(n_per=30, spread=3.0, seed=2)
    result = run(X, n_clusters=4, random_state=3, tol=1e9)
    assert result.converged
    assert result.n_iter == 1


def test_same_random_state_same_result():
    X, _ = make_blobs_2d(n_per=30, spread=2.0, seed=8)
    r1 = run(X, n_clusters=4, random_state=21)
    r2 = run(X, n_clusters=4, random_state=torch.Generator().manual_seed(21))
    assert r1 == r2


def test_items_keep_their_ids():
    items = [Item(10, Point(0.0, 0.0)), Item(20, Point(0.0, 2.0)),
             Item(30, Point(10.0, 0.0)), Item(40, Point(10.0, 2.0))]
    result = run(items, n_clusters=2, seeding=FixedSeeding([(0.0, 0.0), (10.0, 0.0)]))
    assert result.items == tuple(items)
    assert result.iteration(1).assignments() == {10: 0, 20: 0, 30: 1, 40: 1}


def test_custom_distance_callable(square_points):
    manhattan = lambda p, c: torch.cdist(p, c, p=1)
    result = run(square_points, n_clusters=2, seeding=[(0.0, 0.0), (10.0, 0.0)], distance=manhattan)
    assert result.labels == (0, 0, 1, 1)


@pytest.mark.parametrize("k", [0, -1, 5, 2.5])
def test_bad_k_is_invalid_configuration(square_points, k):
    with pytest.raises(InvalidConfiguration):
        run(square_points, n_clusters=k)


@pytest.mark.parametrize("kwargs", [
    {"max_iter": 0},
    {"tol": -1.0},
    {"seeding": "bogus"},
    {"seeding": [(0.0, 0.0)]},
    {"distance": 3},
    {"seeding": 5},
    {"seeding": ["ab", "cd"]},
    {"seeding": torch.tensor([0.0, 10.0])},
])
def test_bad_parameters_are_invalid_configuration(square_points, kwargs):
    with pytest.raises(InvalidConfiguration):
        run(square_points, n_clusters=2, **kwargs)


def test_empty_input_is_invalid_configuration():
    with pytest.raises(InvalidConfiguration):
        run([], n_clusters=1)


@pytest.mark.parametrize("seeding", ["random", "k-means++"])
def test_too_few_distinct_locations_is_degenerate(seeding):
    with pytest.raises(DegenerateInput):
        run([(1.0, 1.0)] * 4, n_clusters=2, seeding=seeding)


def test_duplicate_locations_allowed_when_enough_distinct(torch_generator):
    result = run([(0.0, 0.0), (0.0, 0.0), (5.0, 5.0), (5.0, 5.0)], n_clusters=2,
                 random_state=torch_generator)
    assert result.n_iter == 1
    sizes = sorted(cluster.size for cluster in result.final_iteration.clusters)
    assert sizes == [2, 2]


def test_seeding_none_means_random(square_points):
    by_default = run(square_points, n_clusters=2, random_state=0)
    explicit_none = run(square_points, n_clusters=2, seeding=None, random_state=0)
    explicit_random = run(square_points, n_clusters=2, seeding='random', random_state=0)
    assert by_default == explicit_none == explicit_random

    km = KMeans(n_clusters=2, init=None, random_state=0).fit(square_points)
    assert km.result_ == explicit_random


def test_estimator_fit_and_predict(square_points):
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (10.0, 0.0)])
    with pytest.raises(RuntimeError):
        km.predict(square_points)

    km.fit(square_points)
    assert km.fitted_
    assert km.labels_.tolist() == [0, 0, 1, 1]
    assert km.cluster_centers_.tolist() == [[0.0, 1.0], [10.0, 1.0]]
    assert km.inertia_ == pytest.approx(4.0)
    assert km.n_iter_ == 1
    assert km.predict([(1.0, 1.0), (9.0, 9.0)]).tolist() == [0, 1]
    assert km.fit_predict(square_points).tolist() == [0, 0, 1, 1]


def test_estimator_params():
    km = KMeans(n_clusters=3, init='k-means++', distance=EuclideanDistance())
    params = km.get_params()
    assert params["n_clusters"] == 3
    assert params["init"] == 'k-means++'
    assert params["tol"] == 1e-4 and params["max_iter"] == 100

    km.set_params(max_iter=5, tol=0.1)
    assert km.max_iter == 5 and km.tol == 0.1
    with pytest.raises(InvalidConfiguration):
        km.set_params(bogus=1)


def test_each_run_is_independent(square_points):
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (10.0, 0.0)])
    r1 = km.run(square_points)
    r2 = km.run(square_points)
    assert r1 == r2
    assert r1 is not r2


def test_verbose_warns_when_cap_reached(square_points, capsys):
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (10.0, 0.0)], max_iter=1, verbose=1)
    with pytest.warns(UserWarning, match="Failed to converge"):
        km.run(square_points)
    assert "Total fitting time" in capsys.readouterr().out


def test_verbose_warns_on_empty_cluster(capsys):
    km = KMeans(n_clusters=2, init=[(0.0, 0.0), (100.0, 100.0)], verbose=2)
    with pytest.warns(UserWarning, match="no members"):
        km.run([(0.0, 0.0), (1.0, 0.0)])
    assert "Iteration   1" in capsys.readouterr().out
