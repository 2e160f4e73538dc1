import numpy as np
import pytest

from workforce_personas.clustering import (
    ClusteringConfigError,
    assign_points,
    find_optimal_clusters,
    initialize_centroids_kmeans_pp,
    lloyd_refine,
    perform_clustering,
    update_centroids,
)
from workforce_personas.data import FEATURE_COLUMNS
from workforce_personas.stats import SeededRandom


def _run(employees, k, seed=42, **kwargs):
    return perform_clustering(employees, n_clusters=k, rng=SeededRandom(seed),
                              verbose=False, **kwargs)


def test_every_employee_in_exactly_one_cluster(synthetic_population):
    result = _run(synthetic_population, 7)
    assert len(result) == 7
    assert sum(c.size for c in result) == len(synthetic_population)

    seen = [id(e) for c in result for e in c.employees]
    assert len(seen) == len(set(seen)) == len(synthetic_population)
    assert set(seen) == {id(e) for e in synthetic_population}


def test_clusters_sorted_largest_first(synthetic_population):
    result = _run(synthetic_population, 7)
    sizes = [c.size for c in result]
    assert sizes == sorted(sizes, reverse=True)
    assert [c.id for c in result] == list(range(7))


def test_labels_match_cluster_membership(synthetic_population):
    result = _run(synthetic_population, 5)
    for cluster in result:
        member_ids = {e.employee_id for e in cluster.employees}
        labelled = {e.employee_id for e, lbl in zip(synthetic_population, result.labels)
                    if lbl == cluster.id}
        assert member_ids == labelled


def test_same_seed_gives_identical_assignments(synthetic_population):
    a = _run(synthetic_population, 6, seed=99)
    b = _run(synthetic_population, 6, seed=99)
    assert np.array_equal(a.labels, b.labels)
    assert [c.persona_name for c in a] == [c.persona_name for c in b]
    for ca, cb in zip(a, b):
        assert np.array_equal(ca.centroid.to_array(), cb.centroid.to_array())


def test_random_seed_argument_is_used(synthetic_population):
    a = perform_clustering(synthetic_population, 4, random_seed=3, verbose=False)
    b = perform_clustering(synthetic_population, 4, random_seed=3, verbose=False)
    assert np.array_equal(a.labels, b.labels)


def test_inertia_is_non_increasing(synthetic_population):
    result = _run(synthetic_population, 7)
    history = np.array(result.inertia_history)
    assert len(history) >= 2
    assert np.all(np.diff(history) <= 1e-9)


def test_single_cluster_converges_without_updates(synthetic_population):
    result = _run(synthetic_population, 1)
    assert len(result) == 1
    assert result[0].size == len(synthetic_population)
    assert result.converged
    assert result.n_iterations == 0
    assert len(result.inertia_history) == 1
    assert np.all(result.labels == 0)


def test_six_employee_fixture_splits_by_life_stage(six_employees):
    for seed in (0, 1, 42):
        result = _run(six_employees, 2, seed=seed)
        groups = sorted(sorted(e.age for e in c.employees) for c in result)
        assert groups == [[24, 26, 30], [52, 55, 58]]
        assert result.converged


def test_centroids_live_in_normalized_space(synthetic_population):
    result = _run(synthetic_population, 5)
    for cluster in result:
        values = cluster.centroid.to_array()
        assert values.shape == (len(FEATURE_COLUMNS),)
        assert np.all(values >= 0.0) and np.all(values <= 1.0)


def test_population_is_not_mutated(six_employees):
    before = list(six_employees)
    _run(six_employees, 2)
    assert six_employees == before


@pytest.mark.parametrize("k", [0, -1, 7])
def test_invalid_cluster_count_raises(six_employees, k):
    with pytest.raises(ClusteringConfigError):
        _run(six_employees, k)


def test_empty_population_raises():
    with pytest.raises(ClusteringConfigError):
        perform_clustering([], n_clusters=1, verbose=False)


def test_invalid_max_iterations_raises(six_employees):
    with pytest.raises(ClusteringConfigError):
        _run(six_employees, 2, max_iterations=0)


def test_config_error_is_value_error():
    assert issubclass(ClusteringConfigError, ValueError)


def test_kmeans_pp_picks_distinct_points():
    points = np.array([[0.0, 0.0], [0.0, 0.1], [1.0, 1.0], [1.0, 0.9]])
    centroids = initialize_centroids_kmeans_pp(points, 2, SeededRandom(4))
    assert centroids.shape == (2, 2)
    # A chosen point has zero weight afterwards, so it cannot repeat
    assert not np.array_equal(centroids[0], centroids[1])
    for c in centroids:
        assert any(np.array_equal(c, p) for p in points)


def test_kmeans_pp_identical_points_fall_back_to_uniform():
    points = np.ones((5, 3))
    centroids = initialize_centroids_kmeans_pp(points, 3, SeededRandom(1))
    assert centroids.shape == (3, 3)
    assert np.all(centroids == 1.0)


def test_assign_points_ties_go_to_first_centroid():
    points = np.array([[0.5], [0.0], [1.0]])
    centroids = np.array([[0.0], [1.0]])
    assert list(assign_points(points, centroids)) == [0, 0, 1]


def test_update_keeps_empty_centroid():
    points = np.array([[0.0], [1.0]])
    centroids = np.array([[0.5], [9.0]])
    labels = np.array([0, 0])
    new = update_centroids(points, labels, centroids)
    assert new[0, 0] == pytest.approx(0.5)
    assert new[1, 0] == pytest.approx(9.0)


def test_update_can_reseed_empty_centroid():
    points = np.array([[0.0], [0.1], [1.0]])
    centroids = np.array([[0.0], [5.0]])
    labels = np.array([0, 0, 0])
    new = update_centroids(points, labels, centroids, reseed_empty=True)
    # Farthest point from the (updated) mean 0.3667 is 1.0
    assert new[1, 0] == pytest.approx(1.0)


def test_lloyd_refine_trace():
    points = np.array([[0.0], [1.0], [2.0], [10.0]])
    init = np.array([[0.0], [1.0]])
    labels, centroids, converged, n_iter, history = lloyd_refine(points, init)
    assert list(labels) == [0, 0, 0, 1]
    assert converged
    assert n_iter == 2
    assert centroids[:, 0] == pytest.approx([1.0, 10.0])
    assert history == pytest.approx([82.0, 1.0 + 4.0 + (10 - 13 / 3) ** 2, 2.0])


def test_iteration_cap_is_reported():
    points = np.array([[0.0], [1.0], [2.0], [10.0]])
    init = np.array([[0.0], [1.0]])
    labels, _, converged, n_iter, _ = lloyd_refine(points, init, max_iterations=1)
    assert not converged
    assert n_iter == 1
    assert list(labels) == [0, 1, 1, 1]


def test_non_convergence_flag_on_result(six_employees, capsys):
    # Seeded centroids are distinct data points, so the first pass labels
    # some point 1 and a single update step cannot confirm convergence
    result = perform_clustering(six_employees, n_clusters=2, max_iterations=1,
                                rng=SeededRandom(42), verbose=True)
    assert result.converged is False
    assert result.n_iterations == 1
    assert "WARNING: no convergence within 1 iterations" in capsys.readouterr().out
    assert sum(c.size for c in result) == len(six_employees)


def test_find_optimal_clusters(small_population):
    k, scores = find_optimal_clusters(small_population, k_range=range(2, 5), verbose=False)
    assert k in (2, 3, 4)
    assert len(scores) == 3
    assert all(-1.0 <= s <= 1.0 for s in scores)
    assert scores[k - 2] == max(scores)


def test_find_optimal_clusters_rejects_bad_range(small_population):
    with pytest.raises(ClusteringConfigError):
        find_optimal_clusters(small_population, k_range=range(5, 5), verbose=False)
    with pytest.raises(ClusteringConfigError):
        find_optimal_clusters(small_population, k_range=range(0, 3), verbose=False)
