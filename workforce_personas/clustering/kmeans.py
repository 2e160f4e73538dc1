"""
K-means clustering for employee personas.

This module segments an employee population into k clusters using
k-means++ seeding followed by Lloyd refinement on min-max normalized
feature vectors. All randomness comes from an injected SeededRandom,
so a fixed seed reproduces the same assignments.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from ..data.employees import Employee
from ..data.preprocessing import FeatureVector, extract_feature_matrix, normalize_features
from ..evaluation.metrics import compute_inertia, compute_silhouette_score
from ..stats.primitives import pairwise_distances
from ..stats.rng import SeededRandom, resolve_rng
from .personas import assign_personas


class ClusteringConfigError(ValueError):
    """Raised when clustering is invoked with an invalid configuration."""


@dataclass
class Cluster:
    """
    One segment of the population.

    employees is a tuple of the caller's Employee objects (shared, never
    copied or modified). Persona fields are filled in by the classifier.
    """
    id: int
    centroid: FeatureVector
    employees: Tuple[Employee, ...] = ()
    persona_name: str = ''
    description: str = ''
    characteristics: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.employees)


@dataclass
class ClusteringResult:
    """Clusters (largest first) plus diagnostics of the run that produced them."""
    clusters: List[Cluster]
    labels: np.ndarray
    converged: bool
    n_iterations: int
    inertia_history: List[float]
    normalized_features: pd.DataFrame

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self.clusters)

    def __len__(self) -> int:
        return len(self.clusters)

    def __getitem__(self, idx: int) -> Cluster:
        return self.clusters[idx]

    @property
    def inertia(self) -> float:
        return self.inertia_history[-1] if self.inertia_history else 0.0


def validate_clustering_params(
    n_samples: int,
    n_clusters: int,
    max_iterations: int = 100
) -> None:
    """
    Check clustering parameters before any work is done.

    Raises:
        ClusteringConfigError: If the population is empty, n_clusters is
            outside [1, n_samples], or max_iterations < 1
    """
    if n_samples == 0:
        raise ClusteringConfigError("Cannot cluster an empty population")
    if not isinstance(n_clusters, (int, np.integer)) or isinstance(n_clusters, bool):
        raise ClusteringConfigError(f"n_clusters must be an integer, got {n_clusters!r}")
    if n_clusters < 1:
        raise ClusteringConfigError(f"n_clusters must be at least 1, got {n_clusters}")
    if n_clusters > n_samples:
        raise ClusteringConfigError(
            f"n_clusters ({n_clusters}) exceeds population size ({n_samples})"
        )
    if max_iterations < 1:
        raise ClusteringConfigError(f"max_iterations must be at least 1, got {max_iterations}")


def initialize_centroids_kmeans_pp(
    points: np.ndarray,
    n_clusters: int,
    rng: SeededRandom
) -> np.ndarray:
    """
    Choose initial centroids with k-means++ seeding.

    The first centroid is a uniformly random point. Each further centroid
    is drawn with probability proportional to the squared distance from
    a point to its nearest already-chosen centroid. If every remaining
    distance is zero (identical points) the draw is uniform.

    Args:
        points: (N, D) normalized feature matrix
        n_clusters: Number of centroids to choose (1 <= k <= N)
        rng: Random source

    Returns:
        (k, D) array of centroids (copies of selected points)
    """
    points = np.asarray(points, dtype=float)
    n_samples = points.shape[0]

    chosen = [rng.integer(0, n_samples - 1)]
    # Squared distance from every point to its nearest chosen centroid
    min_sq_dist = np.sum((points - points[chosen[0]]) ** 2, axis=1)

    for _ in range(1, n_clusters):
        if min_sq_dist.sum() > 0:
            next_idx = rng.weighted_index(min_sq_dist)
        else:
            next_idx = rng.integer(0, n_samples - 1)
        chosen.append(next_idx)
        sq_dist = np.sum((points - points[next_idx]) ** 2, axis=1)
        min_sq_dist = np.minimum(min_sq_dist, sq_dist)

    return points[chosen].copy()


def assign_points(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Assign every point to its nearest centroid.

    Ties go to the lowest centroid index.

    Returns:
        (N,) int array of centroid indices
    """
    distances = pairwise_distances(points, centroids)
    return np.argmin(distances, axis=1)


def update_centroids(
    points: np.ndarray,
    labels: np.ndarray,
    centroids: np.ndarray,
    reseed_empty: bool = False
) -> np.ndarray:
    """
    Recompute each centroid as the mean of its assigned points.

    A centroid with no members keeps its previous position. With
    reseed_empty=True it is instead moved onto the point that lies
    farthest from its own (updated) centroid.

    Args:
        points: (N, D) normalized feature matrix
        labels: (N,) current assignments
        centroids: (k, D) current centroids
        reseed_empty: Whether to move empty centroids onto outlying points

    Returns:
        New (k, D) centroid array
    """
    new_centroids = np.array(centroids, dtype=float, copy=True)
    empty = []

    for c in range(len(centroids)):
        members = points[labels == c]
        if len(members) > 0:
            new_centroids[c] = members.mean(axis=0)
        else:
            empty.append(c)

    if reseed_empty and empty:
        own_dist = np.sqrt(np.sum((points - new_centroids[labels]) ** 2, axis=1))
        used = set()
        for c in empty:
            for idx in np.argsort(-own_dist, kind='stable'):
                if int(idx) not in used:
                    used.add(int(idx))
                    new_centroids[c] = points[idx]
                    break

    return new_centroids


def lloyd_refine(
    points: np.ndarray,
    centroids: np.ndarray,
    max_iterations: int = 100,
    reseed_empty: bool = False
) -> Tuple[np.ndarray, np.ndarray, bool, int, List[float]]:
    """
    Run Lloyd's assign/update loop until assignments stop changing.

    The previous assignment starts as all zeros. After each assignment
    pass the new labels are compared with the previous ones; if equal the
    loop stops without another update. Otherwise centroids are updated
    and the loop repeats, for at most max_iterations updates.

    Args:
        points: (N, D) normalized feature matrix
        centroids: (k, D) initial centroids
        max_iterations: Maximum number of update steps
        reseed_empty: Passed to update_centroids

    Returns:
        Tuple of (labels, centroids, converged, update steps performed,
                  inertia after each assignment pass)
    """
    centroids = np.array(centroids, dtype=float, copy=True)
    labels = np.zeros(len(points), dtype=int)
    inertia_history = []
    converged = False
    iteration = 0

    while iteration < max_iterations:
        new_labels = assign_points(points, centroids)
        inertia_history.append(compute_inertia(points, new_labels, centroids))

        if np.array_equal(new_labels, labels):
            converged = True
            break
        labels = new_labels

        centroids = update_centroids(points, labels, centroids, reseed_empty)
        iteration += 1

    return labels, centroids, converged, iteration, inertia_history


def _order_by_size(labels: np.ndarray, n_clusters: int) -> List[int]:
    """Old cluster indices ordered by descending size (stable on ties)."""
    sizes = np.bincount(labels, minlength=n_clusters)
    return sorted(range(n_clusters), key=lambda c: -sizes[c])


def build_clusters(
    employees: Sequence[Employee],
    labels: np.ndarray,
    centroids: np.ndarray
) -> Tuple[List[Cluster], np.ndarray]:
    """
    Group employees by label, sort clusters largest first and renumber.

    Returns:
        Tuple of (clusters with ids 0..k-1, labels remapped to those ids)
    """
    n_clusters = len(centroids)
    order = _order_by_size(labels, n_clusters)

    remap = np.empty(n_clusters, dtype=int)
    clusters = []
    for new_id, old_id in enumerate(order):
        remap[old_id] = new_id
        members = tuple(e for e, lbl in zip(employees, labels) if lbl == old_id)
        clusters.append(Cluster(
            id=new_id,
            centroid=FeatureVector.from_array(centroids[old_id]),
            employees=members,
        ))

    return clusters, remap[labels]


def perform_clustering(
    employees: Sequence[Employee],
    n_clusters: int = 7,
    max_iterations: int = 100,
    rng: Optional[SeededRandom] = None,
    random_seed: Optional[int] = 42,
    reseed_empty: bool = False,
    assign_persona_labels: bool = True,
    verbose: bool = True
) -> ClusteringResult:
    """
    Segment a population into personas.

    Extracts and normalizes features, seeds centroids with k-means++,
    refines them with Lloyd's algorithm, sorts clusters by size and
    attaches persona names and narratives.

    Args:
        employees: Population (not modified)
        n_clusters: Number of clusters k (1 <= k <= population size)
        max_iterations: Cap on Lloyd update steps
        rng: Random source; built from random_seed when omitted
        random_seed: Seed used only when rng is None
        reseed_empty: Move empty centroids onto outlying points
        assign_persona_labels: Whether to run the persona classifier
        verbose: Whether to print progress

    Returns:
        ClusteringResult with clusters ordered largest first

    Raises:
        ClusteringConfigError: On invalid n_clusters / max_iterations or
            an empty population
    """
    validate_clustering_params(len(employees), n_clusters, max_iterations)
    rng = resolve_rng(rng, random_seed)

    if verbose:
        print(f"\n[Clustering] Clustering {len(employees)} employees into {n_clusters} personas...")

    features = extract_feature_matrix(employees)
    normalized = normalize_features(features)
    points = normalized.to_numpy(dtype=float)

    if verbose:
        print(f"✓ Normalized features: {points.shape}")

    initial = initialize_centroids_kmeans_pp(points, n_clusters, rng)
    labels, centroids, converged, n_iter, inertia_history = lloyd_refine(
        points, initial, max_iterations=max_iterations, reseed_empty=reseed_empty
    )

    if verbose:
        if converged:
            print(f"✓ Converged after {n_iter} update steps (inertia = {inertia_history[-1]:.4f})")
        else:
            print(f"⚠️  WARNING: no convergence within {max_iterations} iterations, "
                  f"using last assignment (inertia = {inertia_history[-1]:.4f})")

    clusters, sorted_labels = build_clusters(employees, labels, centroids)

    if assign_persona_labels:
        assign_personas(clusters)

    if verbose:
        n_total = len(employees)
        for cluster in clusters:
            pct = cluster.size / n_total * 100
            name = f"  {cluster.persona_name}" if cluster.persona_name else ""
            print(f"  Cluster {cluster.id}: {cluster.size:4d} employees ({pct:5.1f}%){name}")

    return ClusteringResult(
        clusters=clusters,
        labels=sorted_labels,
        converged=converged,
        n_iterations=n_iter,
        inertia_history=inertia_history,
        normalized_features=normalized,
    )


def find_optimal_clusters(
    employees: Sequence[Employee],
    k_range: range = range(2, 11),
    max_iterations: int = 100,
    random_seed: int = 42,
    verbose: bool = True
) -> Tuple[int, List[float]]:
    """
    Find optimal number of clusters using silhouette score.

    Each candidate k is clustered with a fresh SeededRandom(random_seed),
    so the search itself is reproducible.

    Args:
        employees: Population to cluster
        k_range: Range of K values to try
        max_iterations: Cap on Lloyd update steps per run
        random_seed: Random seed for reproducibility
        verbose: Whether to print progress

    Returns:
        Tuple of (optimal K, list of silhouette scores aligned with k_range)

    Raises:
        ClusteringConfigError: If k_range is empty or contains an invalid k
    """
    k_values = list(k_range)
    if not k_values:
        raise ClusteringConfigError("k_range must contain at least one value")
    for k in k_values:
        validate_clustering_params(len(employees), k, max_iterations)

    if verbose:
        print("\n[Clustering] Finding optimal number of clusters...")

    silhouette_scores = []

    for k in k_values:
        result = perform_clustering(
            employees, n_clusters=k, max_iterations=max_iterations,
            rng=SeededRandom(random_seed), assign_persona_labels=False,
            verbose=False
        )
        score = compute_silhouette_score(result.normalized_features.to_numpy(), result.labels)
        silhouette_scores.append(score)

        if verbose:
            print(f"  k={k}: silhouette score = {score:.4f}")

    optimal_k = k_values[int(np.argmax(silhouette_scores))]
    best_score = max(silhouette_scores)

    if verbose:
        print(f"\n✓ Optimal number of clusters: {optimal_k}")
        print(f"  Best silhouette score: {best_score:.4f}")

    return optimal_k, silhouette_scores
