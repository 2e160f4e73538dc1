"""
Evaluation metrics for employee segmentations.

This module provides cluster quality measures (inertia, silhouette)
and per-cluster comparison statistics computed from raw employee
attributes.
"""

import numpy as np
import pandas as pd
from typing import Dict, Sequence
from sklearn.metrics import silhouette_score

from ..data.employees import ROLE_LEVELS, STAGES, WORK_LOCATIONS
from ..stats.primitives import standard_deviation


def compute_inertia(points: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    """
    Within-cluster sum of squared distances.

    Args:
        points: (N, D) feature matrix
        labels: (N,) cluster index of each point
        centroids: (k, D) centroid matrix

    Returns:
        Sum over points of squared distance to their assigned centroid
    """
    points = np.asarray(points, dtype=float)
    if points.size == 0:
        return 0.0
    diff = points - np.asarray(centroids, dtype=float)[np.asarray(labels)]
    return float(np.sum(diff * diff))


def compute_silhouette_score(points: np.ndarray, labels: np.ndarray) -> float:
    """
    Mean silhouette coefficient of a labelling.

    Silhouette is undefined with fewer than 2 distinct labels or with as
    many labels as points; 0.0 is returned in those cases.

    Args:
        points: (N, D) feature matrix (normally the normalized features)
        labels: (N,) cluster labels

    Returns:
        Silhouette score in [-1, 1]
    """
    labels = np.asarray(labels)
    n_labels = len(np.unique(labels))
    if n_labels < 2 or n_labels >= len(labels):
        return 0.0
    return float(silhouette_score(points, labels, metric='euclidean'))


def _share(values: Sequence[str], category: str) -> float:
    if len(values) == 0:
        return 0.0
    return sum(1 for v in values if v == category) / len(values)


def summarize_cluster(cluster) -> Dict:
    """
    Comparison statistics for one cluster.

    Averages come from raw employee attributes; role-level and
    work-location mixes are fractions of the cluster. Empty clusters
    get NaN averages and zero shares.
    """
    employees = cluster.employees
    size = len(employees)
    row = {
        'cluster': cluster.id,
        'persona': cluster.persona_name,
        'size': size,
    }

    def avg(attr):
        return float(np.mean([getattr(e, attr) for e in employees])) if size else np.nan

    row['avg_age'] = avg('age')
    row['std_age'] = standard_deviation([e.age for e in employees]) if size else np.nan
    row['avg_tenure'] = avg('tenure_years')
    row['avg_experience'] = avg('total_experience_years')
    row['avg_stage_clarity'] = avg('dominant_stage_strength')
    row['avg_stability'] = avg('stage_stability')

    for i, stage in enumerate(STAGES):
        col = f"avg_{stage.replace('-', '_')}"
        row[col] = (float(np.mean([e.stage_distribution.as_tuple()[i] for e in employees]))
                    if size else np.nan)

    locations = [e.work_location for e in employees]
    for location in WORK_LOCATIONS:
        row[f"pct_{location.lower().replace('-', '')}"] = _share(locations, location)

    roles = [e.role_level for e in employees]
    for role in ROLE_LEVELS:
        row[f"pct_{role.lower()}"] = _share(roles, role)

    return row


def summarize_clusters(clusters: Sequence) -> pd.DataFrame:
    """
    Build a comparison table with one row per cluster.

    Args:
        clusters: Clusters from perform_clustering

    Returns:
        DataFrame indexed by cluster id
    """
    rows = [summarize_cluster(c) for c in clusters]
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).set_index('cluster')


def print_persona_report(result, title: str = "EMPLOYEE PERSONAS") -> pd.DataFrame:
    """
    Print personas, narratives and summary statistics of a clustering run.

    Args:
        result: ClusteringResult from perform_clustering
        title: Banner title

    Returns:
        The cluster summary DataFrame that was printed
    """
    n_total = sum(c.size for c in result.clusters)
    silhouette = compute_silhouette_score(result.normalized_features.to_numpy(), result.labels)

    print(f"\n{'='*80}")
    print(title)
    print(f"{'='*80}")
    print(f"Employees: {n_total}  Clusters: {len(result.clusters)}")
    print(f"Converged: {'yes' if result.converged else 'NO (iteration cap reached)'} "
          f"after {result.n_iterations} update steps")
    print(f"Inertia: {result.inertia:.4f}  Silhouette: {silhouette:.4f}")

    for cluster in result.clusters:
        pct = cluster.size / n_total * 100 if n_total else 0.0
        print(f"\n{'-'*80}")
        print(f"CLUSTER {cluster.id}: {cluster.persona_name} "
              f"({cluster.size} employees, {pct:.1f}%)")
        print(f"{'-'*80}")
        print(cluster.description)
        if cluster.characteristics:
            print("\nCharacteristics:")
            for line in cluster.characteristics:
                print(f"  • {line}")
        if cluster.recommendations:
            print("\nRecommendations:")
            for line in cluster.recommendations:
                print(f"  → {line}")

    summary = summarize_clusters(result.clusters)
    print(f"\n{'='*80}")
    print("CLUSTER SUMMARY")
    print(f"{'='*80}")
    with pd.option_context('display.width', 200, 'display.max_columns', 30,
                           'display.float_format', '{:.2f}'.format):
        print(summary)

    return summary
