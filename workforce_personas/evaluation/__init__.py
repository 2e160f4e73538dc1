"""Cluster quality metrics and reporting."""

from .metrics import (
    compute_inertia,
    compute_silhouette_score,
    summarize_cluster,
    summarize_clusters,
    print_persona_report
)

__all__ = [
    'compute_inertia',
    'compute_silhouette_score',
    'summarize_cluster',
    'summarize_clusters',
    'print_persona_report'
]
