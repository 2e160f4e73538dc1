"""Clustering and persona classification for employee segments."""

from .kmeans import (
    Cluster,
    ClusteringResult,
    ClusteringConfigError,
    validate_clustering_params,
    initialize_centroids_kmeans_pp,
    assign_points,
    update_centroids,
    lloyd_refine,
    build_clusters,
    perform_clustering,
    find_optimal_clusters
)
from .personas import (
    ClusterProfile,
    Persona,
    PersonaRule,
    PERSONA_RULES,
    profile_cluster,
    classify_profile,
    classify_cluster,
    assign_personas
)

__all__ = [
    'Cluster',
    'ClusteringResult',
    'ClusteringConfigError',
    'validate_clustering_params',
    'initialize_centroids_kmeans_pp',
    'assign_points',
    'update_centroids',
    'lloyd_refine',
    'build_clusters',
    'perform_clustering',
    'find_optimal_clusters',
    'ClusterProfile',
    'Persona',
    'PersonaRule',
    'PERSONA_RULES',
    'profile_cluster',
    'classify_profile',
    'classify_cluster',
    'assign_personas'
]
