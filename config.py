"""
Configuration settings for the employee persona pipeline.

This module centralizes all configurable parameters: population
source, clustering hyperparameters and random seeds.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PopulationConfig:
    """Where the employee population comes from."""
    # CSV input; a synthetic population is generated when unset
    input_csv: Optional[Path] = None

    # Synthetic population
    size: int = 250
    random_seed: int = 42


@dataclass
class ClusteringConfig:
    """Clustering configuration."""
    n_clusters: int = 7
    max_iterations: int = 100
    random_seed: int = 42
    reseed_empty: bool = False

    # Automatic k selection by silhouette score
    auto_clusters: bool = False
    min_clusters: int = 2
    max_clusters: int = 10


@dataclass
class Config:
    """Main configuration container."""
    population: PopulationConfig = field(default_factory=PopulationConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)

    verbose: bool = True


def get_default_config() -> Config:
    """Return default configuration."""
    return Config()


def get_config_from_args(args) -> Config:
    """Create configuration from command-line arguments."""
    config = get_default_config()

    # Override with args if provided
    if getattr(args, 'input_csv', None):
        config.population.input_csv = Path(args.input_csv)
    if hasattr(args, 'population_size'):
        config.population.size = args.population_size
    if hasattr(args, 'population_seed'):
        config.population.random_seed = args.population_seed
    if hasattr(args, 'n_clusters'):
        config.clustering.n_clusters = args.n_clusters
    if hasattr(args, 'max_iterations'):
        config.clustering.max_iterations = args.max_iterations
    if hasattr(args, 'seed'):
        config.clustering.random_seed = args.seed
    if hasattr(args, 'reseed_empty'):
        config.clustering.reseed_empty = args.reseed_empty
    if hasattr(args, 'auto_clusters'):
        config.clustering.auto_clusters = args.auto_clusters
    if hasattr(args, 'min_clusters'):
        config.clustering.min_clusters = args.min_clusters
    if hasattr(args, 'max_clusters'):
        config.clustering.max_clusters = args.max_clusters
    if hasattr(args, 'quiet'):
        config.verbose = not args.quiet

    return config
