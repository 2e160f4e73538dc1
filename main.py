#!/usr/bin/env python3
"""
Employee Persona Segmentation

Main entry point for the pipeline. This script orchestrates:
1. Population loading (CSV) or synthesis
2. Optional selection of k by silhouette score
3. K-means++ / Lloyd clustering
4. Persona classification and reporting

Usage:
    python main.py --n-clusters 7 --seed 42
    python main.py --auto-clusters --min-clusters 3 --max-clusters 9
    python main.py --input-csv data/employees.csv --n-clusters 5
"""

import argparse
import sys

from config import Config, get_config_from_args
from workforce_personas.data import generate_employees, load_employees
from workforce_personas.clustering import (
    ClusteringConfigError,
    find_optimal_clusters,
    perform_clustering
)
from workforce_personas.evaluation import print_persona_report
from workforce_personas.stats import SeededRandom


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Employee persona segmentation with k-means++'
    )

    # Population
    parser.add_argument('--input-csv', type=str, default=None,
                        help='CSV of employees (synthetic population if omitted)')
    parser.add_argument('--population-size', type=int, default=250,
                        help='Number of synthetic employees')
    parser.add_argument('--population-seed', type=int, default=42,
                        help='Seed for synthetic population')

    # Clustering
    parser.add_argument('--n-clusters', type=int, default=7,
                        help='Number of clusters')
    parser.add_argument('--auto-clusters', action='store_true',
                        help='Automatically determine optimal clusters')
    parser.add_argument('--min-clusters', type=int, default=2,
                        help='Smallest k tried with --auto-clusters')
    parser.add_argument('--max-clusters', type=int, default=10,
                        help='Largest k tried with --auto-clusters')
    parser.add_argument('--max-iterations', type=int, default=100,
                        help='Cap on Lloyd update steps')
    parser.add_argument('--seed', type=int, default=42,
                        help='Seed for centroid initialization')
    parser.add_argument('--reseed-empty', action='store_true',
                        help='Move empty centroids onto outlying employees')

    # Other
    parser.add_argument('--quiet', action='store_true',
                        help='Only print the persona report')

    return parser.parse_args(argv)


def run_pipeline(config: Config):
    """Run population loading, clustering and reporting."""
    verbose = config.verbose
    pop_cfg = config.population
    clu_cfg = config.clustering

    if verbose:
        print("\n" + "="*80)
        print("EMPLOYEE PERSONA SEGMENTATION")
        print("="*80)

    # =========================================================================
    # STEP 1: Population
    # =========================================================================
    if pop_cfg.input_csv is not None:
        employees = load_employees(pop_cfg.input_csv, verbose=verbose)
    else:
        employees = generate_employees(
            pop_cfg.size,
            rng=SeededRandom(pop_cfg.random_seed),
            verbose=verbose
        )

    # =========================================================================
    # STEP 2: Choose k
    # =========================================================================
    if clu_cfg.auto_clusters:
        optimal_k, _ = find_optimal_clusters(
            employees,
            k_range=range(clu_cfg.min_clusters, clu_cfg.max_clusters + 1),
            max_iterations=clu_cfg.max_iterations,
            random_seed=clu_cfg.random_seed,
            verbose=verbose
        )
    else:
        optimal_k = clu_cfg.n_clusters

    # =========================================================================
    # STEP 3: Cluster & classify
    # =========================================================================
    result = perform_clustering(
        employees,
        n_clusters=optimal_k,
        max_iterations=clu_cfg.max_iterations,
        rng=SeededRandom(clu_cfg.random_seed),
        reseed_empty=clu_cfg.reseed_empty,
        verbose=verbose
    )

    # =========================================================================
    # STEP 4: Report
    # =========================================================================
    print_persona_report(result)

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = get_config_from_args(args)

    try:
        run_pipeline(config)
    except ClusteringConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main())
