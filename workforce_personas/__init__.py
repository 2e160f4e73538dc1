"""
Employee persona segmentation.

This package provides modules for:
- Statistical primitives and a seeded random source
- Employee records, population loading and synthesis
- Feature extraction and normalization
- K-means++ / Lloyd clustering
- Rule-based persona classification
- Cluster quality metrics and reporting
"""

from . import stats
from . import data
from . import clustering
from . import evaluation

from .clustering import perform_clustering, Cluster, ClusteringResult, ClusteringConfigError
from .data import Employee, StageDistribution
from .stats import SeededRandom

__version__ = "1.0.0"
