"""Employee records, population sources and feature preparation."""

from .employees import (
    Employee,
    StageDistribution,
    STAGES,
    ROLE_LEVELS,
    WORK_LOCATIONS
)
from .loader import load_employees, employees_from_dataframe
from .synthetic import generate_employees, generate_stage_distribution
from .preprocessing import (
    FeatureVector,
    FEATURE_COLUMNS,
    N_FEATURES,
    encode_role_level,
    encode_work_location,
    extract_features,
    extract_feature_matrix,
    normalize_features
)

__all__ = [
    'Employee',
    'StageDistribution',
    'STAGES',
    'ROLE_LEVELS',
    'WORK_LOCATIONS',
    'load_employees',
    'employees_from_dataframe',
    'generate_employees',
    'generate_stage_distribution',
    'FeatureVector',
    'FEATURE_COLUMNS',
    'N_FEATURES',
    'encode_role_level',
    'encode_work_location',
    'extract_features',
    'extract_feature_matrix',
    'normalize_features'
]
