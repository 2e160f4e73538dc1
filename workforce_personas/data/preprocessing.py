"""
Feature extraction and normalization for employee records.

This module turns raw employee attributes into the 11-dimensional
feature vectors used for clustering, and rescales a population's
feature matrix into [0, 1] per column.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, fields
from typing import Dict, List, Sequence

from .employees import Employee
from ..stats.primitives import normalize_matrix


ROLE_LEVEL_CODES: Dict[str, int] = {
    'Junior': 0,
    'Mid': 1,
    'Senior': 2,
    'Lead': 3,
    'Executive': 4,
}

WORK_LOCATION_CODES: Dict[str, int] = {
    'Remote': 0,
    'Hybrid': 1,
    'On-site': 2,
}

# Unknown categories fall back to the middle code ("Mid", "Hybrid")
DEFAULT_ROLE_LEVEL_CODE = 1
DEFAULT_WORK_LOCATION_CODE = 1


@dataclass(frozen=True)
class FeatureVector:
    """Numeric description of one employee (or centroid) in 11 dimensions."""
    honeymoon: float
    self_reflection: float
    soul_searching: float
    steady_state: float
    age: float
    tenure: float
    experience: float
    dominant_stage_strength: float
    stage_stability: float
    role_level: float
    work_location: float

    def to_array(self) -> np.ndarray:
        return np.array([getattr(self, name) for name in FEATURE_COLUMNS], dtype=float)

    @classmethod
    def from_array(cls, values: Sequence[float]) -> 'FeatureVector':
        """Build a vector from 11 values in FEATURE_COLUMNS order."""
        values = np.asarray(values, dtype=float)
        if values.shape != (len(FEATURE_COLUMNS),):
            raise ValueError(
                f"Expected {len(FEATURE_COLUMNS)} feature values, got shape {values.shape}"
            )
        return cls(*(float(v) for v in values))

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FEATURE_COLUMNS}


FEATURE_COLUMNS: List[str] = [f.name for f in fields(FeatureVector)]
N_FEATURES = len(FEATURE_COLUMNS)


def encode_role_level(role: str) -> int:
    """
    Ordinal code for a role level (Junior=0 ... Executive=4).

    Args:
        role: Role level label

    Returns:
        Integer code, or the middle code for unrecognized labels
    """
    if not isinstance(role, str):
        return DEFAULT_ROLE_LEVEL_CODE
    return ROLE_LEVEL_CODES.get(role.strip(), DEFAULT_ROLE_LEVEL_CODE)


def encode_work_location(location: str) -> int:
    """Ordinal code for a work location (Remote=0, Hybrid=1, On-site=2)."""
    if not isinstance(location, str):
        return DEFAULT_WORK_LOCATION_CODE
    return WORK_LOCATION_CODES.get(location.strip(), DEFAULT_WORK_LOCATION_CODE)


def extract_features(employee: Employee) -> FeatureVector:
    """
    Map one employee to its feature vector.

    Stage percentages, age, tenure, experience, stage strength and
    stability are copied as-is; role level and work location are
    ordinal-encoded.
    """
    stages = employee.stage_distribution
    return FeatureVector(
        honeymoon=float(stages.honeymoon),
        self_reflection=float(stages.self_reflection),
        soul_searching=float(stages.soul_searching),
        steady_state=float(stages.steady_state),
        age=float(employee.age),
        tenure=float(employee.tenure_years),
        experience=float(employee.total_experience_years),
        dominant_stage_strength=float(employee.dominant_stage_strength),
        stage_stability=float(employee.stage_stability),
        role_level=float(encode_role_level(employee.role_level)),
        work_location=float(encode_work_location(employee.work_location)),
    )


def extract_feature_matrix(employees: Sequence[Employee]) -> pd.DataFrame:
    """
    Build the raw feature matrix for a population.

    Args:
        employees: Population in input order

    Returns:
        DataFrame of shape (N, 11) with FEATURE_COLUMNS, indexed by employee_id
    """
    rows = [extract_features(e).to_array() for e in employees]
    matrix = np.vstack(rows) if rows else np.empty((0, N_FEATURES))
    index = pd.Index([e.employee_id for e in employees], name='employee_id')
    return pd.DataFrame(matrix, columns=FEATURE_COLUMNS, index=index)


def normalize_features(features: pd.DataFrame) -> pd.DataFrame:
    """
    Min-max normalize every feature column across the population.

    Extrema come from the population passed in; nothing is cached
    between calls. Constant columns become 0.5.

    Args:
        features: Raw feature matrix from extract_feature_matrix

    Returns:
        DataFrame with the same index and columns, every value in [0, 1]
    """
    if features.empty:
        return features.copy()
    normalized = normalize_matrix(features.to_numpy(dtype=float))
    return pd.DataFrame(normalized, columns=features.columns, index=features.index)
