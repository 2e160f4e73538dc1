"""
Data loading utilities for employee populations.

This module reads employee records from CSV files (or DataFrames) into
Employee objects for segmentation.
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import List, Union

from .employees import Employee, StageDistribution


REQUIRED_COLUMNS = [
    'employee_id',
    'age',
    'tenure_years',
    'total_experience_years',
    'honeymoon',
    'self_reflection',
    'soul_searching',
    'steady_state',
    'dominant_stage_strength',
    'stage_stability',
    'role_level',
    'work_location',
]

OPTIONAL_COLUMNS = ['name', 'department', 'gender']


def employees_from_dataframe(df: pd.DataFrame) -> List[Employee]:
    """
    Convert a DataFrame of employee attributes to Employee records.

    Args:
        df: One row per employee with at least REQUIRED_COLUMNS

    Returns:
        Employees in row order

    Raises:
        ValueError: If required columns are missing or numeric columns
            contain missing or non-finite values
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {', '.join(missing)}")

    numeric_cols = [c for c in REQUIRED_COLUMNS
                    if c not in ('employee_id', 'role_level', 'work_location')]
    numeric = df[numeric_cols].apply(pd.to_numeric, errors='coerce')
    bad = numeric.columns[numeric.isna().any()].tolist()
    if bad:
        raise ValueError(f"Non-numeric or missing values in columns: {', '.join(bad)}")
    infinite = numeric.columns[~np.isfinite(numeric.to_numpy(dtype=float)).all(axis=0)].tolist()
    if infinite:
        raise ValueError(f"Non-finite values in columns: {', '.join(infinite)}")

    employees = []
    # Positional pairing; the index may contain duplicates
    for (_, row), (_, nums) in zip(df.iterrows(), numeric.iterrows()):
        extra = {
            col: ('' if pd.isna(row[col]) else str(row[col]))
            for col in OPTIONAL_COLUMNS if col in df.columns
        }
        employees.append(Employee(
            employee_id=str(row['employee_id']),
            age=float(nums['age']),
            tenure_years=float(nums['tenure_years']),
            total_experience_years=float(nums['total_experience_years']),
            stage_distribution=StageDistribution(
                honeymoon=float(nums['honeymoon']),
                self_reflection=float(nums['self_reflection']),
                soul_searching=float(nums['soul_searching']),
                steady_state=float(nums['steady_state']),
            ),
            dominant_stage_strength=float(nums['dominant_stage_strength']),
            stage_stability=float(nums['stage_stability']),
            role_level=str(row['role_level']),
            work_location=str(row['work_location']),
            **extra
        ))
    return employees


def load_employees(
    csv_path: Union[str, Path],
    verbose: bool = True
) -> List[Employee]:
    """
    Load an employee population from CSV.

    Args:
        csv_path: Path to CSV with REQUIRED_COLUMNS (OPTIONAL_COLUMNS kept if present)
        verbose: Whether to print loading statistics

    Returns:
        List of Employee records in file order
    """
    if verbose:
        print("=" * 50)
        print("LOADING EMPLOYEES")
        print("=" * 50)

    df = pd.read_csv(csv_path)
    employees = employees_from_dataframe(df)

    if verbose:
        print(f"Loaded: {len(employees)} employees from {csv_path}")
        if employees:
            print(f"  Mean age: {df['age'].mean():.1f}")
            print(f"  Mean tenure: {df['tenure_years'].mean():.1f} years")
        print("=" * 50)

    return employees
