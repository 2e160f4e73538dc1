"""
Employee records consumed by the segmentation pipeline.

Employees are immutable; clustering only reads them and hands the same
objects back inside cluster results.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


STAGES: Tuple[str, ...] = (
    'honeymoon',
    'self-reflection',
    'soul-searching',
    'steady-state',
)

ROLE_LEVELS: Tuple[str, ...] = ('Junior', 'Mid', 'Senior', 'Lead', 'Executive')
WORK_LOCATIONS: Tuple[str, ...] = ('Remote', 'Hybrid', 'On-site')


@dataclass(frozen=True)
class StageDistribution:
    """Percentage (0-100) of an employee's responses in each life-cycle stage."""
    honeymoon: float = 25.0
    self_reflection: float = 25.0
    soul_searching: float = 25.0
    steady_state: float = 25.0

    def as_dict(self) -> Dict[str, float]:
        """Stage name -> percentage, in canonical stage order."""
        return dict(zip(STAGES, self.as_tuple()))

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.honeymoon, self.self_reflection,
                self.soul_searching, self.steady_state)

    @property
    def total(self) -> float:
        return sum(self.as_tuple())

    @property
    def dominant_stage(self) -> str:
        """Stage with the highest percentage (first in canonical order on ties)."""
        values = self.as_tuple()
        return STAGES[values.index(max(values))]


@dataclass(frozen=True)
class Employee:
    """
    One employee with the raw attributes used for segmentation.

    Identity fields (employee_id, name, department, gender) are carried
    through untouched and never used for clustering.
    """
    employee_id: str
    age: float
    tenure_years: float
    total_experience_years: float
    stage_distribution: StageDistribution = field(default_factory=StageDistribution)
    dominant_stage_strength: float = 0.0
    stage_stability: float = 0.0
    role_level: str = 'Mid'
    work_location: str = 'Hybrid'
    name: str = ''
    department: str = ''
    gender: str = ''

    @property
    def dominant_stage(self) -> str:
        return self.stage_distribution.dominant_stage
