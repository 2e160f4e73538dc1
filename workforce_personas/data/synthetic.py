"""
Synthetic employee population generator.

Produces a realistic, reproducible workforce: ages drawn from a normal
distribution, experience and tenure correlated with age, role level
conditioned on age and experience, and stage distributions that shift
from honeymoon towards steady-state as employees get older.
"""

from typing import List, Optional

from .employees import Employee, StageDistribution
from ..stats.primitives import clamp
from ..stats.rng import SeededRandom, resolve_rng


DEPARTMENTS = ['engineering', 'sales', 'marketing', 'hr', 'operations', 'finance']
DEPARTMENT_WEIGHTS = [0.26, 0.18, 0.16, 0.07, 0.22, 0.11]

GENDERS = ['Male', 'Female', 'Non-binary', 'Prefer not to say']
GENDER_WEIGHTS = [0.48, 0.49, 0.015, 0.015]

WORK_LOCATION_WEIGHTS = {'Remote': 0.3, 'Hybrid': 0.5, 'On-site': 0.2}

FIRST_NAMES = {
    'Male': ['James', 'Michael', 'Robert', 'John', 'David', 'William',
             'Richard', 'Joseph', 'Thomas', 'Daniel', 'Matthew', 'Kevin'],
    'Female': ['Mary', 'Patricia', 'Jennifer', 'Linda', 'Elizabeth', 'Susan',
               'Jessica', 'Sarah', 'Karen', 'Lisa', 'Emily', 'Michelle'],
    'Non-binary': ['Alex', 'Jordan', 'Taylor', 'Morgan', 'Riley', 'Casey'],
    'Prefer not to say': ['Sam', 'Chris', 'Pat', 'Jamie'],
}

LAST_NAMES = [
    'Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller',
    'Davis', 'Rodriguez', 'Martinez', 'Lopez', 'Wilson', 'Anderson', 'Thomas',
    'Taylor', 'Moore', 'Jackson', 'Martin', 'Lee', 'Perez', 'Thompson',
    'White', 'Harris', 'Clark', 'Lewis', 'Robinson',
]

# (base, low jitter, high jitter) per stage, by age band upper bound
_STAGE_PROFILES = [
    (30, [(30, -10, 15), (35, -10, 10), (20, -5, 10), (15, -5, 10)]),
    (40, [(20, -10, 10), (30, -10, 15), (28, -8, 12), (22, -8, 10)]),
    (50, [(15, -8, 10), (28, -10, 12), (27, -10, 10), (30, -10, 15)]),
    (None, [(10, -5, 10), (20, -10, 15), (20, -10, 15), (50, -15, 10)]),
]
_STAGE_FLOORS = (5, 10, 10, 10)


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def _role_level(age: int, experience: int, rng: SeededRandom) -> str:
    """Role level conditioned on age and years of experience."""
    if age <= 28 and experience < 6:
        return rng.weighted_choice(['Junior', 'Mid'], [0.8, 0.2])
    if age <= 35 and experience < 11:
        return rng.weighted_choice(['Junior', 'Mid', 'Senior'], [0.1, 0.7, 0.2])
    if age <= 45 and experience < 16:
        return rng.weighted_choice(['Mid', 'Senior', 'Lead'], [0.15, 0.65, 0.2])
    if age <= 50 and experience >= 12:
        return rng.weighted_choice(['Senior', 'Lead', 'Executive'], [0.3, 0.6, 0.1])
    if age >= 45 and experience >= 15:
        return rng.weighted_choice(['Lead', 'Executive'], [0.7, 0.3])
    return 'Mid'


def generate_stage_distribution(age: int, rng: SeededRandom) -> StageDistribution:
    """
    Draw a stage distribution whose shape depends on the age band.

    The four raw scores are floored, rescaled to percentages and rounded;
    rounding drift is absorbed by the largest stage so the result sums
    to exactly 100.
    """
    for upper, profile in _STAGE_PROFILES:
        if upper is None or age <= upper:
            break

    raw = [
        max(floor, base + rng.integer(lo, hi))
        for (base, lo, hi), floor in zip(profile, _STAGE_FLOORS)
    ]
    total = sum(raw)
    pct = [_round_half_up(v / total * 100) for v in raw]

    drift = 100 - sum(pct)
    if drift:
        pct[pct.index(max(pct))] += drift

    return StageDistribution(*(float(p) for p in pct))


def generate_employees(
    count: int = 250,
    rng: Optional[SeededRandom] = None,
    seed: int = 42,
    verbose: bool = True
) -> List[Employee]:
    """
    Generate a synthetic employee population.

    Args:
        count: Number of employees
        rng: Random source; a new one is built from seed when omitted
        seed: Seed used only when rng is None
        verbose: Whether to print population statistics

    Returns:
        List of employees with ids emp-001, emp-002, ...
    """
    rng = resolve_rng(rng, seed)
    employees = []

    for i in range(count):
        # Age ~ N(38, 10) clipped to working range
        age = _round_half_up(clamp(rng.normal(38, 10), 22, 65))
        gender = rng.weighted_choice(GENDERS, GENDER_WEIGHTS)

        experience = max(0, age - 22 + rng.integer(-2, 2))

        # Younger employees have shorter tenure ceilings
        max_tenure = min(experience, age - 22)
        if age <= 30:
            max_tenure = min(max_tenure, 5)
        elif age <= 40:
            max_tenure = min(max_tenure, 12)
        tenure = round(rng.uniform() * max_tenure, 1)

        role_level = _role_level(age, experience, rng)
        department = rng.weighted_choice(DEPARTMENTS, DEPARTMENT_WEIGHTS)
        work_location = rng.weighted_choice(
            list(WORK_LOCATION_WEIGHTS), list(WORK_LOCATION_WEIGHTS.values())
        )

        assessment_count = max(1, int(tenure * 2) + rng.integer(0, 3))

        stages = generate_stage_distribution(age, rng)
        strength = max(stages.as_tuple())

        # More tenure and more assessments give a more settled pattern
        base_stability = min(85.0, tenure * 10 + assessment_count * 5)
        stability = _round_half_up(clamp(base_stability + rng.integer(-15, 15), 25, 95))

        first = rng.choice(FIRST_NAMES[gender])
        last = rng.choice(LAST_NAMES)

        employees.append(Employee(
            employee_id=f"emp-{i + 1:03d}",
            age=float(age),
            tenure_years=float(tenure),
            total_experience_years=float(experience),
            stage_distribution=stages,
            dominant_stage_strength=float(strength),
            stage_stability=float(stability),
            role_level=role_level,
            work_location=work_location,
            name=f"{first} {last}",
            department=department,
            gender=gender,
        ))

    if verbose:
        print(f"✓ Generated {len(employees)} synthetic employees (seed={rng.seed})")

    return employees
