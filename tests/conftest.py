"""Shared fixtures for the persona segmentation tests."""

import pytest

from workforce_personas.data import Employee, StageDistribution, generate_employees
from workforce_personas.stats import SeededRandom


def make_employee(
    employee_id="emp-x",
    age=35,
    tenure=3.0,
    experience=10,
    stages=(25, 25, 25, 25),
    strength=None,
    stability=60,
    role="Mid",
    location="Hybrid",
):
    dist = StageDistribution(*(float(s) for s in stages))
    return Employee(
        employee_id=employee_id,
        age=float(age),
        tenure_years=float(tenure),
        total_experience_years=float(experience),
        stage_distribution=dist,
        dominant_stage_strength=float(max(stages) if strength is None else strength),
        stage_stability=float(stability),
        role_level=role,
        work_location=location,
    )


@pytest.fixture
def employee_factory():
    return make_employee


@pytest.fixture
def six_employees():
    """Three young honeymoon-leaning and three mature steady-state employees."""
    return [
        make_employee("e1", 24, 1.0, 2, (50, 25, 15, 10), stability=40,
                      role="Junior", location="Remote"),
        make_employee("e2", 26, 1.5, 4, (48, 27, 15, 10), stability=45,
                      role="Junior", location="Remote"),
        make_employee("e3", 52, 15.0, 30, (10, 20, 15, 55), stability=80,
                      role="Lead", location="On-site"),
        make_employee("e4", 55, 18.0, 33, (8, 20, 12, 60), stability=85,
                      role="Executive", location="On-site"),
        make_employee("e5", 30, 2.0, 7, (35, 40, 15, 10), stability=50,
                      role="Mid", location="Remote"),
        make_employee("e6", 58, 20.0, 36, (10, 15, 15, 60), stability=90,
                      role="Lead", location="On-site"),
    ]


@pytest.fixture(scope="session")
def synthetic_population():
    return generate_employees(250, rng=SeededRandom(42), verbose=False)


@pytest.fixture(scope="session")
def small_population():
    return generate_employees(60, rng=SeededRandom(7), verbose=False)
