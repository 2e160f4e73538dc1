"""
Rule-based persona classification for finished clusters.

Each cluster is profiled from its members' raw (unnormalized) attributes
and matched against PERSONA_RULES, an ordered table of
(name, predicate, builder) records. The first rule whose predicate holds
names the cluster; the last rule always matches.
"""

import numpy as np
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence

from ..data.employees import Employee, STAGES
from ..stats.primitives import mean

if TYPE_CHECKING:
    from .kmeans import Cluster


EMPTY_PERSONA_NAME = "Empty Cluster"
EMPTY_PERSONA_DESCRIPTION = "No employees in this cluster"

# Trait thresholds
YOUNG_AGE = 35
EXPERIENCED_AGE = 45
NEW_HIRE_TENURE = 2
VETERAN_TENURE = 8
CLEAR_IDENTITY_STRENGTH = 50
HIGH_STABILITY = 70
LOW_STABILITY = 50
STRONG_HONEYMOON = 35
STRONG_STEADY_STATE = 35
STRONG_SOUL_SEARCHING = 30
STRONG_SELF_REFLECTION = 30


@dataclass(frozen=True)
class ClusterProfile:
    """Raw-attribute averages for one non-empty cluster."""
    size: int
    avg_age: float
    avg_tenure: float
    avg_experience: float
    avg_stage_strength: float
    avg_stability: float
    stage_averages: Dict[str, float]

    @property
    def dominant_stage(self) -> str:
        """Stage with the highest average; the later stage wins exact ties."""
        best = STAGES[0]
        for stage in STAGES[1:]:
            if self.stage_averages[stage] >= self.stage_averages[best]:
                best = stage
        return best

    @property
    def dominant_stage_value(self) -> float:
        return self.stage_averages[self.dominant_stage]

    def stage(self, name: str) -> float:
        return self.stage_averages[name]

    @property
    def is_young(self) -> bool:
        return self.avg_age < YOUNG_AGE

    @property
    def is_experienced(self) -> bool:
        return self.avg_age > EXPERIENCED_AGE

    @property
    def is_new_hire(self) -> bool:
        return self.avg_tenure < NEW_HIRE_TENURE

    @property
    def is_veteran(self) -> bool:
        return self.avg_tenure > VETERAN_TENURE

    @property
    def has_clear_identity(self) -> bool:
        return self.avg_stage_strength > CLEAR_IDENTITY_STRENGTH

    @property
    def is_highly_stable(self) -> bool:
        return self.avg_stability > HIGH_STABILITY

    @property
    def is_volatile(self) -> bool:
        return self.avg_stability < LOW_STABILITY


@dataclass(frozen=True)
class Persona:
    name: str
    description: str
    characteristics: List[str]
    recommendations: List[str]


@dataclass(frozen=True)
class PersonaRule:
    """One row of the persona table."""
    name: str
    predicate: Callable[[ClusterProfile], bool]
    build: Callable[[ClusterProfile], Persona]

    def matches(self, profile: ClusterProfile) -> bool:
        return bool(self.predicate(profile))


def _round(value: float) -> int:
    """Round half up, as the persona texts display whole numbers."""
    return int(np.floor(value + 0.5))


def _fixed1(value: float) -> str:
    """One decimal place, rounding half up."""
    return f"{np.floor(value * 10 + 0.5) / 10:.1f}"


def profile_cluster(employees: Sequence[Employee]) -> Optional[ClusterProfile]:
    """
    Average the raw attributes of a cluster's members.

    Args:
        employees: Cluster members

    Returns:
        ClusterProfile, or None for an empty cluster
    """
    if len(employees) == 0:
        return None

    stages = np.array([e.stage_distribution.as_tuple() for e in employees], dtype=float)
    stage_means = stages.mean(axis=0)

    return ClusterProfile(
        size=len(employees),
        avg_age=mean([e.age for e in employees]),
        avg_tenure=mean([e.tenure_years for e in employees]),
        avg_experience=mean([e.total_experience_years for e in employees]),
        avg_stage_strength=mean([e.dominant_stage_strength for e in employees]),
        avg_stability=mean([e.stage_stability for e in employees]),
        stage_averages={s: float(v) for s, v in zip(STAGES, stage_means)},
    )


# ── Persona builders ─────────────────────────────────────────

def _enthusiastic_newcomers(p: ClusterProfile) -> Persona:
    return Persona(
        name="Enthusiastic Newcomers",
        description="Young professionals in honeymoon phase, full of energy and optimism",
        characteristics=[
            f"Average age: {_round(p.avg_age)} years",
            f"{_fixed1(p.stage('honeymoon'))}% Honeymoon stage",
            f"Average tenure: {_fixed1(p.avg_tenure)} years",
            "Eager to learn and contribute",
        ],
        recommendations=[
            "Provide mentorship opportunities",
            "Offer clear career progression paths",
            "Encourage skill development programs",
        ],
    )


def _seasoned_veterans(p: ClusterProfile) -> Persona:
    return Persona(
        name="Seasoned Veterans",
        description="Experienced professionals with high stability and steady performance",
        characteristics=[
            f"Average age: {_round(p.avg_age)} years",
            f"{_fixed1(p.stage('steady-state'))}% Steady-State",
            f"Average tenure: {_fixed1(p.avg_tenure)} years",
            "Deep institutional knowledge",
        ],
        recommendations=[
            "Leverage as mentors for junior staff",
            "Recognize long-term contributions",
            "Provide leadership opportunities",
        ],
    )


def _active_explorers(p: ClusterProfile) -> Persona:
    return Persona(
        name="Active Explorers",
        description="Employees in soul-searching phase, questioning and exploring new possibilities",
        characteristics=[
            f"{_fixed1(p.stage('soul-searching'))}% Soul-Searching phase",
            f"Stability: {_round(p.avg_stability)}%",
            "Exploring options and questioning fit",
            "Natural transition phase",
        ],
        recommendations=[
            "Create space for exploration and dialog",
            "Discuss career goals and interests",
            "Consider role adjustments or new projects",
        ],
    )


def _reflective_mid_careerists(p: ClusterProfile) -> Persona:
    return Persona(
        name="Reflective Mid-Careerists",
        description="Mid-career professionals in self-reflection, evaluating their path",
        characteristics=[
            f"Average tenure: {_fixed1(p.avg_tenure)} years",
            f"{_fixed1(p.stage('self-reflection'))}% Self-Reflection",
            "Assessing career direction",
            "Seeking growth opportunities",
        ],
        recommendations=[
            "Offer skill development programs",
            "Discuss promotion pathways",
            "Provide stretch assignments",
        ],
    )


def _clear_and_stable(p: ClusterProfile) -> Persona:
    return Persona(
        name="Clear & Stable Contributors",
        description="Employees with clear stage identity and consistent patterns",
        characteristics=[
            f"Stage clarity: {_round(p.avg_stage_strength)}%",
            f"Stability: {_round(p.avg_stability)}%",
            "Consistent contributors",
            f"{p.size} employees",
        ],
        recommendations=[
            "Recognize consistent contribution",
            "Provide growth opportunities",
            "Leverage as cultural anchors",
        ],
    )


def _settling_in(p: ClusterProfile) -> Persona:
    return Persona(
        name="Settling-In Newcomers",
        description="Recent hires still finding their pattern and place",
        characteristics=[
            f"Average tenure: {_fixed1(p.avg_tenure)} years",
            f"Stability: {_round(p.avg_stability)}%",
            "Still establishing patterns",
            "Need support and guidance",
        ],
        recommendations=[
            "Enhance onboarding process",
            "Assign dedicated mentors",
            "Increase manager check-ins",
        ],
    )


def _early_achievers(p: ClusterProfile) -> Persona:
    return Persona(
        name="Early Achievers",
        description="Younger employees who have reached steady-state early",
        characteristics=[
            f"Average age: {_round(p.avg_age)} years",
            f"{_fixed1(p.stage('steady-state'))}% Steady-State",
            "Found their groove early",
            "Future leadership potential",
        ],
        recommendations=[
            "Fast-track development opportunities",
            "Consider for leadership pipeline",
            "Provide challenging projects",
        ],
    )


STAGE_PERSONA_NAMES = {
    'honeymoon': "Enthusiastic Explorers",
    'self-reflection': "Thoughtful Contributors",
    'soul-searching': "Transitioning Professionals",
    'steady-state': "Stable Performers",
}


def _dominant_stage_persona(p: ClusterProfile) -> Persona:
    stage = p.dominant_stage
    value = p.dominant_stage_value
    return Persona(
        name=STAGE_PERSONA_NAMES[stage],
        description=f"Employees with {_fixed1(value)}% {stage.replace('-', ' ')} characteristics",
        characteristics=[
            f"Average age: {_round(p.avg_age)} years",
            f"Average tenure: {_fixed1(p.avg_tenure)} years",
            f"Stage clarity: {_round(p.avg_stage_strength)}%, "
            f"Stability: {_round(p.avg_stability)}%",
            f"Dominant stage: {stage} ({_fixed1(value)}%)",
        ],
        recommendations=[
            "Understand stage-specific needs and experiences",
            "Support natural transitions between stages",
            "Create space for stage-appropriate conversations",
        ],
    )


# Evaluated top to bottom; first match wins
PERSONA_RULES: List[PersonaRule] = [
    PersonaRule(
        "Enthusiastic Newcomers",
        lambda p: p.stage('honeymoon') > STRONG_HONEYMOON and p.is_young,
        _enthusiastic_newcomers,
    ),
    PersonaRule(
        "Seasoned Veterans",
        lambda p: p.stage('steady-state') > STRONG_STEADY_STATE
        and (p.is_experienced or p.is_veteran),
        _seasoned_veterans,
    ),
    PersonaRule(
        "Active Explorers",
        lambda p: p.stage('soul-searching') > STRONG_SOUL_SEARCHING,
        _active_explorers,
    ),
    PersonaRule(
        "Reflective Mid-Careerists",
        lambda p: p.stage('self-reflection') > STRONG_SELF_REFLECTION
        and NEW_HIRE_TENURE < p.avg_tenure < VETERAN_TENURE,
        _reflective_mid_careerists,
    ),
    PersonaRule(
        "Clear & Stable Contributors",
        lambda p: p.has_clear_identity and p.is_highly_stable,
        _clear_and_stable,
    ),
    PersonaRule(
        "Settling-In Newcomers",
        lambda p: p.is_new_hire and p.is_volatile,
        _settling_in,
    ),
    PersonaRule(
        "Early Achievers",
        lambda p: p.dominant_stage == 'steady-state' and not p.is_experienced,
        _early_achievers,
    ),
    PersonaRule(
        "Dominant Stage",
        lambda p: True,
        _dominant_stage_persona,
    ),
]


def empty_persona() -> Persona:
    return Persona(EMPTY_PERSONA_NAME, EMPTY_PERSONA_DESCRIPTION, [], [])


def classify_profile(
    profile: Optional[ClusterProfile],
    rules: Sequence[PersonaRule] = PERSONA_RULES
) -> Persona:
    """
    Pick the persona for a cluster profile.

    Args:
        profile: Output of profile_cluster (None for an empty cluster)
        rules: Ordered rule table

    Returns:
        Persona of the first matching rule, or the empty-cluster sentinel
    """
    if profile is None:
        return empty_persona()
    for rule in rules:
        if rule.matches(profile):
            return rule.build(profile)
    # Only reachable with a custom table lacking a catch-all
    return _dominant_stage_persona(profile)


def classify_cluster(employees: Sequence[Employee]) -> Persona:
    """Profile a group of employees and return its persona."""
    return classify_profile(profile_cluster(employees))


def assign_personas(
    clusters: Sequence['Cluster'],
    rules: Sequence[PersonaRule] = PERSONA_RULES
) -> None:
    """
    Annotate each cluster in place with persona name, description,
    characteristics and recommendations.
    """
    for cluster in clusters:
        persona = classify_profile(profile_cluster(cluster.employees), rules)
        cluster.persona_name = persona.name
        cluster.description = persona.description
        cluster.characteristics = list(persona.characteristics)
        cluster.recommendations = list(persona.recommendations)
