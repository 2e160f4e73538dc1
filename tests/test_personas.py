import pytest

from workforce_personas.clustering import (
    PERSONA_RULES,
    Cluster,
    ClusterProfile,
    assign_personas,
    classify_cluster,
    classify_profile,
    profile_cluster,
)
from workforce_personas.data import FeatureVector

from conftest import make_employee


def _profile(age=40, tenure=5.0, strength=40, stability=60,
             stages=(25, 25, 25, 25), size=10, experience=15):
    return ClusterProfile(
        size=size,
        avg_age=age,
        avg_tenure=tenure,
        avg_experience=experience,
        avg_stage_strength=strength,
        avg_stability=stability,
        stage_averages=dict(zip(
            ['honeymoon', 'self-reflection', 'soul-searching', 'steady-state'], stages
        )),
    )


def test_enthusiastic_newcomers_scenario():
    employees = [
        make_employee("a", age=24, tenure=0.6, stages=(45, 25, 20, 10), stability=45),
        make_employee("b", age=26, tenure=1.0, stages=(45, 25, 20, 10), stability=55),
    ]
    persona = classify_cluster(employees)
    assert persona.name == "Enthusiastic Newcomers"
    assert persona.characteristics == [
        "Average age: 25 years",
        "45.0% Honeymoon stage",
        "Average tenure: 0.8 years",
        "Eager to learn and contribute",
    ]
    assert len(persona.recommendations) == 3


def test_one_decimal_texts_round_half_up():
    persona = classify_profile(_profile(age=30, tenure=0.25, stages=(45.25, 25, 20, 9.75)))
    assert persona.name == "Enthusiastic Newcomers"
    assert persona.characteristics[1] == "45.3% Honeymoon stage"
    assert persona.characteristics[2] == "Average tenure: 0.3 years"


def test_empty_cluster_gets_sentinel():
    persona = classify_cluster([])
    assert persona.name == "Empty Cluster"
    assert persona.description == "No employees in this cluster"
    assert persona.characteristics == []
    assert persona.recommendations == []


def test_assign_personas_handles_empty_cluster():
    cluster = Cluster(id=0, centroid=FeatureVector(*([0.5] * 11)))
    assign_personas([cluster])
    assert cluster.size == 0
    assert cluster.persona_name == "Empty Cluster"
    assert cluster.characteristics == []


def test_profile_uses_raw_attributes():
    employees = [
        make_employee("a", age=30, tenure=2, experience=8, stages=(40, 30, 20, 10),
                      strength=40, stability=50),
        make_employee("b", age=50, tenure=10, experience=28, stages=(10, 20, 30, 40),
                      strength=40, stability=90),
    ]
    p = profile_cluster(employees)
    assert p.size == 2
    assert p.avg_age == pytest.approx(40)
    assert p.avg_tenure == pytest.approx(6)
    assert p.avg_experience == pytest.approx(18)
    assert p.avg_stability == pytest.approx(70)
    assert p.stage_averages['honeymoon'] == pytest.approx(25)
    assert p.stage_averages['steady-state'] == pytest.approx(25)
    assert profile_cluster([]) is None


def test_dominant_stage_tie_goes_to_later_stage():
    p = _profile(stages=(30, 30, 20, 20))
    assert p.dominant_stage == 'self-reflection'
    assert _profile(stages=(10, 20, 35, 35)).dominant_stage == 'steady-state'


@pytest.mark.parametrize("profile, expected", [
    (_profile(age=28, stages=(40, 30, 20, 10)), "Enthusiastic Newcomers"),
    (_profile(age=50, stages=(10, 20, 20, 50)), "Seasoned Veterans"),
    (_profile(age=40, tenure=9, stages=(10, 20, 20, 50)), "Seasoned Veterans"),
    (_profile(age=40, stages=(20, 20, 35, 25)), "Active Explorers"),
    (_profile(age=40, tenure=5, stages=(20, 35, 20, 25)), "Reflective Mid-Careerists"),
    (_profile(strength=55, stability=75), "Clear & Stable Contributors"),
    (_profile(tenure=1.0, stability=40), "Settling-In Newcomers"),
    (_profile(age=38, stages=(20, 25, 25, 30)), "Early Achievers"),
    (_profile(age=50, stages=(30, 25, 25, 20)), "Enthusiastic Explorers"),
    (_profile(age=50, tenure=10, stages=(20, 30, 25, 25)), "Thoughtful Contributors"),
    (_profile(age=50, stages=(20, 25, 30, 25)), "Transitioning Professionals"),
    (_profile(age=50, tenure=5, stages=(20, 25, 25, 30)), "Stable Performers"),
])
def test_rule_table(profile, expected):
    assert classify_profile(profile).name == expected


def test_rule_order_first_match_wins():
    # Young with strong honeymoon AND strong soul-searching: rule 1 fires first
    p = _profile(age=28, stages=(36, 0, 34, 30))
    assert classify_profile(p).name == "Enthusiastic Newcomers"


def test_catch_all_description_mentions_dominant_stage():
    persona = classify_profile(_profile(age=50, stages=(20, 25, 30, 25)))
    assert persona.description == "Employees with 30.0% soul searching characteristics"
    assert persona.characteristics[-1] == "Dominant stage: soul-searching (30.0%)"


def test_clear_and_stable_mentions_size():
    persona = classify_profile(_profile(strength=55, stability=75, size=12))
    assert "12 employees" in persona.characteristics


def test_each_rule_is_independently_testable():
    rule = next(r for r in PERSONA_RULES if r.name == "Settling-In Newcomers")
    assert rule.matches(_profile(tenure=1.5, stability=45))
    assert not rule.matches(_profile(tenure=3.0, stability=45))
    assert PERSONA_RULES[-1].matches(_profile())


def test_custom_rule_table_without_catch_all_still_classifies():
    persona = classify_profile(_profile(age=50, stages=(20, 25, 30, 25)), rules=[])
    assert persona.name == "Transitioning Professionals"


def test_every_cluster_gets_characteristics(synthetic_population):
    from workforce_personas.clustering import perform_clustering
    from workforce_personas.stats import SeededRandom

    result = perform_clustering(synthetic_population, 7, rng=SeededRandom(42), verbose=False)
    for cluster in result:
        if cluster.size:
            assert cluster.persona_name
            assert cluster.description
            assert 3 <= len(cluster.characteristics) <= 4
            assert 2 <= len(cluster.recommendations) <= 3
