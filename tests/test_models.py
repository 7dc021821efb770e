import pytest

from variantkit.models import (
    Attribute,
    ContextData,
    Experiment,
    ExperimentApplication,
    ExperimentVariant,
    Exposure,
    GoalAchievement,
    PublishEvent,
    Unit,
)


def test_experiment_from_dict_reads_camel_case_fields():
    experiment = Experiment.from_dict(
        {
            "id": 4,
            "name": "exp_test_fullon",
            "unitType": "session_id",
            "iteration": 1,
            "seedHi": 856061641,
            "seedLo": 990838475,
            "split": [0.25, 0.25, 0.25, 0.25],
            "trafficSeedHi": 360868579,
            "trafficSeedLo": 330937933,
            "trafficSplit": [0, 1],
            "fullOnVariant": 2,
            "applications": [{"name": "website"}],
            "variants": [{"name": "A", "config": None}, {"name": "B", "config": "{}"}],
            "audienceStrict": True,
            "audience": "null",
        }
    )
    assert experiment == Experiment(
        id=4,
        name="exp_test_fullon",
        unit_type="session_id",
        iteration=1,
        seed_hi=856061641,
        seed_lo=990838475,
        split=[0.25, 0.25, 0.25, 0.25],
        traffic_seed_hi=360868579,
        traffic_seed_lo=330937933,
        traffic_split=[0.0, 1.0],
        full_on_variant=2,
        applications=[ExperimentApplication(name="website")],
        variants=[ExperimentVariant(name="A", config=""), ExperimentVariant(name="B", config="{}")],
        audience_strict=True,
        audience="null",
    )
    assert all(isinstance(value, float) for value in experiment.traffic_split)


def test_missing_fields_take_zero_values():
    assert Experiment.from_dict({}) == Experiment()
    assert ContextData.from_dict({"experiments": None}) == ContextData()


def test_unknown_fields_are_ignored():
    data = ContextData.from_dict({"experiments": [{"name": "x", "extra": [1]}], "other": 1})
    assert data.experiments == [Experiment(name="x")]


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "one"},
        {"name": 5},
        {"seedHi": True},
        {"split": [0.5, "half"]},
        {"audienceStrict": 1},
        {"variants": ["A"]},
    ],
)
def test_wrong_types_raise(payload):
    with pytest.raises(TypeError):
        Experiment.from_dict(payload)


def test_context_data_requires_object():
    with pytest.raises(TypeError):
        ContextData.from_dict([])


def test_publish_event_field_order():
    event = PublishEvent(units=[Unit(type="session_id", uid="abc")], exposures=[Exposure(name="e")])
    result = event.to_dict()
    assert list(result) == ["hashed", "units", "publishedAt", "exposures", "goals", "attributes"]
    assert result["units"] == [{"type": "session_id", "uid": "abc"}]
    assert list(result["exposures"][0]) == [
        "id",
        "name",
        "unit",
        "variant",
        "exposedAt",
        "assigned",
        "eligible",
        "overridden",
        "fullOn",
        "custom",
        "audienceMismatch",
    ]


def test_empty_optional_fields_are_omitted():
    event = PublishEvent(
        goals=[GoalAchievement(name="g", achieved_at=1, properties={}), GoalAchievement(name="h")],
        attributes=[Attribute(name="a", value=None, set_at=2), Attribute(name="b", value={}, set_at=3)],
    )
    result = event.to_dict()
    assert result["goals"] == [{"name": "g", "achievedAt": 1}, {"name": "h", "achievedAt": 0}]
    assert result["attributes"] == [
        {"name": "a", "setAt": 2},
        {"name": "b", "value": {}, "setAt": 3},
    ]


def test_free_form_maps_are_key_sorted():
    goal = GoalAchievement(name="g", properties={"b": 1, "a": {"z": 1, "y": [{"d": 1, "c": 2}]}})
    properties = PublishEvent(goals=[goal]).to_dict()["goals"][0]["properties"]
    assert list(properties) == ["a", "b"]
    assert list(properties["a"]) == ["y", "z"]
    assert list(properties["a"]["y"][0]) == ["c", "d"]