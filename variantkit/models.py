"""Data models exchanged with the collector service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_INT = (int,)
_NUMBER = (int, float)
_STR = (str,)
_BOOL = (bool,)
_LIST = (list,)
_DICT = (dict,)


def _field(data: dict, key: str, kinds: tuple, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if (isinstance(value, bool) and bool not in kinds) or not isinstance(value, kinds):
        raise TypeError(f"field {key!r} has unexpected type {type(value).__name__}")
    return value


def _require_dict(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"{what} must be an object, not {type(data).__name__}")
    return data


def _floats(data: dict, key: str) -> list[float]:
    values = _field(data, key, _LIST, [])
    result = []
    for value in values:
        if isinstance(value, bool) or not isinstance(value, _NUMBER):
            raise TypeError(f"field {key!r} must hold numbers")
        result.append(float(value))
    return result


def _canonical(value: Any) -> Any:
    """Order mapping keys so free-form values serialize deterministically."""
    if isinstance(value, dict):
        return {str(key): _canonical(value[key]) for key in sorted(value, key=str)}
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    return value


@dataclass
class Unit:
    type: str = ""
    uid: str = ""

    def _to_dict(self) -> dict:
        return {"type": self.type, "uid": self.uid}


@dataclass
class Attribute:
    name: str = ""
    value: Any = None
    set_at: int = 0

    def _to_dict(self) -> dict:
        result: dict[str, Any] = {"name": self.name}
        if self.value is not None:
            result["value"] = _canonical(self.value)
        result["setAt"] = self.set_at
        return result


@dataclass
class GoalAchievement:
    name: str = ""
    achieved_at: int = 0
    properties: dict[str, Any] | None = None

    def _to_dict(self) -> dict:
        result: dict[str, Any] = {"name": self.name, "achievedAt": self.achieved_at}
        if self.properties:
            result["properties"] = _canonical(self.properties)
        return result


@dataclass
class Exposure:
    id: int = 0
    name: str = ""
    unit: str = ""
    variant: int = 0
    exposed_at: int = 0
    assigned: bool = False
    eligible: bool = False
    overridden: bool = False
    full_on: bool = False
    custom: bool = False
    audience_mismatch: bool = False

    def _to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "unit": self.unit,
            "variant": self.variant,
            "exposedAt": self.exposed_at,
            "assigned": self.assigned,
            "eligible": self.eligible,
            "overridden": self.overridden,
            "fullOn": self.full_on,
            "custom": self.custom,
            "audienceMismatch": self.audience_mismatch,
        }


@dataclass
class ExperimentApplication:
    name: str = ""


@dataclass
class ExperimentVariant:
    name: str = ""
    config: str = ""


@dataclass
class Experiment:
    id: int = 0
    name: str = ""
    unit_type: str = ""
    iteration: int = 0
    seed_hi: int = 0
    seed_lo: int = 0
    split: list[float] = field(default_factory=list)
    traffic_seed_hi: int = 0
    traffic_seed_lo: int = 0
    traffic_split: list[float] = field(default_factory=list)
    full_on_variant: int = 0
    applications: list[ExperimentApplication] = field(default_factory=list)
    variants: list[ExperimentVariant] = field(default_factory=list)
    audience_strict: bool = False
    audience: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Experiment:
        """Build an experiment from its JSON object; absent fields take zero values."""
        data = _require_dict(data, "experiment")
        applications = [
            ExperimentApplication(name=_field(_require_dict(item, "application"), "name", _STR, ""))
            for item in _field(data, "applications", _LIST, [])
        ]
        variants = []
        for item in _field(data, "variants", _LIST, []):
            item = _require_dict(item, "variant")
            variants.append(
                ExperimentVariant(
                    name=_field(item, "name", _STR, ""),
                    config=_field(item, "config", _STR, ""),
                )
            )
        return cls(
            id=_field(data, "id", _INT, 0),
            name=_field(data, "name", _STR, ""),
            unit_type=_field(data, "unitType", _STR, ""),
            iteration=_field(data, "iteration", _INT, 0),
            seed_hi=_field(data, "seedHi", _INT, 0),
            seed_lo=_field(data, "seedLo", _INT, 0),
            split=_floats(data, "split"),
            traffic_seed_hi=_field(data, "trafficSeedHi", _INT, 0),
            traffic_seed_lo=_field(data, "trafficSeedLo", _INT, 0),
            traffic_split=_floats(data, "trafficSplit"),
            full_on_variant=_field(data, "fullOnVariant", _INT, 0),
            applications=applications,
            variants=variants,
            audience_strict=_field(data, "audienceStrict", _BOOL, False),
            audience=_field(data, "audience", _STR, ""),
        )


@dataclass
class ContextData:
    experiments: list[Experiment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> ContextData:
        """Build context data from its JSON object."""
        data = _require_dict(data, "context data")
        return cls(
            experiments=[Experiment.from_dict(item) for item in _field(data, "experiments", _LIST, [])]
        )


@dataclass
class PublishEvent:
    hashed: bool = False
    units: list[Unit] = field(default_factory=list)
    published_at: int = 0
    exposures: list[Exposure] = field(default_factory=list)
    goals: list[GoalAchievement] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the event as a JSON-ready dict in wire field order."""
        return {
            "hashed": self.hashed,
            "units": [unit._to_dict() for unit in self.units],
            "publishedAt": self.published_at,
            "exposures": [exposure._to_dict() for exposure in self.exposures],
            "goals": [goal._to_dict() for goal in self.goals],
            "attributes": [attribute._to_dict() for attribute in self.attributes],
        }