"""
Scoring policies and their weights tables.

Every constant the attack scorers use lives in ``weights.yaml``; this module
turns one policy's section into an immutable :class:`AttackWeights` record.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import yaml


class ScoringPolicy(str, Enum):
    BASELINE = "baseline"
    REFINED = "refined"

    @classmethod
    def parse(cls, value: "ScoringPolicy | str") -> "ScoringPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            available = ", ".join(p.value for p in cls)
            raise ValueError(
                f"Scoring policy '{value}' not found. "
                f"Available policies: {available}"
            ) from None


@dataclass(frozen=True)
class AttackWeights:
    # cities
    capture_city_value: int
    pointless_city_attack_value: int
    suicidal_city_attack_value: int
    city_base_value: int
    siege_city_bonus: int
    ranged_city_bonus: int
    city_health_pivot: int
    city_health_divisor: int
    city_defender_scan_radius: int
    enemy_near_city_penalty: int
    ally_near_city_bonus: int
    friendly_support_radius: int
    friendly_support_threshold: int
    self_preservation_hits: int
    # units, baseline algorithm
    military_base_value: int
    one_hit_kill_bonus: int
    attacks_to_kill_min: int
    attacks_to_kill_max: int
    attacks_to_kill_penalty: int
    civilian_base_value: int
    great_person_capture_bonus: int
    settler_capture_bonus: int
    ranged_civilian_value: int
    movement_left_bonus: int
    # units, refined algorithm
    force_ratio_min: float
    force_ratio_max: float
    force_ratio_scale: int
    damage_cap: int
    damage_divisor: int
    suicide_penalty: int
    kill_bonus: int
    great_person_damage_percent: int
    settler_damage_percent: int
    uncapturable_damage_percent: int
    capturable_damage_percent: int
    civilian_kill_damage: int
    capture_multiplier: int
    uncapturable_capture_multiplier: int
    movement_cost_penalty: int
    movement_compensation: int
    # selection
    default_min_attack_value: int
    min_attack_value_caution_0: int
    min_attack_value_caution_1: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AttackWeights":
        names = [f.name for f in fields(cls)]
        unknown = sorted(set(data) - set(names))
        if unknown:
            raise ValueError(f"Unknown weight keys: {', '.join(unknown)}")
        missing = [n for n in names if n not in data]
        if missing:
            raise ValueError(f"Missing weight keys: {', '.join(missing)}")
        kwargs = {}
        for f in fields(cls):
            kwargs[f.name] = float(data[f.name]) if f.type == "float" else int(data[f.name])
        return cls(**kwargs)


_TABLE_CACHE: Optional[Dict[str, Dict[str, Any]]] = None


def _default_weights_path() -> str:
    return os.path.join(os.path.dirname(__file__), "weights.yaml")


def load_weight_table(path: str | None = None) -> Dict[str, Dict[str, Any]]:
    """Load the raw ``{section: {key: value}}`` table (packaged file is cached)."""
    global _TABLE_CACHE
    if path is None and _TABLE_CACHE is not None:
        return _TABLE_CACHE

    with open(path or _default_weights_path(), "r", encoding="utf-8") as f:
        table = yaml.safe_load(f) or {}

    if path is None:
        _TABLE_CACHE = table
    return table


def load_weights(
    policy: ScoringPolicy | str,
    path: str | None = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> AttackWeights:
    """
    Build the weights for one scoring policy.

    Args:
        policy: Policy whose section is merged over ``common``
        path: Optional custom weights file with the same layout
        overrides: Optional flat ``{key: value}`` applied last

    Returns:
        Frozen :class:`AttackWeights`

    Raises:
        ValueError: If the policy is unknown or the merged table has
            unknown or missing keys
    """
    policy = ScoringPolicy.parse(policy)
    table = load_weight_table(path)
    merged = dict(table.get("common") or {})
    merged.update(table.get(policy.value) or {})
    merged.update(overrides or {})
    return AttackWeights.from_mapping(merged)


__all__ = [
    "ScoringPolicy",
    "AttackWeights",
    "load_weight_table",
    "load_weights",
]
