"""Deterministic combat damage prediction.

This module implements the expected-damage side of a single melee or ranged
exchange.  Damage is centred on 30 points and scaled by the strength ratio of
the two sides; wounded units hit softer.  Nothing here mutates the combatants;
:class:`tactics_ai.simulators.battle.Battle` applies the numbers.
"""
from __future__ import annotations

from ..game_models import City, Combatant, Unit, UniqueType
from ..numeric import round_half_up

# Expected damage when both sides are equally strong.
BASE_DAMAGE = 30
# Flat damage a civilian takes from any attack.
DAMAGE_TO_CIVILIAN_UNIT = 40


def damage_modifier(attacker_to_defender_ratio: float, damage_to_attacker: bool) -> float:
    """Scale :data:`BASE_DAMAGE` by how lopsided the fight is.

    The stronger side deals more than 30 and the weaker side less; the factor
    grows with the fourth power of the stronger-to-weaker ratio.
    """
    ratio = attacker_to_defender_ratio
    stronger_to_weaker = ratio if ratio >= 1 else 1 / ratio
    modifier = (((stronger_to_weaker + 3) / 4) ** 4 + 1) / 2
    if (damage_to_attacker and ratio > 1) or (not damage_to_attacker and ratio < 1):
        modifier = 1 / modifier
    return BASE_DAMAGE * modifier


def health_dependant_damage_ratio(combatant: Combatant) -> float:
    if isinstance(combatant, City) or combatant.has_unique(UniqueType.NO_DAMAGE_PENALTY):
        return 1.0
    return 1 - (100 - combatant.health) / 300


def attacking_strength(attacker: Unit) -> int:
    return attacker.ranged_strength if attacker.is_ranged() else attacker.strength


def defending_strength(defender: Combatant) -> int:
    return defender.strength


class DamagePredictor:
    """Reference outcome predictor; pure function of the two combatants' stats."""

    def damage_to_attacker(self, attacker: Unit, defender: Combatant) -> int:
        if attacker.is_ranged():
            return 0
        if isinstance(defender, Unit) and defender.is_civilian():
            return 0
        ratio = self._ratio(attacker, defender)
        if ratio is None:
            return 0
        return round_half_up(damage_modifier(ratio, True) * health_dependant_damage_ratio(defender))

    def damage_to_defender(self, attacker: Unit, defender: Combatant) -> int:
        if isinstance(defender, Unit) and defender.is_civilian():
            return DAMAGE_TO_CIVILIAN_UNIT
        ratio = self._ratio(attacker, defender)
        if ratio is None:
            # defender has no strength at all
            return defender.health
        return round_half_up(damage_modifier(ratio, False) * health_dependant_damage_ratio(attacker))

    @staticmethod
    def _ratio(attacker: Unit, defender: Combatant) -> float | None:
        att = attacking_strength(attacker)
        dfn = defending_strength(defender)
        if dfn <= 0:
            return None
        if att <= 0:
            # cannot be 0 or the modifier divides by zero
            return 1 / 100
        return att / dfn


__all__ = [
    "BASE_DAMAGE",
    "DAMAGE_TO_CIVILIAN_UNIT",
    "damage_modifier",
    "health_dependant_damage_ratio",
    "DamagePredictor",
]
