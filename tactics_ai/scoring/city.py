"""
Attack value of a city target.

Siege units will almost always want to hit a city; everyone else weighs the
city's remaining health against who else is standing around it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..game_models import City, Unit, UniqueType
from ..numeric import trunc_div

if TYPE_CHECKING:
    from ..context import BattleContext


def can_capture_city(attacker: Unit) -> bool:
    return attacker.is_melee() and not attacker.has_unique(UniqueType.CANNOT_CAPTURE_CITIES)


def city_attack_value(ctx: "BattleContext", attacker: Unit, city: City) -> int:
    """
    Returns a value which represents the attacker's motivation to attack a city.

    Args:
        ctx: Battle context; its weights decide the policy-specific constants
        attacker: Acting unit
        city: City whose center is the target tile

    Returns:
        Attack value; ``capture_city_value`` when the city falls this turn
    """
    w = ctx.weights
    can_capture = can_capture_city(attacker)

    if city.health == 1:
        # capture it now, or there is nothing left to gain
        return w.capture_city_value if can_capture else w.pointless_city_attack_value

    if can_capture and city.health <= max(1, ctx.predictor.damage_to_defender(attacker, city)):
        return w.capture_city_value

    if attacker.is_melee() and _would_die_attacking(ctx, attacker, city):
        return w.suicidal_city_attack_value

    attack_value = w.city_base_value
    if attacker.is_probably_siege_unit():
        attack_value += w.siege_city_bonus
    elif attacker.is_ranged():
        # ranged units don't take damage from the city
        attack_value += w.ranged_city_bonus
    # lower health cities are worth more
    attack_value -= trunc_div(city.health - w.city_health_pivot, w.city_health_divisor)

    state = ctx.state
    for tile in state.tiles_in_distance(city.position, w.city_defender_scan_radius):
        nearby = tile.military_unit
        if nearby is None:
            continue
        if state.is_at_war(nearby.owner, attacker.owner):
            attack_value -= w.enemy_near_city_penalty
        if state.is_at_war(nearby.owner, city.owner):
            attack_value += w.ally_near_city_bonus
    return attack_value


def _would_die_attacking(ctx: "BattleContext", attacker: Unit, city: City) -> bool:
    w = ctx.weights
    damage = ctx.predictor.damage_to_attacker(attacker, city)
    if attacker.health - damage * w.self_preservation_hits > 0:
        return False
    if attacker.has_unique(UniqueType.SELF_DESTRUCTS):
        return False

    # the more friendly units around the city, the more willing we are to just go
    friendly = sum(
        1
        for tile in ctx.state.tiles_in_distance(city.position, w.friendly_support_radius)
        if tile.military_unit is not None and tile.military_unit.owner == attacker.owner
    )
    if friendly >= w.friendly_support_threshold:
        return False
    if friendly == 0:
        # unbounded modifier: any damage at all is too much
        return damage > 0
    return attacker.health - damage * (1.0 + 1.0 / friendly) <= 0


__all__ = ["can_capture_city", "city_attack_value"]
