"""
Attack value of a tile held by units.

Two algorithms share this module. ``baseline`` is the classic flat table:
a fixed value per occupant kind, a bonus for one-hit kills and a penalty per
extra attack needed. ``refined`` weighs the whole exchange: relative military
might of the two factions, damage taken and dealt as raw points and as a
share of health, and what the civilians on the tile are worth.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import TargetingContractError
from ..game_models import AttackableTile, Tile, Unit, UniqueType
from ..numeric import round_half_up, trunc_div
from ..value.weights import AttackWeights, ScoringPolicy

if TYPE_CHECKING:
    from ..context import BattleContext


def unit_attack_value(ctx: "BattleContext", attacker: Unit, attackable: AttackableTile) -> int:
    if ctx.policy is ScoringPolicy.BASELINE:
        return baseline_unit_attack_value(ctx, attacker, attackable)
    return refined_unit_attack_value(ctx, attacker, attackable)


def _occupants(attackable: AttackableTile):
    tile = attackable.tile_to_attack
    if tile.military_unit is None and tile.civilian_unit is None:
        raise TargetingContractError(f"No unit to attack at {tile.position}")
    return tile, tile.military_unit, tile.civilian_unit


# --- baseline -------------------------------------------------------------
def baseline_unit_attack_value(ctx: "BattleContext", attacker: Unit, attackable: AttackableTile) -> int:
    w = ctx.weights
    tile, military, civilian = _occupants(attackable)

    if military is not None:
        attack_value = w.military_base_value
        damage = ctx.predictor.damage_to_defender(attacker, military)
        if damage > 0:
            attacks_to_kill = military.health / damage
        else:
            attacks_to_kill = float(w.attacks_to_kill_max)
        attacks_to_kill = min(max(attacks_to_kill, w.attacks_to_kill_min), w.attacks_to_kill_max)
        if attacks_to_kill <= 1:
            attack_value += w.one_hit_kill_bonus
        else:
            attack_value -= int(attacks_to_kill * w.attacks_to_kill_penalty)
    else:
        attack_value = w.civilian_base_value
        if attacker.is_melee() or ctx.movement.can_reach_in_current_turn(attacker, tile):
            if civilian.is_great_person():
                attack_value += w.great_person_capture_bonus
            if civilian.has_unique(UniqueType.FOUND_CITY):
                attack_value += w.settler_capture_bonus
        elif attacker.is_ranged() and not civilian.has_unique(UniqueType.UNCAPTURABLE):
            # rather wait and capture it with a melee unit
            return w.ranged_civilian_value

    # prefer attacks that leave movement to spare
    attack_value += int(attackable.movement_left_after_moving_to_attack_tile * w.movement_left_bonus)
    return attack_value


# --- refined --------------------------------------------------------------
def refined_unit_attack_value(ctx: "BattleContext", attacker: Unit, attackable: AttackableTile) -> int:
    w = ctx.weights
    tile, military, civilian = _occupants(attackable)
    predictor = ctx.predictor

    attack_value = 0
    kills_escort = False
    if military is not None:
        attack_value += force_ratio_value(ctx, attacker, military)

        damage_to_attacker = predictor.damage_to_attacker(attacker, military)
        percent_to_attacker = 100 * damage_to_attacker // max(1, attacker.health)
        attack_value -= min(damage_to_attacker, w.damage_cap) // w.damage_divisor
        attack_value -= min(percent_to_attacker, w.damage_cap) // w.damage_divisor
        if percent_to_attacker >= 100:
            attack_value -= w.suicide_penalty

        damage_to_defender = predictor.damage_to_defender(attacker, military)
        percent_to_defender = 100 * damage_to_defender // max(1, military.health)
        attack_value += min(damage_to_defender, w.damage_cap) // w.damage_divisor
        attack_value += min(percent_to_defender, w.damage_cap) // w.damage_divisor
        if percent_to_defender >= 100:
            attack_value += w.kill_bonus
            kills_escort = True

    if civilian is not None and (military is None or (attacker.is_melee() and kills_escort)):
        attack_value += civilian_attack_value(ctx, attacker, tile, civilian, engaged_escort=military is not None)

    # moving costs us movement that could go elsewhere
    movement_cost = float(attacker.current_movement or 0.0) - attackable.movement_left_after_moving_to_attack_tile
    attack_value -= round_half_up(w.movement_cost_penalty * movement_cost)
    attack_value += w.movement_compensation
    return attack_value


def force_ratio_value(ctx: "BattleContext", attacker: Unit, defender: Unit) -> int:
    """Reward attacking a weaker faction, penalise poking a stronger one."""
    w = ctx.weights
    ratio = force_ratio(
        ctx.state.force_ranking(attacker.owner),
        ctx.state.force_ranking(defender.owner),
        w,
    )
    scale = w.force_ratio_scale
    if ratio >= 1:
        return round_half_up(scale * ratio) - scale
    return -(round_half_up(scale / ratio) - scale)


def force_ratio(attacker_force: float, defender_force: float, w: AttackWeights) -> float:
    if defender_force <= 0:
        return w.force_ratio_max if attacker_force > 0 else 1.0
    return min(max(attacker_force / defender_force, w.force_ratio_min), w.force_ratio_max)


def civilian_damage_percent(civilian: Unit, w: AttackWeights) -> int:
    """Weight of one point of damage to ``civilian``, in percent."""
    if civilian.is_great_person():
        return w.great_person_damage_percent
    if civilian.has_unique(UniqueType.FOUND_CITY):
        return w.settler_damage_percent
    if civilian.has_unique(UniqueType.UNCAPTURABLE):
        return w.uncapturable_damage_percent
    return w.capturable_damage_percent


def civilian_attack_value(
    ctx: "BattleContext",
    attacker: Unit,
    tile: Tile,
    civilian: Unit,
    engaged_escort: bool = False,
) -> int:
    w = ctx.weights
    percent = civilian_damage_percent(civilian, w)

    # values are kept in hundredths until the very end
    kill_value = (w.civilian_kill_damage + civilian.health) * percent
    if civilian.has_unique(UniqueType.UNCAPTURABLE):
        capture_value = abs(kill_value) * w.uncapturable_capture_multiplier
    else:
        capture_value = abs(kill_value) * w.capture_multiplier

    if engaged_escort or ctx.movement.can_reach_in_current_turn(attacker, tile):
        return trunc_div(capture_value, 100)

    damage = min(ctx.predictor.damage_to_defender(attacker, civilian), civilian.health)
    if damage < civilian.health:
        return trunc_div(damage * percent, 100)
    return trunc_div(kill_value, 100)


__all__ = [
    "unit_attack_value",
    "baseline_unit_attack_value",
    "refined_unit_attack_value",
    "force_ratio",
    "force_ratio_value",
    "civilian_damage_percent",
    "civilian_attack_value",
]
