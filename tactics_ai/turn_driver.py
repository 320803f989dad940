"""
One faction's combat turn.

Each military unit first tries to get ashore into an attacking position; a unit
that did not reposition then attacks as many times as it has attacks left,
stopping as soon as it runs out of movement or finds nothing worth hitting.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .battle_helper import AttackOrchestrator, RepositionAdvisor
from .context import BattleContext
from .game_models import AttackableTile, Unit, UniqueType
from .selection import rank_attack_targets

logger = logging.getLogger(__name__)


@dataclass
class UnitDecision:
    unit_id: str
    unit_name: str
    repositioned: bool = False
    attacks: int = 0
    out_of_movement: bool = False
    removed: bool = False
    considered: List[Dict[str, Any]] = field(default_factory=list)
    orders: List[Dict[str, Any]] = field(default_factory=list)

    def summary(self) -> str:
        if self.removed:
            return "lost in combat"
        if self.repositioned:
            return "repositioned to attack next turn"
        if self.attacks:
            return f"attacked {self.attacks}x"
        if self.orders:
            return "moved to capture"
        return "no action"


def describe_candidates(ranked: Sequence[Tuple[AttackableTile, int]]) -> List[Dict[str, Any]]:
    out = []
    for candidate, value in ranked:
        target = candidate.combatant
        out.append({
            "target": target.id if target is not None else None,
            "target_name": target.name if target is not None else None,
            "at": candidate.tile_to_attack.position,
            "from": candidate.tile_to_attack_from.position,
            "movement_left": candidate.movement_left_after_moving_to_attack_tile,
            "value": value,
        })
    return out


def automate_unit(ctx: BattleContext, unit: Unit, caution: float = 0.0) -> UnitDecision:
    state = ctx.state
    log_start = len(state.order_log)
    decision = UnitDecision(unit_id=unit.id, unit_name=unit.name)
    orchestrator = AttackOrchestrator(ctx)

    decision.repositioned = RepositionAdvisor(ctx).try_disembark_unit_to_attack_position(unit)
    if not decision.repositioned and not unit.has_unique(UniqueType.CANNOT_ATTACK):
        attacks_at_start = unit.attacks_this_turn
        for _ in range(max(0, unit.max_attacks_per_turn - unit.attacks_this_turn)):
            if unit.position is None or not unit.has_movement():
                break
            distance_to_tiles = ctx.movement.get_distance_to_tiles(unit)
            ranked = rank_attack_targets(ctx, unit, orchestrator.attackable_enemies(unit, distance_to_tiles))
            decision.considered.extend(describe_candidates(ranked))

            attacks_before = unit.attacks_this_turn
            out_of_movement = orchestrator.try_attack_nearby_enemy(unit, caution=caution)
            if out_of_movement or unit.attacks_this_turn == attacks_before:
                break
        decision.attacks = unit.attacks_this_turn - attacks_at_start

    decision.removed = unit.position is None
    decision.out_of_movement = not unit.has_movement()
    decision.orders = state.order_log[log_start:]
    logger.debug("%s (%s): %s", unit.name, unit.id, decision.summary())
    return decision


def automate_faction_turn(ctx: BattleContext, faction: str, caution: float = 0.0) -> List[UnitDecision]:
    """
    Run the combat part of ``faction``'s turn against ``ctx.state``.

    Units act in id order. A unit lost earlier in the same turn is skipped.

    Raises:
        ValueError: If ``faction`` is not part of the scenario
    """
    units = sorted((u for u in ctx.state.units_of(faction) if u.is_military()), key=lambda u: u.id)
    if not units and faction not in ctx.state.factions:
        raise ValueError(f"Unknown faction '{faction}'. Known factions: {', '.join(sorted(ctx.state.factions))}")

    decisions: List[UnitDecision] = []
    for unit in units:
        if unit.position is None:
            continue
        decisions.append(automate_unit(ctx, unit, caution=caution))
    return decisions


__all__ = ["UnitDecision", "automate_unit", "automate_faction_turn", "describe_candidates"]
