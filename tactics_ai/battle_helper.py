"""
Per-unit attack decisions.

:class:`AttackOrchestrator` turns "is there something worth hitting from
here?" into at most one move or move-and-attack order.
:class:`RepositionAdvisor` lands an embarked melee unit on a tile it can
attack from next turn.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .context import BattleContext
from .game_models import AttackableTile, Unit, UniqueType
from .map.coordinates import Position
from .selection import choose_attack_target, min_attack_value_for_caution
from .value.weights import ScoringPolicy

logger = logging.getLogger(__name__)


def survives_exchange(ctx: BattleContext, unit: Unit, candidate: AttackableTile) -> bool:
    combatant = candidate.combatant
    if combatant is None:
        return False
    return ctx.predictor.damage_to_attacker(unit, combatant) < unit.health


class AttackOrchestrator:
    """Issue at most one attack order for a unit."""

    def __init__(self, ctx: BattleContext) -> None:
        self.ctx = ctx

    def attackable_enemies(
        self,
        unit: Unit,
        distance_to_tiles: Dict[Position, float],
        stay_on_tile: bool = False,
    ) -> List[AttackableTile]:
        """Candidates the unit survives, attacked from tiles that don't hurt it."""
        ctx = self.ctx
        candidates = ctx.candidates.get_attackable_enemies(unit, distance_to_tiles, stay_on_tile=stay_on_tile)
        if unit.has_unique(UniqueType.SELF_DESTRUCTS):
            return list(candidates)
        return [
            c for c in candidates
            if survives_exchange(ctx, unit, c) and c.tile_to_attack_from.terrain_damage <= 0
        ]

    def min_attack_value(self, caution: float) -> Optional[int]:
        if self.ctx.policy is ScoringPolicy.REFINED:
            return min_attack_value_for_caution(caution, self.ctx.weights)
        return None

    def try_attack_nearby_enemy(self, unit: Unit, stay_on_tile: bool = False, caution: float = 0.0) -> bool:
        """
        Attack the best target in reach, if any is worth it.

        Args:
            unit: Acting unit
            stay_on_tile: Only consider attacks from the unit's current tile
            caution: Refined-policy caution level in [0, 1]

        Returns:
            True if the unit has no movement left afterwards. This is not
            "did attack": a unit that attacked and may keep moving returns False.

        Raises:
            ValueError: If ``caution`` is outside [0, 1]
            MovementError: If the executor rejects the order
        """
        if unit.has_unique(UniqueType.CANNOT_ATTACK):
            return False
        ctx = self.ctx
        min_attack_value = self.min_attack_value(caution)

        distance_to_tiles = ctx.movement.get_distance_to_tiles(unit)
        candidates = self.attackable_enemies(unit, distance_to_tiles, stay_on_tile=stay_on_tile)
        target = choose_attack_target(ctx, unit, candidates, min_attack_value=min_attack_value)
        if target is None:
            logger.debug("%s (%s) finds nothing worth attacking", unit.name, unit.id)
            return not unit.has_movement()

        tile = target.tile_to_attack
        if (
            tile.military_unit is None
            and unit.is_ranged()
            and ctx.movement.can_move_to(unit, tile)
            and tile.position in distance_to_tiles
        ):
            # an undefended tile: walk in instead of shooting at it
            logger.info("%s (%s) moves onto undefended %s", unit.name, unit.id, tile.position)
            ctx.movement.move_to_tile(unit, tile)
        else:
            logger.info(
                "%s (%s) attacks %s from %s",
                unit.name, unit.id, tile.position, target.tile_to_attack_from.position,
            )
            ctx.battle.move_and_attack(unit, target)
        return not unit.has_movement()


class RepositionAdvisor:
    """Get an embarked melee unit ashore where it can strike next turn."""

    def __init__(self, ctx: BattleContext) -> None:
        self.ctx = ctx

    def try_disembark_unit_to_attack_position(self, unit: Unit) -> bool:
        """Return True if the unit was moved onto a land staging tile."""
        if not (unit.is_melee() and unit.is_land_unit() and unit.is_embarked):
            return False
        ctx = self.ctx

        distance_to_tiles = ctx.movement.get_distance_to_tiles(unit)
        candidates = [
            c for c in ctx.candidates.get_attackable_enemies(unit, distance_to_tiles)
            if survives_exchange(ctx, unit, c) and c.tile_to_attack_from.is_land
        ]
        target = choose_attack_target(ctx, unit, candidates)
        if target is None:
            return False

        staging = target.tile_to_attack_from
        logger.info("%s (%s) disembarks to %s to attack next turn", unit.name, unit.id, staging.position)
        ctx.movement.move_to_tile(unit, staging)
        return True


__all__ = ["AttackOrchestrator", "RepositionAdvisor", "survives_exchange"]
