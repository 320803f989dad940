"""
Attack scoring: turn one candidate attack into an integer value.

Higher is better. The city and unit algorithms live in their own modules;
``score_attack`` picks one by what stands on the target tile.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import TargetingContractError
from ..game_models import AttackableTile, Unit
from .city import can_capture_city, city_attack_value
from .unit import (
    baseline_unit_attack_value,
    refined_unit_attack_value,
    unit_attack_value,
)

if TYPE_CHECKING:
    from ..context import BattleContext

logger = logging.getLogger(__name__)


def score_attack(ctx: "BattleContext", attacker: Unit, attackable: AttackableTile) -> int:
    """
    Score attacking ``attackable`` with ``attacker`` under ``ctx.policy``.

    Reads the world only; nothing in ``ctx.state`` changes.

    Raises:
        TargetingContractError: If the target tile holds no combatant
    """
    tile = attackable.tile_to_attack
    target = ctx.state.combatant_of_tile(tile)
    if target is None:
        raise TargetingContractError(f"Candidate at {tile.position} holds no combatant")

    if tile.is_city_center():
        value = city_attack_value(ctx, attacker, tile.city)
    else:
        value = unit_attack_value(ctx, attacker, attackable)
    logger.debug(
        "%s (%s) considers attacking %s at %s with value %d",
        attacker.name, attacker.id, target.name, tile.position, value,
    )
    return value


__all__ = [
    "score_attack",
    "can_capture_city",
    "city_attack_value",
    "unit_attack_value",
    "baseline_unit_attack_value",
    "refined_unit_attack_value",
]
