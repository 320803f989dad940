"""Attack resolution against the live :class:`GameState`.

Damage comes from the same predictor the scorers read, so a resolved attack
lands exactly where the engine expected it to.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import MovementError
from ..game_models import AttackableTile, City, Combatant, GameState, Unit, UniqueType
from ..movement import UnitMovement
from .combat import DamagePredictor

logger = logging.getLogger(__name__)


class Battle:
    """Reference battle executor: move to the staging tile, then attack."""

    def __init__(self, state: GameState, predictor: DamagePredictor, movement: UnitMovement) -> None:
        self.state = state
        self.predictor = predictor
        self.movement = movement

    def move_and_attack(self, attacker: Unit, attackable: AttackableTile) -> None:
        """
        Raises:
            MovementError: If the staging tile cannot be reached or the target
                tile no longer holds a combatant
        """
        staging = attackable.tile_to_attack_from
        if staging.position != attacker.position:
            self.movement.move_to_tile(attacker, staging)
        defender = self.state.combatant_of_tile(attackable.tile_to_attack)
        if defender is None:
            raise MovementError(f"Nothing left to attack at {attackable.tile_to_attack.position}")
        self.attack(attacker, defender)

    def attack(self, attacker: Unit, defender: Combatant) -> Dict[str, Any]:
        target_tile = self.state.tile_of(defender)
        damage_to_defender = self.predictor.damage_to_defender(attacker, defender)
        damage_to_attacker = self.predictor.damage_to_attacker(attacker, defender)

        record: Dict[str, Any] = {
            "turn": self.state.turn,
            "order": "attack",
            "unit": attacker.id,
            "from": attacker.position,
            "target": defender.id,
            "at": target_tile.position,
            "damage_dealt": damage_to_defender,
            "damage_taken": damage_to_attacker,
        }

        if isinstance(defender, City):
            survives = attacker.health - damage_to_attacker > 0
            self._damage_city(attacker, defender, damage_to_defender, survives, record)
        elif defender.is_civilian() and attacker.is_melee():
            # melee contact with a lone civilian is a capture, not a fight
            damage_to_attacker = 0
            record["damage_taken"] = 0
            self._advance(attacker, target_tile.position, record)
        else:
            defender.health -= damage_to_defender
            if defender.health <= 0:
                self.state.remove_unit(defender)
                record["killed"] = defender.id
                if attacker.is_melee():
                    self._advance(attacker, target_tile.position, record)

        attacker.health -= damage_to_attacker
        attacker.attacks_this_turn += 1
        if attacker.health <= 0 or attacker.has_unique(UniqueType.SELF_DESTRUCTS):
            self.state.remove_unit(attacker)
            attacker.current_movement = 0.0
            record["attacker_removed"] = True
        elif attacker.has_unique(UniqueType.CAN_MOVE_AFTER_ATTACKING):
            attacker.current_movement = max(0.0, float(attacker.current_movement or 0.0) - 1.0)
        else:
            attacker.current_movement = 0.0

        self.state.order_log.append(record)
        logger.info(
            "%s (%s) attacks %s (%s): dealt %d, took %d",
            attacker.name, attacker.id, defender.name, defender.id,
            damage_to_defender, damage_to_attacker,
        )
        return record

    def _damage_city(
        self,
        attacker: Unit,
        city: City,
        damage: int,
        attacker_survives: bool,
        record: Dict[str, Any],
    ) -> None:
        # cities bottom out at 1 HP; only a surviving melee unit can take them
        city.health = max(1, city.health - damage)
        can_capture = attacker.is_melee() and not attacker.has_unique(UniqueType.CANNOT_CAPTURE_CITIES)
        if city.health == 1 and can_capture and attacker_survives:
            record["captured_city"] = city.id
            city.owner = attacker.owner
            city.health = city.max_health // 2
            self._advance(attacker, city.position, record)

    def _advance(self, attacker: Unit, position, record: Dict[str, Any]) -> None:
        tile = self.state.tile(position)
        garrison = tile.military_unit
        if garrison is not None and garrison.owner != attacker.owner:
            self.state.remove_unit(garrison)
            record["killed"] = garrison.id
        captured = self.movement.capture_civilian(attacker, tile)
        if captured:
            record["captured"] = captured
        self.state.move_unit(attacker, position)


__all__ = ["Battle"]
