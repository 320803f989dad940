"""Enumeration of attackable tiles for a unit this turn."""
from __future__ import annotations

from typing import Dict, List, Set, Tuple

from .game_models import AttackableTile, GameState, Tile, Unit
from .map.coordinates import Position
from .movement import UnitMovement


class TargetHelper:
    """Reference candidate provider.

    Staging tiles are visited in order of movement left (most first), so each
    target is paired with the cheapest tile to attack it from.
    """

    def __init__(self, state: GameState, movement: UnitMovement) -> None:
        self.state = state
        self.movement = movement

    def get_attackable_enemies(
        self,
        unit: Unit,
        distance_to_tiles: Dict[Position, float],
        stay_on_tile: bool = False,
    ) -> List[AttackableTile]:
        if unit.position is None:
            return []
        attack_range = 1 if unit.is_melee() else max(1, unit.range)

        attackable: List[AttackableTile] = []
        with_enemies: Set[Position] = set()
        without_enemies: Set[Position] = set()
        for staging, movement_left in self._tiles_to_attack_from(unit, distance_to_tiles, stay_on_tile):
            for tile in self.state.tiles_in_distance(staging.position, attack_range):
                if tile.position == staging.position:
                    continue
                if tile.position in with_enemies or tile.position in without_enemies:
                    continue
                if not self.contains_attackable_enemy(unit, tile):
                    without_enemies.add(tile.position)
                    continue
                attackable.append(
                    AttackableTile(
                        tile_to_attack_from=staging,
                        tile_to_attack=tile,
                        movement_left_after_moving_to_attack_tile=movement_left,
                        combatant=self.state.combatant_of_tile(tile),
                    )
                )
                with_enemies.add(tile.position)
        return attackable

    def _tiles_to_attack_from(
        self,
        unit: Unit,
        distance_to_tiles: Dict[Position, float],
        stay_on_tile: bool,
    ) -> List[Tuple[Tile, float]]:
        current = self.state.tile_of(unit)
        if stay_on_tile:
            movement = float(unit.current_movement or 0.0)
            return [(current, movement)] if movement > 0 else []

        out: List[Tuple[Tile, float]] = []
        for pos, movement_left in distance_to_tiles.items():
            if movement_left <= 0:
                continue
            tile = self.state.tile(pos)
            if tile is None:
                continue
            if tile is not current and not self.movement.can_move_to(unit, tile):
                continue
            # moving onto an enemy civilian is a capture, not a place to attack from
            if tile.civilian_unit is not None and tile.civilian_unit.owner != unit.owner:
                continue
            out.append((tile, movement_left))
        out.sort(key=lambda item: (-item[1], item[0].position))
        return out

    def contains_attackable_enemy(self, unit: Unit, tile: Tile) -> bool:
        combatant = self.state.combatant_of_tile(tile)
        if combatant is None or combatant.owner == unit.owner:
            return False
        if not self.state.is_at_war(unit.owner, combatant.owner):
            return False
        if unit.is_melee():
            if unit.is_land_unit() and tile.is_water:
                return False
            if unit.is_water_unit() and tile.is_land and not tile.is_city_center():
                return False
        return True


__all__ = ["TargetHelper"]
