"""Movement helpers: reachability, move legality and plain moves."""
from __future__ import annotations

import heapq
import logging
from typing import Dict, List, Optional, Tuple

from .errors import MovementError
from .game_models import GameState, Tile, Unit, UniqueType
from .map.coordinates import Position, axial_neighbors

logger = logging.getLogger(__name__)


class UnitMovement:
    """Reference movement executor over a :class:`GameState`."""

    def __init__(self, state: GameState) -> None:
        self.state = state

    # --- reachability -----------------------------------------------------
    def get_distance_to_tiles(self, unit: Unit) -> Dict[Position, float]:
        """Return ``{position: movement left after getting there}`` for this turn.

        Entering a tile costs its ``movement_cost``; a unit with any movement
        left may always enter a passable neighbour, ending with 0 if the cost
        exceeds what remains.  The unit's own tile is included.
        """
        if unit.position is None:
            return {}
        start = unit.position
        budget = float(unit.current_movement or 0.0)
        best: Dict[Position, float] = {start: budget}
        heap: List[Tuple[float, Position]] = [(-budget, start)]
        while heap:
            neg_left, pos = heapq.heappop(heap)
            left = -neg_left
            if left < best.get(pos, -1.0) or left <= 0:
                continue
            if pos != start and not self._can_pass_through(unit, self.state.tiles[pos]):
                continue
            for nb in axial_neighbors(*pos).values():
                tile = self.state.tile(nb)
                if tile is None or not self._can_enter(unit, tile):
                    continue
                remaining = max(0.0, left - float(tile.movement_cost))
                if remaining > best.get(nb, -1.0):
                    best[nb] = remaining
                    heapq.heappush(heap, (-remaining, nb))
        return best

    def _can_enter(self, unit: Unit, tile: Tile) -> bool:
        if unit.is_water_unit():
            if tile.is_land and not (tile.city is not None and tile.city.owner == unit.owner):
                return False
        elif tile.is_water and not unit.is_embarked:
            return False
        if tile.city is not None and tile.city.owner != unit.owner:
            return False
        occupant = tile.military_unit
        if occupant is not None and occupant.owner != unit.owner:
            return False
        if unit.is_civilian() and tile.civilian_unit is not None and tile.civilian_unit.owner != unit.owner:
            return False
        return True

    def _can_pass_through(self, unit: Unit, tile: Tile) -> bool:
        # an enemy civilian stops movement: entering it is a capture
        civilian = tile.civilian_unit
        return civilian is None or civilian.owner == unit.owner

    # --- legality -----------------------------------------------------------
    def can_move_to(self, unit: Unit, tile: Tile) -> bool:
        if not self._can_enter(unit, tile):
            return False
        if unit.is_civilian():
            return tile.civilian_unit is None or tile.civilian_unit is unit
        if tile.military_unit is not None and tile.military_unit is not unit:
            return False
        civilian = tile.civilian_unit
        if civilian is not None and civilian.owner != unit.owner:
            return self.state.is_at_war(unit.owner, civilian.owner)
        return True

    def can_reach_in_current_turn(self, unit: Unit, tile: Tile) -> bool:
        return tile.position in self.get_distance_to_tiles(unit) and self.can_move_to(unit, tile)

    # --- orders -------------------------------------------------------------
    def move_to_tile(self, unit: Unit, tile: Tile) -> None:
        """Move ``unit`` onto ``tile`` this turn, capturing an enemy civilian there.

        Raises:
            MovementError: If the tile cannot be reached or entered this turn
        """
        distances = self.get_distance_to_tiles(unit)
        if tile.position not in distances or not self.can_move_to(unit, tile):
            raise MovementError(f"{unit.name} ({unit.id}) cannot move to {tile.position}")

        origin = unit.position
        captured = self.capture_civilian(unit, tile)
        self.state.move_unit(unit, tile.position)
        unit.current_movement = distances[tile.position]
        if unit.is_land_unit():
            unit.is_embarked = tile.is_water
        self.state.order_log.append({
            "turn": self.state.turn,
            "order": "move",
            "unit": unit.id,
            "from": origin,
            "to": tile.position,
            "captured": captured,
        })
        logger.info("%s (%s) moves %s -> %s", unit.name, unit.id, origin, tile.position)

    def capture_civilian(self, unit: Unit, tile: Tile) -> Optional[str]:
        civilian = tile.civilian_unit
        if unit.is_civilian() or civilian is None or civilian.owner == unit.owner:
            return None
        if civilian.has_unique(UniqueType.UNCAPTURABLE):
            self.state.remove_unit(civilian)
            logger.info("%s (%s) destroys %s (%s)", unit.name, unit.id, civilian.name, civilian.id)
        else:
            civilian.owner = unit.owner
            civilian.current_movement = 0.0
            logger.info("%s (%s) captures %s (%s)", unit.name, unit.id, civilian.name, civilian.id)
        return civilian.id


__all__ = ["UnitMovement"]
