from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol

from .game_models import AttackableTile, Combatant, GameState, Tile, Unit
from .map.coordinates import Position
from .value.weights import AttackWeights, ScoringPolicy, load_weights


class CandidateProvider(Protocol):
    def get_attackable_enemies(
        self,
        unit: Unit,
        distance_to_tiles: Dict[Position, float],
        stay_on_tile: bool = False,
    ) -> List[AttackableTile]: ...


class OutcomePredictor(Protocol):
    def damage_to_attacker(self, attacker: Unit, defender: Combatant) -> int: ...

    def damage_to_defender(self, attacker: Unit, defender: Combatant) -> int: ...


class MovementExecutor(Protocol):
    def get_distance_to_tiles(self, unit: Unit) -> Dict[Position, float]: ...

    def can_move_to(self, unit: Unit, tile: Tile) -> bool: ...

    def can_reach_in_current_turn(self, unit: Unit, tile: Tile) -> bool: ...

    def move_to_tile(self, unit: Unit, tile: Tile) -> None: ...


class BattleExecutor(Protocol):
    def move_and_attack(self, attacker: Unit, attackable: AttackableTile) -> None: ...


@dataclass(frozen=True)
class BattleContext:
    """World snapshot plus the collaborators one decision reads and commands."""

    state: GameState
    candidates: CandidateProvider
    predictor: OutcomePredictor
    movement: MovementExecutor
    battle: BattleExecutor
    policy: ScoringPolicy
    weights: AttackWeights

    @classmethod
    def create(
        cls,
        state: GameState,
        policy: ScoringPolicy | str = ScoringPolicy.REFINED,
        weights: Optional[AttackWeights] = None,
        predictor: Optional[OutcomePredictor] = None,
    ) -> "BattleContext":
        """Wire the reference collaborators around ``state``."""
        from .movement import UnitMovement
        from .simulators.battle import Battle
        from .simulators.combat import DamagePredictor
        from .targeting import TargetHelper

        policy = ScoringPolicy.parse(policy)
        predictor = predictor or DamagePredictor()
        movement = UnitMovement(state)
        return cls(
            state=state,
            candidates=TargetHelper(state, movement),
            predictor=predictor,
            movement=movement,
            battle=Battle(state, predictor, movement),
            policy=policy,
            weights=weights or load_weights(policy),
        )


__all__ = [
    "CandidateProvider",
    "OutcomePredictor",
    "MovementExecutor",
    "BattleExecutor",
    "BattleContext",
]
