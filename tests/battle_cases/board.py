"""Hand-built boards and stub collaborators for the battle tests."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from tactics_ai.context import BattleContext
from tactics_ai.game_models import AttackableTile, City, Faction, GameState, Tile, Unit, UnitType


def make_board(
    width: int = 6,
    height: int = 6,
    terrain: str = "grassland",
    wars: Iterable[Tuple[str, str]] = (("red", "blue"),),
) -> GameState:
    state = GameState()
    for r in range(height):
        for q in range(width):
            state.add_tile(Tile(position=(q, r), terrain=terrain))
    for a, b in wars:
        state.factions.setdefault(a, Faction(name=a)).at_war_with.add(b)
        state.factions.setdefault(b, Faction(name=b)).at_war_with.add(a)
    return state


def set_terrain(state: GameState, positions: Iterable[Tuple[int, int]], terrain: str, **kw: Any) -> None:
    for pos in positions:
        state.add_tile(Tile(position=pos, terrain=terrain, **kw))


def add_unit(
    state: GameState,
    uid: str,
    owner: str,
    pos: Tuple[int, int],
    unit_type: str = "melee",
    **kw: Any,
) -> Unit:
    kw.setdefault("strength", 10)
    unit = Unit(id=uid, name=kw.pop("name", uid), owner=owner, unit_type=UnitType(unit_type), **kw)
    state.place_unit(unit, pos)
    return unit


def add_civilian(state: GameState, uid: str, owner: str, pos: Tuple[int, int], *uniques: str, **kw: Any) -> Unit:
    return add_unit(state, uid, owner, pos, unit_type="civilian", strength=0, uniques=set(uniques), **kw)


def add_city(state: GameState, cid: str, owner: str, pos: Tuple[int, int], **kw: Any) -> City:
    return state.add_city(City(id=cid, name=kw.pop("name", cid), owner=owner, position=pos, **kw))


def candidate(
    state: GameState,
    attack_from: Tuple[int, int],
    target: Tuple[int, int],
    movement_left: float = 2.0,
) -> AttackableTile:
    tile = state.tile(target)
    return AttackableTile(
        tile_to_attack_from=state.tile(attack_from),
        tile_to_attack=tile,
        movement_left_after_moving_to_attack_tile=movement_left,
        combatant=state.combatant_of_tile(tile),
    )


@dataclass
class StubPredictor:
    """Fixed damage numbers keyed by defender id, with a fallback."""

    to_attacker: Dict[str, int] = field(default_factory=dict)
    to_defender: Dict[str, int] = field(default_factory=dict)
    default_to_attacker: int = 0
    default_to_defender: int = 0
    calls: int = 0

    def damage_to_attacker(self, attacker, defender) -> int:
        self.calls += 1
        return self.to_attacker.get(defender.id, self.default_to_attacker)

    def damage_to_defender(self, attacker, defender) -> int:
        self.calls += 1
        return self.to_defender.get(defender.id, self.default_to_defender)


@dataclass
class RecordingProvider:
    """Wraps a candidate provider and remembers who asked."""

    inner: Any
    asked: List[str] = field(default_factory=list)

    def get_attackable_enemies(self, unit, distance_to_tiles, stay_on_tile: bool = False):
        self.asked.append(unit.id)
        return self.inner.get_attackable_enemies(unit, distance_to_tiles, stay_on_tile=stay_on_tile)


def make_context(
    state: GameState,
    policy: str = "refined",
    predictor: Optional[StubPredictor] = None,
) -> BattleContext:
    return BattleContext.create(state, policy=policy, predictor=predictor or StubPredictor())
