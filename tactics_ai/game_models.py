from __future__ import annotations
from dataclasses import dataclass, field, asdict, fields
from typing import Any, Dict, List, Optional, Set, Tuple, Union
from enum import Enum
import json

from .map.coordinates import Position, hexes_in_distance


class UnitType(str, Enum):
    MELEE = "melee"
    RANGED = "ranged"
    SIEGE = "siege"
    CIVILIAN = "civilian"


class UniqueType(str, Enum):
    """Declarative ability tags carried in ``Unit.uniques``."""

    CANNOT_ATTACK = "Cannot attack"
    CANNOT_CAPTURE_CITIES = "Cannot capture cities"
    SELF_DESTRUCTS = "Self-destructs when attacking"
    FOUND_CITY = "Founds a new city"
    UNCAPTURABLE = "Uncapturable"
    GREAT_PERSON = "Great Person"
    CAN_MOVE_AFTER_ATTACKING = "Can move after attacking"
    NO_DAMAGE_PENALTY = "No damage penalty for wounded units"


# terrain -> (is_land, movement_cost)
TERRAIN_DEFAULTS: Dict[str, Tuple[bool, float]] = {
    "grassland": (True, 1.0),
    "plains": (True, 1.0),
    "desert": (True, 1.0),
    "tundra": (True, 1.0),
    "hills": (True, 2.0),
    "forest": (True, 2.0),
    "jungle": (True, 2.0),
    "marsh": (True, 2.0),
    "coast": (False, 1.0),
    "ocean": (False, 1.0),
    "lake": (False, 1.0),
}


def _tag(tag: Union[UniqueType, str]) -> str:
    return tag.value if isinstance(tag, Enum) else str(tag)


@dataclass
class Faction:
    name: str
    at_war_with: Set[str] = field(default_factory=set)

    def is_at_war_with(self, other: "Faction") -> bool:
        if other.name == self.name:
            return False
        return other.name in self.at_war_with or self.name in other.at_war_with


@dataclass(eq=False)
class Unit:
    id: str
    name: str
    owner: str
    unit_type: UnitType = UnitType.MELEE
    domain: str = "land"  # land / water / air
    health: int = 100
    strength: int = 0
    ranged_strength: int = 0
    range: int = 1
    max_movement: float = 2.0
    current_movement: Optional[float] = None  # None -> full movement
    uniques: Set[str] = field(default_factory=set)
    is_embarked: bool = False
    position: Optional[Position] = None
    max_attacks_per_turn: int = 1
    attacks_this_turn: int = 0

    def __post_init__(self) -> None:
        self.unit_type = UnitType(self.unit_type)
        self.uniques = {_tag(u) for u in self.uniques}
        if self.current_movement is None:
            self.current_movement = float(self.max_movement)
        if self.position is not None:
            self.position = (int(self.position[0]), int(self.position[1]))

    # --- class flags ----------------------------------------------------
    def is_melee(self) -> bool:
        return self.unit_type == UnitType.MELEE

    def is_ranged(self) -> bool:
        return self.unit_type in (UnitType.RANGED, UnitType.SIEGE)

    def is_probably_siege_unit(self) -> bool:
        return self.unit_type == UnitType.SIEGE

    def is_civilian(self) -> bool:
        return self.unit_type == UnitType.CIVILIAN

    def is_military(self) -> bool:
        return not self.is_civilian()

    def is_land_unit(self) -> bool:
        return self.domain == "land"

    def is_water_unit(self) -> bool:
        return self.domain == "water"

    # --- abilities --------------------------------------------------------
    def has_unique(self, tag: Union[UniqueType, str]) -> bool:
        return _tag(tag) in self.uniques

    def is_great_person(self) -> bool:
        return self.has_unique(UniqueType.GREAT_PERSON)

    def has_movement(self) -> bool:
        return (self.current_movement or 0.0) > 0

    def force_value(self) -> float:
        """Contribution of this unit to its faction's military might."""
        if self.is_civilian():
            return 0.0
        return float(max(self.strength, self.ranged_strength)) ** 1.5


@dataclass(eq=False)
class City:
    id: str
    name: str
    owner: str
    health: int = 200
    max_health: int = 200
    strength: int = 10
    position: Optional[Position] = None

    def __post_init__(self) -> None:
        if self.position is not None:
            self.position = (int(self.position[0]), int(self.position[1]))


Combatant = Union[Unit, City]


@dataclass(eq=False)
class Tile:
    position: Position
    terrain: str = "grassland"
    is_land: Optional[bool] = None
    movement_cost: Optional[float] = None
    terrain_damage: int = 0
    military_unit: Optional[Unit] = None
    civilian_unit: Optional[Unit] = None
    city: Optional[City] = None

    def __post_init__(self) -> None:
        self.position = (int(self.position[0]), int(self.position[1]))
        land, cost = TERRAIN_DEFAULTS.get(self.terrain, (True, 1.0))
        if self.is_land is None:
            self.is_land = land
        if self.movement_cost is None:
            self.movement_cost = cost

    @property
    def is_water(self) -> bool:
        return not self.is_land

    def is_city_center(self) -> bool:
        return self.city is not None

    def is_occupied(self) -> bool:
        return self.military_unit is not None or self.civilian_unit is not None or self.city is not None


@dataclass(frozen=True, eq=False)
class AttackableTile:
    """One reachable, attackable tile plus the cost of getting there."""

    tile_to_attack_from: Tile
    tile_to_attack: Tile
    movement_left_after_moving_to_attack_tile: float
    combatant: Optional[Combatant] = None


def _build_record(cls, data: Dict[str, Any]):
    """Coerce a plain mapping into ``cls``, ignoring unknown keys."""
    names = {f.name for f in fields(cls)}
    kwargs = {k: v for k, v in data.items() if k in names}
    if "position" in names and "position" not in kwargs and "q" in data and "r" in data:
        kwargs["position"] = (int(data["q"]), int(data["r"]))
    if "uniques" in kwargs:
        kwargs["uniques"] = set(kwargs["uniques"] or [])
    if "at_war_with" in kwargs:
        kwargs["at_war_with"] = set(kwargs["at_war_with"] or [])
    if "unit_type" in kwargs:
        try:
            kwargs["unit_type"] = UnitType(str(kwargs["unit_type"]).lower())
        except ValueError:
            valid = ", ".join(t.value for t in UnitType)
            raise ValueError(f"Unknown unit type '{kwargs['unit_type']}'. Valid types: {valid}") from None
    return cls(**kwargs)


@dataclass
class GameState:
    turn: int = 1
    factions: Dict[str, Faction] = field(default_factory=dict)
    tiles: Dict[Position, Tile] = field(default_factory=dict)
    units: Dict[str, Unit] = field(default_factory=dict)
    cities: Dict[str, City] = field(default_factory=dict)
    order_log: List[Dict[str, Any]] = field(default_factory=list)

    # --- lookups ----------------------------------------------------------
    def tile(self, position: Position) -> Optional[Tile]:
        return self.tiles.get((int(position[0]), int(position[1])))

    def tile_of(self, item: Combatant) -> Tile:
        if item.position is None or item.position not in self.tiles:
            raise ValueError(f"{item.name} ({item.id}) is not placed on the map")
        return self.tiles[item.position]

    def tiles_in_distance(self, position: Position, radius: int) -> List[Tile]:
        """Existing tiles within ``radius`` of ``position``, nearest first."""
        return [self.tiles[p] for p in hexes_in_distance(position, radius) if p in self.tiles]

    def faction(self, name: str) -> Faction:
        found = self.factions.get(name)
        return found if found is not None else Faction(name=name)

    def is_at_war(self, a: str, b: str) -> bool:
        return self.faction(a).is_at_war_with(self.faction(b))

    def units_of(self, faction_name: str) -> List[Unit]:
        return [u for u in self.units.values() if u.owner == faction_name]

    def force_ranking(self, faction_name: str) -> float:
        return sum(u.force_value() for u in self.units_of(faction_name))

    def combatant_of_tile(self, tile: Tile) -> Optional[Combatant]:
        if tile.city is not None:
            return tile.city
        if tile.military_unit is not None:
            return tile.military_unit
        return tile.civilian_unit

    # --- mutation (used by the executors and loaders only) ------------------
    def add_tile(self, tile: Tile) -> Tile:
        self.tiles[tile.position] = tile
        return tile

    def add_city(self, city: City) -> City:
        tile = self.tile_of(city)
        tile.city = city
        self.cities[city.id] = city
        self.factions.setdefault(city.owner, Faction(name=city.owner))
        return city

    def place_unit(self, unit: Unit, position: Position) -> None:
        tile = self.tile(position)
        if tile is None:
            raise ValueError(f"No tile at {position} for {unit.name} ({unit.id})")
        if unit.is_civilian():
            tile.civilian_unit = unit
        else:
            tile.military_unit = unit
        unit.position = tile.position
        self.units[unit.id] = unit
        self.factions.setdefault(unit.owner, Faction(name=unit.owner))

    def remove_unit(self, unit: Unit) -> None:
        tile = self.tile(unit.position) if unit.position is not None else None
        if tile is not None:
            if tile.military_unit is unit:
                tile.military_unit = None
            if tile.civilian_unit is unit:
                tile.civilian_unit = None
        unit.position = None
        self.units.pop(unit.id, None)

    def move_unit(self, unit: Unit, position: Position) -> None:
        self.remove_unit(unit)
        self.place_unit(unit, position)

    # --- serialization ----------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        def _unit(u: Unit) -> Dict[str, Any]:
            d = asdict(u)
            d["unit_type"] = u.unit_type.value
            d["uniques"] = sorted(u.uniques)
            d.pop("position")
            d["q"], d["r"] = u.position if u.position is not None else (None, None)
            return d

        def _city(c: City) -> Dict[str, Any]:
            d = asdict(c)
            d.pop("position")
            d["q"], d["r"] = c.position if c.position is not None else (None, None)
            return d

        return {
            "turn": self.turn,
            "factions": [{"name": f.name, "at_war_with": sorted(f.at_war_with)} for f in self.factions.values()],
            "tiles": [
                {
                    "q": t.position[0],
                    "r": t.position[1],
                    "terrain": t.terrain,
                    "is_land": t.is_land,
                    "movement_cost": t.movement_cost,
                    "terrain_damage": t.terrain_damage,
                }
                for t in self.tiles.values()
            ],
            "cities": [_city(c) for c in self.cities.values()],
            "units": [_unit(u) for u in self.units.values()],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """Build a state from a plain mapping (see ``tactics_ai.state.loaders``).

        ``map`` may describe a ``width`` x ``height`` parallelogram of
        ``default_terrain``; entries in ``tiles`` then override single hexes.
        """
        state = cls(turn=int(data.get("turn", 1)))
        for raw in data.get("factions") or []:
            faction = _build_record(Faction, raw)
            state.factions[faction.name] = faction

        grid = data.get("map") or {}
        if grid:
            terrain = grid.get("default_terrain", "grassland")
            for r in range(int(grid.get("height", 0))):
                for q in range(int(grid.get("width", 0))):
                    state.add_tile(Tile(position=(q, r), terrain=terrain))
        for raw in data.get("tiles") or []:
            state.add_tile(_build_tile(raw))

        for raw in data.get("cities") or []:
            state.add_city(_build_record(City, raw))
        for raw in data.get("units") or []:
            unit = _build_record(Unit, raw)
            if unit.position is None:
                raise ValueError(f"Unit {unit.id} has no position")
            state.place_unit(unit, unit.position)
        return state


def _build_tile(raw: Dict[str, Any]) -> Tile:
    data = dict(raw)
    if "position" not in data:
        data["position"] = (int(data.pop("q")), int(data.pop("r")))
    return _build_record(Tile, data)


__all__ = [
    "UnitType",
    "UniqueType",
    "TERRAIN_DEFAULTS",
    "Faction",
    "Unit",
    "City",
    "Combatant",
    "Tile",
    "AttackableTile",
    "GameState",
]
