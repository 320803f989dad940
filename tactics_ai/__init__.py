"""Tactics AI: score, pick and carry out a unit's attack for the turn."""

from importlib import import_module
from typing import Any

__version__ = "0.1.0"
__all__ = [
    "BattleContext",
    "ScoringPolicy",
    "AttackWeights",
    "load_weights",
    "Unit",
    "City",
    "Tile",
    "Faction",
    "UnitType",
    "UniqueType",
    "AttackableTile",
    "GameState",
    "score_attack",
    "choose_attack_target",
    "min_attack_value_for_caution",
    "AttackOrchestrator",
    "RepositionAdvisor",
    "automate_faction_turn",
    "load_scenario",
    "TargetingContractError",
    "MovementError",
    "__version__",
]

_EXPORTS = {
    "BattleContext": ("context", "BattleContext"),
    "ScoringPolicy": ("value.weights", "ScoringPolicy"),
    "AttackWeights": ("value.weights", "AttackWeights"),
    "load_weights": ("value.weights", "load_weights"),
    "Unit": ("game_models", "Unit"),
    "City": ("game_models", "City"),
    "Tile": ("game_models", "Tile"),
    "Faction": ("game_models", "Faction"),
    "UnitType": ("game_models", "UnitType"),
    "UniqueType": ("game_models", "UniqueType"),
    "AttackableTile": ("game_models", "AttackableTile"),
    "GameState": ("game_models", "GameState"),
    "score_attack": ("scoring", "score_attack"),
    "choose_attack_target": ("selection", "choose_attack_target"),
    "min_attack_value_for_caution": ("selection", "min_attack_value_for_caution"),
    "AttackOrchestrator": ("battle_helper", "AttackOrchestrator"),
    "RepositionAdvisor": ("battle_helper", "RepositionAdvisor"),
    "automate_faction_turn": ("turn_driver", "automate_faction_turn"),
    "load_scenario": ("state.loaders", "load_scenario"),
    "TargetingContractError": ("errors", "TargetingContractError"),
    "MovementError": ("errors", "MovementError"),
}


def __getattr__(name: str) -> Any:
    if name in _EXPORTS:
        module_name, attr_name = _EXPORTS[name]
        module = import_module(f".{module_name}", __name__)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def __dir__() -> list[str]:
    return sorted(set(list(globals().keys()) + list(__all__)))
