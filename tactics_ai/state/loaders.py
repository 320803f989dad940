"""Utilities for loading scenario files into a `GameState`."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

import yaml

from ..game_models import GameState


PathLike = Union[str, Path]


def load_scenario(path: PathLike) -> GameState:
    """Load a :class:`GameState` from a YAML or JSON scenario file.

    Relative paths are resolved from the current working directory. The
    payload follows the layout read by :meth:`GameState.from_dict`: ``factions``,
    a ``map`` block and/or a ``tiles`` list, ``cities`` and ``units``.
    """

    candidate = Path(path)
    if not candidate.exists():
        raise FileNotFoundError(f"Scenario not found: {path}")
    with candidate.open("r", encoding="utf-8") as handle:
        if candidate.suffix.lower() == ".json":
            payload: Any = json.load(handle)
        else:
            payload = yaml.safe_load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"Scenario {path} must contain a mapping at the top level")
    return GameState.from_dict(payload)


def save_scenario(state: GameState, path: PathLike) -> None:
    """Write ``state`` back out; the format follows the file extension."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        if target.suffix.lower() == ".json":
            handle.write(state.to_json())
        else:
            yaml.safe_dump(state.to_dict(), handle, sort_keys=False)


__all__ = ["load_scenario", "save_scenario"]
