"""Exceptions raised by the target-selection engine."""
from __future__ import annotations


class TargetingContractError(ValueError):
    """A candidate was scored although its target tile holds no combatant."""


class MovementError(RuntimeError):
    """The movement executor could not carry out an order."""


__all__ = ["TargetingContractError", "MovementError"]
